"""Pytest fixtures for topology and CDK construct tests."""

from pathlib import Path

import aws_cdk as cdk
import pytest

from frontend_deploy.config import CustomDomain, SiteConfig


@pytest.fixture
def app() -> cdk.App:
  """Create a CDK App for testing."""
  return cdk.App()


@pytest.fixture
def stack(app: cdk.App) -> cdk.Stack:
  """Create a CDK Stack for testing."""
  return cdk.Stack(app, "TestStack", env=cdk.Environment(region="us-east-1"))


@pytest.fixture
def asset_dir(tmp_path: Path) -> Path:
  """A build output directory with a single page."""
  (tmp_path / "index.html").write_text("<html><body>hello</body></html>")
  return tmp_path


@pytest.fixture
def minimal_site(asset_dir: Path) -> SiteConfig:
  return SiteConfig(name="preview", asset_path=str(asset_dir))


@pytest.fixture
def domain_site(asset_dir: Path) -> SiteConfig:
  return SiteConfig(
    name="gyuri",
    asset_path=str(asset_dir),
    variant=CustomDomain(domain_name="example.org"),
  )
