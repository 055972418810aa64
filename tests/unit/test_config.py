"""Tests for the configuration loader."""

import tempfile
from pathlib import Path

import pytest
from aws_cdk import RemovalPolicy

from frontend_deploy.config import Config, CustomDomain, Minimal, SiteConfig
from frontend_deploy.errors import ConfigurationError


def _load(yaml_content: str) -> Config:
  with tempfile.NamedTemporaryFile(mode="w", suffix=".yaml", delete=False) as f:
    f.write(yaml_content)
    f.flush()

    return Config.from_yaml(Path(f.name))


class TestSiteConfig:
  """Test SiteConfig dataclass."""

  def test_default_values(self) -> None:
    """Verify default values are set correctly."""
    config = SiteConfig(name="preview", asset_path="/build/dist")

    assert config.variant == Minimal()
    assert config.domain_name is None
    assert config.owner is None
    assert config.region == "us-east-1"
    assert config.removal_policy == RemovalPolicy.RETAIN
    assert config.stack_name == "FrontendDeploy-preview"

  def test_domain_name_from_variant(self) -> None:
    config = SiteConfig(
      name="gyuri",
      asset_path="/build/dist",
      variant=CustomDomain(domain_name="gyuri.org"),
    )

    assert config.domain_name == "gyuri.org"


class TestConfigFromYaml:
  """Test Config.from_yaml loading."""

  def test_load_simple_config(self) -> None:
    """Test loading a minimal site."""
    config = _load(
      """
sites:
  - name: preview
    asset_path: /build/dist
"""
    )

    assert len(config.sites) == 1
    assert config.sites[0].name == "preview"
    assert config.sites[0].asset_path == "/build/dist"
    assert config.sites[0].variant == Minimal()

  def test_domain_selects_custom_domain_variant(self) -> None:
    config = _load(
      """
sites:
  - name: gyuri
    asset_path: /build/dist
    domain: gyuri.org
    owner: Gyuri
"""
    )

    assert config.sites[0].variant == CustomDomain(domain_name="gyuri.org")
    assert config.sites[0].owner == "Gyuri"

  def test_relative_asset_path_resolved_against_config_dir(self, tmp_path: Path) -> None:
    path = tmp_path / "sites.yaml"
    path.write_text("sites:\n  - name: preview\n    asset_path: frontend/dist\n")

    config = Config.from_yaml(path)

    assert config.sites[0].asset_path == str(tmp_path / "frontend" / "dist")

  def test_site_overrides_defaults(self) -> None:
    """Test that site-specific config overrides defaults."""
    config = _load(
      """
defaults:
  region: eu-west-1
  removal_policy: destroy

sites:
  - name: one
    asset_path: /dist
  - name: two
    asset_path: /dist
    region: us-east-1
"""
    )

    assert config.sites[0].region == "eu-west-1"
    assert config.sites[0].removal_policy == RemovalPolicy.DESTROY
    assert config.sites[1].region == "us-east-1"

  def test_get_site(self) -> None:
    config = _load(
      """
sites:
  - name: one
    asset_path: /dist
  - name: two
    asset_path: /dist
"""
    )

    assert config.get_site("two").name == "two"
    with pytest.raises(ConfigurationError):
      config.get_site("three")

  def test_missing_sites(self) -> None:
    with pytest.raises(ConfigurationError) as exc_info:
      _load("defaults:\n  region: us-east-1\n")

    assert exc_info.value.field == "sites"

  def test_missing_asset_path(self) -> None:
    with pytest.raises(ConfigurationError) as exc_info:
      _load("sites:\n  - name: preview\n")

    assert exc_info.value.field == "sites[0].asset_path"

  def test_unknown_removal_policy(self) -> None:
    with pytest.raises(ConfigurationError):
      _load("sites:\n  - name: preview\n    asset_path: /dist\n    removal_policy: keep\n")

  def test_duplicate_site_names(self) -> None:
    with pytest.raises(ConfigurationError):
      _load(
        """
sites:
  - name: preview
    asset_path: /dist
  - name: preview
    asset_path: /other
"""
      )

  def test_empty_defaults(self) -> None:
    config = _load("defaults:\nsites:\n  - name: preview\n    asset_path: /dist\n")

    assert config.sites[0].name == "preview"

  def test_defaults_not_a_mapping(self) -> None:
    with pytest.raises(ConfigurationError) as exc_info:
      _load("defaults: [1, 2]\nsites:\n  - name: preview\n    asset_path: /dist\n")

    assert exc_info.value.field == "defaults"

  def test_site_not_a_mapping(self) -> None:
    with pytest.raises(ConfigurationError) as exc_info:
      _load("sites:\n  - just-a-name\n")

    assert exc_info.value.field == "sites[0]"

  def test_asset_path_not_a_string(self) -> None:
    with pytest.raises(ConfigurationError) as exc_info:
      _load("sites:\n  - name: preview\n    asset_path: 42\n")

    assert exc_info.value.field == "sites[0].asset_path"

  def test_domain_not_a_string(self) -> None:
    with pytest.raises(ConfigurationError) as exc_info:
      _load("sites:\n  - name: preview\n    asset_path: /dist\n    domain: 42\n")

    assert exc_info.value.field == "sites[0].domain"


class TestCustomDomain:
  """Domain names are stored in one canonical spelling."""

  def test_lowercases_and_strips_trailing_dot(self) -> None:
    assert CustomDomain(domain_name="Example.ORG.") == CustomDomain(domain_name="example.org")

  def test_site_domain_name_is_normalized(self) -> None:
    config = _load("sites:\n  - name: gyuri\n    asset_path: /dist\n    domain: Gyuri.Org\n")

    assert config.sites[0].domain_name == "gyuri.org"
