"""Configuration loader for static site deployments."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml
from aws_cdk import RemovalPolicy

from frontend_deploy.errors import ConfigurationError

REMOVAL_POLICIES = {
  "retain": RemovalPolicy.RETAIN,
  "destroy": RemovalPolicy.DESTROY,
  "snapshot": RemovalPolicy.SNAPSHOT,
}


@dataclass(frozen=True)
class Minimal:
  """Site served only on the generated CloudFront hostname."""


@dataclass(frozen=True)
class CustomDomain:
  """Site bound to a custom apex domain and its www subdomain."""

  domain_name: str

  def __post_init__(self) -> None:
    # DNS names are case-insensitive; keep one spelling for zone, tags and equality
    if isinstance(self.domain_name, str):
      object.__setattr__(self, "domain_name", self.domain_name.lower().rstrip("."))


Variant = Minimal | CustomDomain


def site_variant(domain_name: str | None) -> Variant:
  """Pick the variant for an optional domain name."""
  if domain_name is None:
    return Minimal()
  return CustomDomain(domain_name=domain_name)


@dataclass
class SiteConfig:
  """Configuration for a single static site."""

  name: str
  asset_path: str
  variant: Variant = field(default_factory=Minimal)
  owner: str | None = None
  region: str = "us-east-1"
  removal_policy: RemovalPolicy = RemovalPolicy.RETAIN

  @property
  def domain_name(self) -> str | None:
    if isinstance(self.variant, CustomDomain):
      return self.variant.domain_name
    return None

  @property
  def stack_name(self) -> str:
    return f"FrontendDeploy-{self.name}"


@dataclass
class Config:
  """Multi-site configuration."""

  sites: list[SiteConfig] = field(default_factory=list)

  def get_site(self, name: str) -> SiteConfig:
    for site in self.sites:
      if site.name == name:
        return site
    raise ConfigurationError("name", f"no site named {name!r}")

  @classmethod
  def from_yaml(cls, path: Path | str = "sites.yaml") -> "Config":
    """Load configuration from YAML file.

    Relative asset paths are resolved against the directory holding the
    configuration file, so the same file works from any working directory.
    """
    path = Path(path)
    with open(path) as f:
      data = yaml.safe_load(f) or {}

    if not isinstance(data, dict) or not isinstance(data.get("sites"), list):
      raise ConfigurationError("sites", "expected a list of sites")

    defaults = data.get("defaults") or {}
    if not isinstance(defaults, dict):
      raise ConfigurationError("defaults", "expected a mapping")
    sites: list[SiteConfig] = []

    for index, site_data in enumerate(data["sites"]):
      if not isinstance(site_data, dict):
        raise ConfigurationError(f"sites[{index}]", "expected a mapping")
      # Merge defaults with site-specific config
      merged = {**defaults, **site_data}
      sites.append(_site_from_mapping(merged, path.parent, index))

    names = [site.name for site in sites]
    duplicates = sorted({name for name in names if names.count(name) > 1})
    if duplicates:
      raise ConfigurationError("name", f"duplicate site names: {duplicates}")

    return cls(sites=sites)


def _site_from_mapping(merged: dict[str, Any], base_dir: Path, index: int) -> SiteConfig:
  for key in ("name", "asset_path"):
    if not merged.get(key):
      raise ConfigurationError(f"sites[{index}].{key}", "is required")
  if not isinstance(merged["asset_path"], str):
    raise ConfigurationError(f"sites[{index}].asset_path", "expected a path string")
  domain = merged.get("domain")
  if domain is not None and not isinstance(domain, str):
    raise ConfigurationError(f"sites[{index}].domain", "expected a domain name string")

  removal_policy_str = str(merged.get("removal_policy", "retain")).lower()
  if removal_policy_str not in REMOVAL_POLICIES:
    raise ConfigurationError(
      f"sites[{index}].removal_policy",
      f"expected one of {sorted(REMOVAL_POLICIES)}, got {removal_policy_str!r}",
    )

  return SiteConfig(
    name=str(merged["name"]),
    asset_path=str(base_dir / merged["asset_path"]),
    variant=site_variant(domain),
    owner=merged.get("owner"),
    region=merged.get("region", "us-east-1"),
    removal_policy=REMOVAL_POLICIES[removal_policy_str],
  )
