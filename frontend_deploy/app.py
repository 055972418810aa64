#!/usr/bin/env python3
"""CDK application entry point for static site deployments."""

import logging
import os
from pathlib import Path

import aws_cdk as cdk
import boto3

from frontend_deploy.config import Config
from frontend_deploy.errors import ConfigurationError
from frontend_deploy.stacks import StaticSiteStack
from frontend_deploy.topology import assemble_topology

logger = logging.getLogger(__name__)

# CloudFront only accepts ACM certificates issued in us-east-1.
CERTIFICATE_REGION = "us-east-1"


def get_account_id() -> str:
  """Get AWS account ID from current credentials."""
  account = os.environ.get("CDK_DEFAULT_ACCOUNT")
  if account:
    return account
  sts = boto3.client("sts")
  return str(sts.get_caller_identity()["Account"])


def build_app(
  app: cdk.App,
  config: Config,
  account_id: str | None = None,
) -> list[StaticSiteStack]:
  """Add one stack per configured site to ``app``.

  Every topology is assembled before the first stack is created, so a bad
  site aborts the whole synthesis.
  """
  topologies = []
  for site in config.sites:
    if site.domain_name and site.region != CERTIFICATE_REGION:
      raise ConfigurationError(
        f"{site.name}.region",
        f"custom domains must be deployed to {CERTIFICATE_REGION}, got {site.region}",
      )
    topologies.append((site, assemble_topology(site)))

  stacks = []
  for site, topology in topologies:
    logger.info("Adding stack %s", site.stack_name)
    stacks.append(
      StaticSiteStack(
        app,
        site.stack_name,
        site_config=site,
        topology=topology,
        env=cdk.Environment(account=account_id, region=site.region),
        description=f"Static site {site.domain_name or site.name} behind CloudFront",
      )
    )
  return stacks


def main() -> None:
  """Create CDK app with a stack for each configured site."""
  logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(levelname)s - %(message)s")
  app = cdk.App()

  config_path = app.node.try_get_context("config") or "sites.yaml"
  config = Config.from_yaml(Path(config_path))

  build_app(app, config, account_id=get_account_id())
  app.synth()


if __name__ == "__main__":
  main()
