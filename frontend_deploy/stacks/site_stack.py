"""CDK stack for a single static website."""

from typing import Any

import aws_cdk as cdk
from constructs import Construct

from frontend_deploy.cdk_constructs import StaticSiteConstruct
from frontend_deploy.config import SiteConfig
from frontend_deploy.topology import Topology, assemble_topology


class StaticSiteStack(cdk.Stack):
  """Stack for a single static website."""

  def __init__(
    self,
    scope: Construct,
    id: str,
    *,
    site_config: SiteConfig,
    topology: Topology | None = None,
    **kwargs: Any,
  ) -> None:
    super().__init__(scope, id, **kwargs)

    self.topology = topology or assemble_topology(site_config)
    self.site = StaticSiteConstruct(
      self,
      "Site",
      topology=self.topology,
      removal_policy=site_config.removal_policy,
      export_prefix=id,
    )

    cdk.Tags.of(self).add("Project", "frontend-deploy")
    cdk.Tags.of(self).add("Site", site_config.name)
    if site_config.owner:
      cdk.Tags.of(self).add("Owner", site_config.owner)
    if site_config.domain_name:
      cdk.Tags.of(self).add("Domain", site_config.domain_name)
