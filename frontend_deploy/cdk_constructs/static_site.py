"""Composite construct rendering a site topology into CDK resources."""

from typing import Any

from aws_cdk import CfnOutput, RemovalPolicy, Stack
from constructs import Construct

from frontend_deploy.errors import TopologyReferenceError
from frontend_deploy.topology.exporter import ExportedOutput, export_outputs
from frontend_deploy.topology.models import (
  AliasRecord,
  Certificate,
  Distributor,
  Entity,
  HostedZone,
  OriginStore,
  Topology,
)

from .certificate import DnsValidatedCertificate
from .distribution import CloudFrontDistribution
from .dns import CloudFrontAlias, DnsZone
from .storage import StorageBucket


class StaticSiteConstruct(Construct):
  """Complete static website infrastructure.

  Creates, in dependency order:
  - S3 website bucket with the build output deployed into it
  - (Custom domain) Route 53 hosted zone
  - (Custom domain) ACM certificate for the apex and wildcard, DNS validated
  - CloudFront distribution redirecting HTTP to HTTPS
  - (Custom domain) apex and www alias records pointing at CloudFront

  and one CfnOutput per published value, exported as ``<stack>-<name>``.
  """

  def __init__(
    self,
    scope: Construct,
    id: str,
    *,
    topology: Topology,
    removal_policy: RemovalPolicy = RemovalPolicy.RETAIN,
    export_prefix: str | None = None,
  ) -> None:
    super().__init__(scope, id)

    self.topology = topology
    self._removal_policy = removal_policy
    self.resources: dict[str, Any] = {}

    for entity in topology.entities:
      self.resources[entity.id] = self._render(entity)

    resolved = {
      entity_id: resource.resolved_value for entity_id, resource in self.resources.items()
    }
    prefix = export_prefix or Stack.of(self).stack_name
    self.outputs = export_outputs(topology, resolved, export_prefix=prefix)
    for output in self.outputs:
      self._add_output(output)

  @property
  def bucket(self) -> StorageBucket:
    return self.resources[self.topology.origin_store.id]

  @property
  def distribution(self) -> CloudFrontDistribution:
    return self.resources[self.topology.distributor.id]

  def _resource(self, entity_id: str) -> Any:
    # Entities arrive in dependency order, so references are already built
    if entity_id not in self.resources:
      raise TopologyReferenceError(entity_id, "referenced before it was rendered")
    return self.resources[entity_id]

  def _render(self, entity: Entity) -> Any:
    if isinstance(entity, OriginStore):
      return StorageBucket(
        self, entity.id, store=entity, removal_policy=self._removal_policy
      )
    if isinstance(entity, HostedZone):
      return DnsZone(self, entity.id, zone=entity)
    if isinstance(entity, Certificate):
      return DnsValidatedCertificate(
        self,
        entity.id,
        certificate=entity,
        hosted_zone=self._resource(entity.zone_ref).hosted_zone,
      )
    if isinstance(entity, Distributor):
      certificate = None
      if entity.certificate_ref is not None:
        certificate = self._resource(entity.certificate_ref).certificate
      return CloudFrontDistribution(
        self,
        entity.id,
        distributor=entity,
        bucket=self._resource(entity.origin_ref).bucket,
        certificate=certificate,
      )
    if isinstance(entity, AliasRecord):
      return CloudFrontAlias(
        self,
        entity.id,
        alias=entity,
        hosted_zone=self._resource(entity.zone_ref).hosted_zone,
        distribution=self._resource(entity.target_ref).distribution,
      )
    raise TopologyReferenceError(str(getattr(entity, "id", entity)), "unknown entity type")

  def _add_output(self, output: ExportedOutput) -> None:
    cfn_output = CfnOutput(
      self,
      output.name,
      value=output.value,
      description=output.description,
      export_name=output.export_name,
    )
    # Stable output keys for consumers reading the stack outputs
    cfn_output.override_logical_id(output.name)
