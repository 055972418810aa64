"""Map resolved resource values to the site's published outputs."""

import logging
from collections.abc import Mapping
from dataclasses import dataclass

from frontend_deploy.errors import MissingResolvedValueError, OutputCollisionError
from frontend_deploy.topology.models import Role, Topology

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class OutputSpec:
  role: Role
  name: str
  export_suffix: str
  description: str


# One output per role; outputs for roles absent from a topology are skipped.
OUTPUT_TABLE: tuple[OutputSpec, ...] = (
  OutputSpec(Role.ORIGIN_STORE, "StaticSiteUrl", "StaticSiteUrl", "URL of the static site"),
  OutputSpec(Role.DISTRIBUTOR, "FeUrl", "FE-Url", "FE URL"),
  OutputSpec(Role.HOSTED_ZONE, "HostedZoneId", "HostedZoneId", "Hosted Zone Name"),
  OutputSpec(Role.CERTIFICATE, "CertificateArn", "CertificateArn", "Certificate ARN"),
  OutputSpec(
    Role.APEX_ALIAS,
    "CloudFrontRedirectOutput",
    "CloudFrontRedirectOutput",
    "CloudFront Redirect",
  ),
  OutputSpec(
    Role.WWW_ALIAS,
    "CloudFrontWWWRedirectOutput",
    "CloudFrontWWWRedirectOutput",
    "CloudFront WWW Redirect",
  ),
)


@dataclass(frozen=True)
class ExportedOutput:
  """A named value published for consumers outside the deployment."""

  name: str
  value: str
  description: str
  export_name: str | None = None


def expected_outputs(topology: Topology) -> dict[str, str]:
  """Output name to entity id for every output the topology publishes."""
  outputs: dict[str, str] = {}
  for spec in OUTPUT_TABLE:
    entity = topology.by_role(spec.role)
    if entity is None:
      continue
    if spec.name in outputs:
      raise OutputCollisionError(spec.name)
    outputs[spec.name] = entity.id
  return outputs


def expected_output_names(topology: Topology) -> tuple[str, ...]:
  return tuple(expected_outputs(topology))


def export_outputs(
  topology: Topology,
  resolved: Mapping[str, str],
  export_prefix: str | None = None,
) -> list[ExportedOutput]:
  """Build the published outputs from values resolved by the provisioning engine.

  Args:
    topology: the assembled site.
    resolved: live value per entity id.
    export_prefix: prefix for cross-stack export names, usually the stack
      name. No export names are set when omitted.

  Raises:
    MissingResolvedValueError: an entity of the topology has no value.
    OutputCollisionError: two outputs would share a name or export name.
  """
  outputs: list[ExportedOutput] = []
  export_names: set[str] = set()

  for spec in OUTPUT_TABLE:
    entity = topology.by_role(spec.role)
    if entity is None:
      continue
    value = resolved.get(entity.id)
    if not value:
      raise MissingResolvedValueError(entity.id)

    export_name = f"{export_prefix}-{spec.export_suffix}" if export_prefix else None
    if any(o.name == spec.name for o in outputs):
      raise OutputCollisionError(spec.name)
    if export_name is not None:
      if export_name in export_names:
        raise OutputCollisionError(export_name)
      export_names.add(export_name)

    logger.debug("Exporting %s from %s", spec.name, entity.id)
    outputs.append(
      ExportedOutput(
        name=spec.name,
        value=value,
        description=spec.description,
        export_name=export_name,
      )
    )
  return outputs
