"""Assemble the resource topology for a static site."""

import logging
import re

from frontend_deploy.config import CustomDomain, Minimal, SiteConfig
from frontend_deploy.errors import ConfigurationError, TopologyReferenceError
from frontend_deploy.topology.models import (
  ROLE_ORDER,
  AliasRecord,
  Certificate,
  Distributor,
  Entity,
  HostedZone,
  OriginStore,
  Role,
  Topology,
)

logger = logging.getLogger(__name__)

# Entity ids double as CDK construct ids.
STORE_ID = "StaticSiteBucket"
DISTRIBUTOR_ID = "StaticSiteDistribution"
ZONE_ID = "DomainHostedZone"
CERTIFICATE_ID = "HttpsCertificate"
APEX_ALIAS_ID = "CloudFrontRedirect"
WWW_ALIAS_ID = "CloudFrontWWWRedirect"

_LABEL = re.compile(r"^(?!-)[a-z0-9-]{1,63}(?<!-)$")


def is_valid_domain_name(name: str) -> bool:
  """Check ``name`` is a fully qualified hostname with at least two labels."""
  if not name or len(name) > 253:
    return False
  labels = name.lower().rstrip(".").split(".")
  if len(labels) < 2:
    return False
  return all(_LABEL.match(label) for label in labels)


def hostname_covered(pattern: str, hostname: str) -> bool:
  """Whether a certificate name (possibly ``*.`` wildcard) covers ``hostname``."""
  if pattern == hostname:
    return True
  if pattern.startswith("*."):
    head, _, tail = hostname.partition(".")
    return bool(head) and tail == pattern[2:]
  return False


def assemble_topology(config: SiteConfig) -> Topology:
  """Build every entity the site needs, with references resolved.

  Args:
    config: the site to deploy.

  Returns:
    The topology, entities ordered so each one follows everything it
    references.

  Raises:
    ConfigurationError: asset path is empty or the domain is not a valid
      DNS name.
    TopologyReferenceError: the assembled entities break an invariant.
  """
  if not config.asset_path:
    raise ConfigurationError("asset_path", "must not be empty")

  store = OriginStore(id=STORE_ID, asset_path=config.asset_path)
  variant = config.variant
  entities: list[Entity] = [store]

  if isinstance(variant, Minimal):
    entities.append(Distributor(id=DISTRIBUTOR_ID, origin_ref=store.id))
  elif isinstance(variant, CustomDomain):
    domain = variant.domain_name
    if not isinstance(domain, str) or not is_valid_domain_name(domain):
      raise ConfigurationError("domain_name", f"{domain!r} is not a valid DNS name")

    zone = HostedZone(id=ZONE_ID, zone_name=domain)
    certificate = Certificate(
      id=CERTIFICATE_ID,
      primary_domain=domain,
      zone_ref=zone.id,
      alternate_names=frozenset({f"*.{domain}"}),
    )
    distributor = Distributor(
      id=DISTRIBUTOR_ID,
      origin_ref=store.id,
      domain_names=frozenset({domain, f"*.{domain}"}),
      certificate_ref=certificate.id,
    )
    entities += [
      zone,
      certificate,
      distributor,
      AliasRecord(
        id=APEX_ALIAS_ID,
        role=Role.APEX_ALIAS,
        record_name=domain,
        zone_ref=zone.id,
        target_ref=distributor.id,
      ),
      AliasRecord(
        id=WWW_ALIAS_ID,
        role=Role.WWW_ALIAS,
        record_name=f"www.{domain}",
        zone_ref=zone.id,
        target_ref=distributor.id,
      ),
    ]
  else:
    raise ConfigurationError("variant", f"unknown site variant {variant!r}")

  topology = Topology(variant=variant, entities=dependency_order(entities))
  check_topology(topology)
  logger.info(
    "Assembled %s topology for %s with %d entities",
    type(variant).__name__,
    config.name,
    len(topology.entities),
  )
  return topology


def dependency_order(entities: list[Entity]) -> tuple[Entity, ...]:
  """Order entities so every reference points backwards.

  Raises:
    TopologyReferenceError: duplicate ids, a dangling reference or a cycle.
  """
  by_id: dict[str, Entity] = {}
  for entity in entities:
    if entity.id in by_id:
      raise TopologyReferenceError(entity.id, "duplicate entity id")
    by_id[entity.id] = entity

  pending: dict[str, set[str]] = {}
  for entity in entities:
    for ref in entity.references:
      if ref not in by_id:
        raise TopologyReferenceError(entity.id, f"references unknown entity {ref!r}")
    pending[entity.id] = set(entity.references)

  def rank(entity_id: str) -> tuple[int, str]:
    return ROLE_ORDER.index(by_id[entity_id].role), entity_id

  ordered: list[Entity] = []
  while pending:
    ready = sorted((eid for eid, refs in pending.items() if not refs), key=rank)
    if not ready:
      raise TopologyReferenceError(min(pending), "reference cycle")
    for entity_id in ready:
      del pending[entity_id]
      ordered.append(by_id[entity_id])
    for refs in pending.values():
      refs.difference_update(ready)
  return tuple(ordered)


def check_topology(topology: Topology) -> None:
  """Raise TopologyReferenceError if the topology breaks a site invariant."""
  seen: set[str] = set()
  for entity in topology.entities:
    for ref in entity.references:
      if ref not in seen:
        raise TopologyReferenceError(entity.id, f"reference to {ref!r} is not resolved")
    seen.add(entity.id)

  stores = topology.of_type(OriginStore)
  distributors = topology.of_type(Distributor)
  if len(stores) != 1 or len(distributors) != 1:
    raise TopologyReferenceError(
      "topology", "expected exactly one origin store and one distributor"
    )
  distributor = topology.distributor

  if isinstance(topology.variant, Minimal):
    if distributor.certificate_ref is not None or distributor.domain_names:
      raise TopologyReferenceError(distributor.id, "minimal site must not bind domains")
    extra = topology.of_type(HostedZone) + topology.of_type(Certificate)
    extra += topology.of_type(AliasRecord)
    if extra:
      raise TopologyReferenceError(extra[0].id, "not part of a minimal site")
    return

  if distributor.certificate_ref is None:
    raise TopologyReferenceError(distributor.id, "custom domain requires a certificate")
  certificate = topology.get(distributor.certificate_ref)
  if not isinstance(certificate, Certificate):
    raise TopologyReferenceError(distributor.id, "certificate_ref is not a certificate")

  domain = certificate.primary_domain
  if distributor.domain_names != {domain, f"*.{domain}"}:
    raise TopologyReferenceError(
      distributor.id, f"domain names {sorted(distributor.domain_names)} do not match {domain}"
    )

  aliases = topology.of_type(AliasRecord)
  if len(topology.of_type(HostedZone)) != 1 or sorted(a.role.value for a in aliases) != [
    Role.APEX_ALIAS.value,
    Role.WWW_ALIAS.value,
  ]:
    raise TopologyReferenceError(
      "topology", "custom domain needs one hosted zone and apex and www aliases"
    )

  for alias in aliases:
    target = topology.get(alias.target_ref)
    if not isinstance(target, Distributor):
      raise TopologyReferenceError(alias.id, "alias target is not a distributor")
    if target.certificate_ref is None:
      raise TopologyReferenceError(alias.id, "alias target serves no certificate")
    target_certificate = topology.get(target.certificate_ref)
    if not isinstance(target_certificate, Certificate):
      raise TopologyReferenceError(alias.id, "alias target certificate is missing")
    hostname = alias.record_name
    if not any(hostname_covered(n, hostname) for n in target.domain_names):
      raise TopologyReferenceError(alias.id, f"{hostname} is not served by {target.id}")
    if not any(hostname_covered(n, hostname) for n in target_certificate.names):
      raise TopologyReferenceError(alias.id, f"{hostname} is not covered by the certificate")
