"""Immutable resource descriptors making up a site topology."""

from dataclasses import dataclass, field
from enum import Enum
from typing import cast

from frontend_deploy.config import Variant


class Role(Enum):
  """What an entity is for within the site."""

  ORIGIN_STORE = "origin_store"
  HOSTED_ZONE = "hosted_zone"
  CERTIFICATE = "certificate"
  DISTRIBUTOR = "distributor"
  APEX_ALIAS = "apex_alias"
  WWW_ALIAS = "www_alias"


# Tie-break order when several entities are ready at the same time.
ROLE_ORDER = tuple(Role)


class ViewerPolicy(Enum):
  REDIRECT_TO_HTTPS = "redirect-to-https"


class ValidationMethod(Enum):
  DNS = "DNS"


@dataclass(frozen=True)
class OriginStore:
  """Public bucket holding the built assets."""

  id: str
  asset_path: str
  index_document: str = "index.html"
  public_read: bool = True

  @property
  def role(self) -> Role:
    return Role.ORIGIN_STORE

  @property
  def references(self) -> tuple[str, ...]:
    return ()


@dataclass(frozen=True)
class HostedZone:
  id: str
  zone_name: str

  @property
  def role(self) -> Role:
    return Role.HOSTED_ZONE

  @property
  def references(self) -> tuple[str, ...]:
    return ()


@dataclass(frozen=True)
class Certificate:
  """TLS certificate validated through DNS records in its zone."""

  id: str
  primary_domain: str
  zone_ref: str
  alternate_names: frozenset[str] = field(default_factory=frozenset)
  validation_method: ValidationMethod = ValidationMethod.DNS

  @property
  def role(self) -> Role:
    return Role.CERTIFICATE

  @property
  def references(self) -> tuple[str, ...]:
    return (self.zone_ref,)

  @property
  def names(self) -> frozenset[str]:
    return self.alternate_names | {self.primary_domain}


@dataclass(frozen=True)
class Distributor:
  """CloudFront distribution fronting the origin store."""

  id: str
  origin_ref: str
  viewer_policy: ViewerPolicy = ViewerPolicy.REDIRECT_TO_HTTPS
  domain_names: frozenset[str] = field(default_factory=frozenset)
  certificate_ref: str | None = None

  @property
  def role(self) -> Role:
    return Role.DISTRIBUTOR

  @property
  def references(self) -> tuple[str, ...]:
    if self.certificate_ref is None:
      return (self.origin_ref,)
    return (self.origin_ref, self.certificate_ref)


@dataclass(frozen=True)
class AliasRecord:
  """DNS alias pointing one hostname at the distributor."""

  id: str
  role: Role
  record_name: str
  zone_ref: str
  target_ref: str

  @property
  def references(self) -> tuple[str, ...]:
    return (self.zone_ref, self.target_ref)


Entity = OriginStore | HostedZone | Certificate | Distributor | AliasRecord


@dataclass(frozen=True)
class Edge:
  """``source`` holds a reference to ``target``, so ``target`` comes first."""

  source: str
  target: str


@dataclass(frozen=True)
class Topology:
  """Assembled entities, in dependency order, for one deployment."""

  variant: Variant
  entities: tuple[Entity, ...]

  @property
  def edges(self) -> tuple[Edge, ...]:
    return tuple(
      Edge(source=entity.id, target=ref)
      for entity in self.entities
      for ref in entity.references
    )

  @property
  def ids(self) -> tuple[str, ...]:
    return tuple(entity.id for entity in self.entities)

  def get(self, entity_id: str) -> Entity:
    for entity in self.entities:
      if entity.id == entity_id:
        return entity
    raise KeyError(entity_id)

  def by_role(self, role: Role) -> Entity | None:
    return next((e for e in self.entities if e.role == role), None)

  def of_type(self, cls: type) -> list[Entity]:
    return [e for e in self.entities if isinstance(e, cls)]

  @property
  def origin_store(self) -> OriginStore:
    return cast(OriginStore, self.by_role(Role.ORIGIN_STORE))

  @property
  def distributor(self) -> Distributor:
    return cast(Distributor, self.by_role(Role.DISTRIBUTOR))
