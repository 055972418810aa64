"""Route 53 DNS constructs."""

from aws_cdk import aws_cloudfront as cloudfront
from aws_cdk import aws_route53 as route53
from aws_cdk import aws_route53_targets as targets
from constructs import Construct

from frontend_deploy.topology.models import AliasRecord, HostedZone


class DnsZone(Construct):
  """Route 53 hosted zone for the site's domain."""

  def __init__(self, scope: Construct, id: str, *, zone: HostedZone) -> None:
    super().__init__(scope, id)

    self.hosted_zone = route53.HostedZone(self, "HostedZone", zone_name=zone.zone_name)

  @property
  def resolved_value(self) -> str:
    return self.hosted_zone.zone_name


class CloudFrontAlias(Construct):
  """A and AAAA alias records pointing one hostname at CloudFront."""

  def __init__(
    self,
    scope: Construct,
    id: str,
    *,
    alias: AliasRecord,
    hosted_zone: route53.IHostedZone,
    distribution: cloudfront.IDistribution,
  ) -> None:
    super().__init__(scope, id)

    target = route53.RecordTarget.from_alias(targets.CloudFrontTarget(distribution))

    self.a_record = route53.ARecord(
      self,
      "ARecord",
      zone=hosted_zone,
      record_name=alias.record_name,
      target=target,
    )
    self.aaaa_record = route53.AaaaRecord(
      self,
      "AAAARecord",
      zone=hosted_zone,
      record_name=alias.record_name,
      target=target,
    )

  @property
  def resolved_value(self) -> str:
    return self.a_record.domain_name
