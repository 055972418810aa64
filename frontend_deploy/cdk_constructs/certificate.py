"""ACM certificate with DNS validation."""

from aws_cdk import aws_certificatemanager as acm
from aws_cdk import aws_route53 as route53
from constructs import Construct

from frontend_deploy.topology.models import Certificate


class DnsValidatedCertificate(Construct):
  """ACM certificate with DNS validation (no email approval needed)."""

  def __init__(
    self,
    scope: Construct,
    id: str,
    *,
    certificate: Certificate,
    hosted_zone: route53.IHostedZone,
  ) -> None:
    super().__init__(scope, id)

    self.certificate = acm.Certificate(
      self,
      "Certificate",
      domain_name=certificate.primary_domain,
      subject_alternative_names=sorted(certificate.alternate_names) or None,
      validation=acm.CertificateValidation.from_dns(hosted_zone),
    )

  @property
  def resolved_value(self) -> str:
    return self.certificate.certificate_arn
