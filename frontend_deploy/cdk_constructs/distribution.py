"""CloudFront distribution for static website."""

from typing import Any

from aws_cdk import aws_certificatemanager as acm
from aws_cdk import aws_cloudfront as cloudfront
from aws_cdk import aws_cloudfront_origins as origins
from aws_cdk import aws_s3 as s3
from constructs import Construct

from frontend_deploy.topology.models import Distributor, ViewerPolicy

VIEWER_POLICIES = {
  ViewerPolicy.REDIRECT_TO_HTTPS: cloudfront.ViewerProtocolPolicy.REDIRECT_TO_HTTPS,
}


class CloudFrontDistribution(Construct):
  """CloudFront distribution with S3 static website origin."""

  def __init__(
    self,
    scope: Construct,
    id: str,
    *,
    distributor: Distributor,
    bucket: s3.IBucket,
    certificate: acm.ICertificate | None = None,
  ) -> None:
    super().__init__(scope, id)

    # Custom domains only; otherwise the default *.cloudfront.net certificate
    domain_options: dict[str, Any] = {}
    if certificate is not None:
      domain_options = {
        "domain_names": sorted(distributor.domain_names),
        "certificate": certificate,
        "minimum_protocol_version": cloudfront.SecurityPolicyProtocol.TLS_V1_2_2021,
      }

    self.distribution = cloudfront.Distribution(
      self,
      "Distribution",
      default_behavior=cloudfront.BehaviorOptions(
        origin=origins.S3StaticWebsiteOrigin(bucket),
        viewer_protocol_policy=VIEWER_POLICIES[distributor.viewer_policy],
        allowed_methods=cloudfront.AllowedMethods.ALLOW_GET_HEAD,
        cached_methods=cloudfront.CachedMethods.CACHE_GET_HEAD,
      ),
      default_root_object="index.html",
      **domain_options,
    )

  @property
  def resolved_value(self) -> str:
    return self.distribution.distribution_domain_name
