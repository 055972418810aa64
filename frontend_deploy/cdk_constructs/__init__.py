"""CDK constructs for static website infrastructure."""

from .certificate import DnsValidatedCertificate
from .distribution import CloudFrontDistribution
from .dns import CloudFrontAlias, DnsZone
from .static_site import StaticSiteConstruct
from .storage import StorageBucket

__all__ = [
  "CloudFrontAlias",
  "CloudFrontDistribution",
  "DnsValidatedCertificate",
  "DnsZone",
  "StaticSiteConstruct",
  "StorageBucket",
]
