"""S3 bucket serving the built site assets."""

from aws_cdk import RemovalPolicy
from aws_cdk import aws_s3 as s3
from aws_cdk import aws_s3_deployment as s3_deploy
from constructs import Construct

from frontend_deploy.topology.models import OriginStore


class StorageBucket(Construct):
  """Public S3 website bucket, filled from the build output directory."""

  def __init__(
    self,
    scope: Construct,
    id: str,
    *,
    store: OriginStore,
    removal_policy: RemovalPolicy = RemovalPolicy.RETAIN,
  ) -> None:
    super().__init__(scope, id)

    block_public = not store.public_read
    self.bucket = s3.Bucket(
      self,
      "Bucket",
      website_index_document=store.index_document,
      public_read_access=store.public_read,
      block_public_access=s3.BlockPublicAccess(
        block_public_acls=block_public,
        ignore_public_acls=block_public,
        block_public_policy=block_public,
        restrict_public_buckets=block_public,
      ),
      removal_policy=removal_policy,
      auto_delete_objects=removal_policy == RemovalPolicy.DESTROY,
    )

    # Re-deploys on every change to the build output
    self.deployment = s3_deploy.BucketDeployment(
      self,
      "DeployStaticSite",
      sources=[s3_deploy.Source.asset(store.asset_path)],
      destination_bucket=self.bucket,
    )

  @property
  def resolved_value(self) -> str:
    return self.bucket.bucket_website_url
