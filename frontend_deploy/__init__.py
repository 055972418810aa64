"""Static single-page site behind CloudFront, with an optional custom domain."""
