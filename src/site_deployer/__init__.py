"""Sync a local tree to S3 and invalidate the changed paths in CloudFront."""
