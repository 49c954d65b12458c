"""Sync target parsing and CloudFront path derivation."""

from dataclasses import dataclass
from typing import Optional

from sitesync.errors import ConfigurationError, KeyOutsideScopeError

S3_SCHEME = "s3://"


@dataclass(frozen=True)
class SyncTarget:
    """Bucket and optional key prefix that a local tree is synced into."""

    bucket: str
    prefix: Optional[str] = None

    @classmethod
    def from_uri(cls, uri: str) -> "SyncTarget":
        """Split s3://bucket[/prefix] into its parts."""
        if not uri.startswith(S3_SCHEME):
            raise ConfigurationError(f"S3 target URI ('{uri}') must start with {S3_SCHEME}")

        bucket, _, prefix = uri[len(S3_SCHEME):].partition("/")
        if not bucket:
            raise ConfigurationError(f"S3 target URI ('{uri}') has no bucket name")

        return cls(bucket=bucket, prefix=prefix.strip("/") or None)

    @property
    def uri(self) -> str:
        if self.prefix:
            return f"{S3_SCHEME}{self.bucket}/{self.prefix}"
        return f"{S3_SCHEME}{self.bucket}"

    @property
    def root(self) -> str:
        """Locator prefix shared by every object under the target."""
        return f"{self.uri}/"

    def derive_path(self, locator: str) -> str:
        return derive_invalidation_path(locator, self.bucket, self.prefix)


def derive_invalidation_path(locator: str, bucket: str, prefix: Optional[str] = None) -> str:
    """
    Map a remote object locator to a CloudFront path.

    "s3://bucket/prefix/a/b.html" with bucket "bucket" and prefix "prefix" becomes
    "/a/b.html". The key is not URL-encoded.
    """
    root = SyncTarget(bucket=bucket, prefix=(prefix or "").strip("/") or None).root
    if not locator.startswith(root):
        raise KeyOutsideScopeError(locator, root)

    return "/" + locator[len(root):]
