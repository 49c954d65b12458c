"""Custom exceptions for sync and invalidation."""

from typing import Iterable, Optional


class SiteSyncError(Exception):
    """Base exception for deployment errors."""

    pass


class ConfigurationError(SiteSyncError):
    """Configuration or command-line input errors."""

    pass


class MalformedTranscriptLineError(SiteSyncError):
    """A transcript line carries an operation tag but no usable object locator."""

    def __init__(self, line_number: int, line: str):
        self.line_number = line_number
        self.line = line
        super().__init__(f"Malformed sync transcript line {line_number}: {line!r}")


class KeyOutsideScopeError(SiteSyncError):
    """A transcript locator does not belong to the synced bucket/prefix."""

    def __init__(self, locator: str, scope: str):
        self.locator = locator
        self.scope = scope
        super().__init__(f"Object {locator} is outside the sync target {scope}")


class BatchTooLargeError(SiteSyncError):
    """Invalidation batch exceeds the per-request path limit."""

    def __init__(self, count: int, limit: int):
        self.count = count
        self.limit = limit
        super().__init__(f"Invalidation batch has {count} paths, limit is {limit}")


class DistributionLookupError(SiteSyncError):
    """Alias could not be resolved to exactly one distribution."""

    pass


class NoDistributionForAliasError(DistributionLookupError):
    """No distribution serves the alias."""

    def __init__(self, alias: str):
        self.alias = alias
        super().__init__(f"No CloudFront distribution found with alias: {alias}")


class AmbiguousAliasError(DistributionLookupError):
    """More than one distribution serves the alias."""

    def __init__(self, alias: str, distribution_ids: Iterable[str]):
        self.alias = alias
        self.distribution_ids = tuple(distribution_ids)
        super().__init__(
            f"Found multiple ({len(self.distribution_ids)}) distributions for alias {alias}: "
            f"{', '.join(self.distribution_ids)}"
        )


class ExternalCallError(SiteSyncError):
    """An S3 or CloudFront call failed."""

    pass


class S3SyncError(ExternalCallError):
    """S3 sync errors."""

    def __init__(self, message: str, returncode: Optional[int] = None, transcript: str = ""):
        self.returncode = returncode
        self.transcript = transcript
        super().__init__(message)


class DistributionListingError(ExternalCallError):
    """CloudFront distribution listing errors."""

    pass


class CDNInvalidationError(ExternalCallError):
    """CloudFront cache invalidation errors."""

    pass
