"""Invalidation batch building."""

from dataclasses import dataclass
from typing import Iterable, Iterator, Tuple

from sitesync.config import DEFAULT_MAX_PATHS, DEFAULT_WARN_THRESHOLD
from sitesync.errors import BatchTooLargeError, ConfigurationError
from sitesync.logger import StructuredLogger


@dataclass(frozen=True)
class InvalidationBatch:
    """Duplicate-free CloudFront paths for a single invalidation request."""

    paths: Tuple[str, ...] = ()
    above_warn_threshold: bool = False

    def __len__(self) -> int:
        return len(self.paths)

    def __iter__(self) -> Iterator[str]:
        return iter(self.paths)

    def __contains__(self, path: object) -> bool:
        return path in self.paths

    @property
    def is_empty(self) -> bool:
        return not self.paths


class InvalidationSetBuilder:
    """Deduplicate derived paths and enforce the per-request path limits."""

    def __init__(self, warn_threshold: int = DEFAULT_WARN_THRESHOLD, max_paths: int = DEFAULT_MAX_PATHS):
        if max_paths < 1:
            raise ConfigurationError(f"max_paths must be positive, got {max_paths}")
        self.warn_threshold = warn_threshold
        self.max_paths = max_paths

    def build(self, paths: Iterable[str]) -> InvalidationBatch:
        """
        Build an invalidation batch.

        First occurrence order is kept. An empty input gives an empty batch, which
        means no invalidation is needed.

        Raises:
            BatchTooLargeError: more distinct paths than a single request accepts
        """
        unique = tuple(dict.fromkeys(paths))
        count = len(unique)

        if count > self.max_paths:
            StructuredLogger.error(
                "Too many paths for one invalidation request",
                paths_count=count,
                max_paths=self.max_paths,
            )
            raise BatchTooLargeError(count, self.max_paths)

        above_warn_threshold = count > self.warn_threshold
        if above_warn_threshold:
            StructuredLogger.warning(
                f"More than {self.warn_threshold} paths detected. Consider using a wildcard ('/*').",
                paths_count=count,
                warn_threshold=self.warn_threshold,
            )

        return InvalidationBatch(paths=unique, above_warn_threshold=above_warn_threshold)
