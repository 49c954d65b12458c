"""Deployment orchestrator - sync, then invalidate what changed."""

import uuid
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional, Tuple

from sitesync.aws_helpers import CloudFrontHelper, S3SyncHelper
from sitesync.config import DeployConfig
from sitesync.errors import S3SyncError, SiteSyncError
from sitesync.logger import StructuredLogger

from site_deployer.invalidation import InvalidationBatch, InvalidationSetBuilder
from site_deployer.paths import SyncTarget
from site_deployer.resolver import DistributionResolver, looks_like_distribution_id
from site_deployer.transcript import parse_transcript

RESULT_PARSE_DEGRADED = "Invalidation accepted but its ID could not be read from the response"


@dataclass
class DeploymentResult:
    run_id: str
    distribution_id: str
    target_uri: str
    events: int = 0
    paths: Tuple[str, ...] = ()
    invalidation_id: Optional[str] = None
    invalidation_skipped: bool = False
    warnings: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "run_id": self.run_id,
            "distribution_id": self.distribution_id,
            "target_uri": self.target_uri,
            "events": self.events,
            "paths_count": len(self.paths),
            "invalidation_id": self.invalidation_id,
            "invalidation_skipped": self.invalidation_skipped,
            "warnings": list(self.warnings),
        }


def extract_invalidation_id(response: Any) -> Optional[str]:
    """Read Invalidation.Id from a create_invalidation response, if present."""
    if not isinstance(response, dict):
        return None
    invalidation = response.get("Invalidation")
    if not isinstance(invalidation, dict):
        return None
    invalidation_id = invalidation.get("Id")
    return invalidation_id if isinstance(invalidation_id, str) and invalidation_id else None


class DeploymentOrchestrator:
    """Run one deployment: resolve, sync, parse, build batch, invalidate."""

    def __init__(
        self,
        config: DeployConfig,
        syncer: Optional[S3SyncHelper] = None,
        cloudfront: Optional[CloudFrontHelper] = None,
        builder: Optional[InvalidationSetBuilder] = None,
    ):
        self.config = config
        self.syncer = syncer or S3SyncHelper(config)
        self.cloudfront = cloudfront or CloudFrontHelper(config)
        self.resolver = DistributionResolver(self.cloudfront)
        self.builder = builder or InvalidationSetBuilder(
            warn_threshold=config.warn_threshold,
            max_paths=config.max_paths,
        )

    def resolve_distribution(self, distribution_ref: str) -> str:
        if looks_like_distribution_id(distribution_ref):
            StructuredLogger.info("Using provided value as distribution ID", distribution_id=distribution_ref)
            return distribution_ref
        return self.resolver.resolve_by_alias(distribution_ref)

    def collect_paths(self, transcript: str, target: SyncTarget) -> Tuple[int, List[str]]:
        """Parse the transcript and derive one path per transfer event."""
        events = 0
        paths = []
        for event in parse_transcript(transcript):
            events += 1
            paths.append(target.derive_path(event.target_key))
        return events, paths

    def submit(self, distribution_id: str, batch: InvalidationBatch, result: DeploymentResult) -> None:
        response = self.cloudfront.invalidate_paths(distribution_id, batch.paths, caller_reference=result.run_id)

        result.invalidation_id = extract_invalidation_id(response)
        if result.invalidation_id is None:
            result.warnings.append(RESULT_PARSE_DEGRADED)
            StructuredLogger.warning(RESULT_PARSE_DEGRADED, distribution_id=distribution_id)
        else:
            StructuredLogger.info(
                "CloudFront invalidation request submitted",
                distribution_id=distribution_id,
                invalidation_id=result.invalidation_id,
            )

    def run(
        self,
        local_path: str,
        target: SyncTarget,
        distribution_ref: str,
        extra_paths: Iterable[str] = (),
    ) -> DeploymentResult:
        """
        Deploy a local tree and invalidate the changed paths.

        Args:
            local_path: Directory to sync
            target: Bucket and prefix to sync into
            distribution_ref: Distribution ID or an alias served by it
            extra_paths: Literal paths (e.g. "/*") added to the derived ones

        Returns:
            DeploymentResult

        Raises:
            SiteSyncError: any failure; nothing is retried
        """
        run_id = str(uuid.uuid4())
        try:
            distribution_id = self.resolve_distribution(distribution_ref)
            result = DeploymentResult(run_id=run_id, distribution_id=distribution_id, target_uri=target.uri)

            StructuredLogger.info(
                "Starting sync and invalidation",
                run_id=run_id,
                local_path=local_path,
                target_uri=target.uri,
                distribution_id=distribution_id,
            )

            outcome = self.syncer.sync(local_path, target.uri)
            if not outcome.succeeded:
                raise S3SyncError(
                    f"S3 sync failed with exit status {outcome.returncode}",
                    returncode=outcome.returncode,
                    transcript=outcome.transcript,
                )

            result.events, paths = self.collect_paths(outcome.transcript, target)
            paths.extend(extra_paths)
            batch = self.builder.build(paths)
            result.paths = batch.paths
            if batch.above_warn_threshold:
                result.warnings.append(
                    f"{len(batch)} paths exceed the warning threshold of {self.builder.warn_threshold}"
                )

            if batch.is_empty:
                result.invalidation_skipped = True
                StructuredLogger.info("No files changed. Skipping CloudFront invalidation.", run_id=run_id)
            else:
                StructuredLogger.info("Changed files require invalidation", run_id=run_id, paths_count=len(batch))
                self.submit(distribution_id, batch, result)

            StructuredLogger.info(
                "Sync and invalidation finished",
                run_id=run_id,
                distribution_id=distribution_id,
                invalidation_id=result.invalidation_id,
            )
            return result

        except SiteSyncError as e:
            StructuredLogger.error("Deployment failed", exception=e, run_id=run_id)
            raise
