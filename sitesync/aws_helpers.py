"""AWS service helpers for S3 sync and CloudFront."""

import subprocess
from dataclasses import dataclass
from typing import Any, Dict, List, Sequence, Tuple

from botocore.exceptions import BotoCoreError, ClientError

from sitesync.config import DeployConfig
from sitesync.errors import CDNInvalidationError, DistributionListingError, S3SyncError
from sitesync.logger import StructuredLogger


@dataclass(frozen=True)
class SyncOutcome:
    """Exit status and merged stdout/stderr of one `aws s3 sync` run."""

    returncode: int
    transcript: str
    command: Tuple[str, ...] = ()

    @property
    def succeeded(self) -> bool:
        return self.returncode == 0


@dataclass(frozen=True)
class DistributionSummary:
    id: str
    domain_name: str = ""
    aliases: Tuple[str, ...] = ()


class S3SyncHelper:
    """Bulk S3 sync through the AWS CLI."""

    def __init__(self, config: DeployConfig):
        self.config = config

    def build_command(self, local_path: str, target_uri: str) -> List[str]:
        cmd = [
            self.config.aws_cli,
            "s3",
            "sync",
            local_path,
            target_uri,
            "--acl",
            self.config.sync_acl,
        ]
        if self.config.sync_delete:
            cmd.append("--delete")
        cmd.append("--no-progress")
        if self.config.aws_profile:
            cmd.extend(["--profile", self.config.aws_profile])
        if self.config.aws_region:
            cmd.extend(["--region", self.config.aws_region])
        return cmd

    def sync(self, local_path: str, target_uri: str) -> SyncOutcome:
        """Run the sync; a non-zero exit status is returned, not raised."""
        cmd = self.build_command(local_path, target_uri)

        StructuredLogger.info("Syncing files to S3", local_path=local_path, target_uri=target_uri)

        try:
            process = subprocess.run(
                cmd,
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT,
                check=False,
            )
        except OSError as e:
            raise S3SyncError(f"Could not run {self.config.aws_cli}: {str(e)}") from e

        transcript = process.stdout.decode("utf-8", errors="replace") if process.stdout else ""

        StructuredLogger.info(
            "S3 sync finished",
            target_uri=target_uri,
            returncode=process.returncode,
            transcript_lines=len(transcript.splitlines()),
        )

        return SyncOutcome(returncode=process.returncode, transcript=transcript, command=tuple(cmd))


class CloudFrontHelper:
    """CloudFront operations."""

    def __init__(self, config: DeployConfig, client: Any = None):
        self.client = client or config.create_session().client("cloudfront")

    def list_distributions(self) -> List[DistributionSummary]:
        """List every distribution in the account, following pagination markers."""
        try:
            distributions = []
            paginator = self.client.get_paginator("list_distributions")

            for page in paginator.paginate():
                for item in page.get("DistributionList", {}).get("Items", []):
                    aliases = item.get("Aliases", {}).get("Items", [])
                    distributions.append(
                        DistributionSummary(
                            id=item["Id"],
                            domain_name=item.get("DomainName", ""),
                            aliases=tuple(aliases),
                        )
                    )

            StructuredLogger.debug("Listed CloudFront distributions", count=len(distributions))
            return distributions
        except (ClientError, BotoCoreError) as e:
            raise DistributionListingError(f"Error querying CloudFront: {str(e)}") from e

    def invalidate_paths(
        self, distribution_id: str, paths: Sequence[str], caller_reference: str
    ) -> Dict[str, Any]:
        """Create an invalidation and return the raw API response."""
        if not paths:
            raise CDNInvalidationError("No paths provided for CloudFront invalidation")

        try:
            StructuredLogger.info(
                "Creating CloudFront invalidation",
                distribution_id=distribution_id,
                paths_count=len(paths),
            )

            return self.client.create_invalidation(
                DistributionId=distribution_id,
                InvalidationBatch={
                    "Paths": {"Quantity": len(paths), "Items": list(paths)},
                    "CallerReference": caller_reference,
                },
            )
        except (ClientError, BotoCoreError) as e:
            raise CDNInvalidationError(f"Error creating CloudFront invalidation: {str(e)}") from e
