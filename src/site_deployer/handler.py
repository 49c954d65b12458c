"""Command-line handler for sync and invalidation."""

import argparse
import json
import logging
import os
import sys
from typing import List, Optional

from sitesync.config import DeployConfig
from sitesync.errors import ConfigurationError, SiteSyncError
from sitesync.logger import StructuredLogger, configure_logging

from site_deployer.deployer import DeploymentOrchestrator
from site_deployer.paths import SyncTarget

EXIT_OK = 0
EXIT_FAILED = 1
EXIT_USAGE = 2


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="sitesync",
        description="Sync a local directory to S3 and invalidate changed files in CloudFront.",
        epilog=(
            "Examples: sitesync ./build s3://my-bucket/dashboard www.example.com | "
            "sitesync ./dist s3://another-bucket E123ABCDEF4567"
        ),
    )
    parser.add_argument("local_path", help="Local directory containing files to sync")
    parser.add_argument("s3_target_uri", help="S3 URI with bucket and optional prefix")
    parser.add_argument("distribution", help="CloudFront alias (www.example.com) or distribution ID")
    parser.add_argument("--profile", default=None, help="AWS profile (defaults to AWS_PROFILE)")
    parser.add_argument("--region", default=None, help="AWS region (defaults to AWS_REGION)")
    parser.add_argument(
        "--extra-path",
        action="append",
        default=[],
        dest="extra_paths",
        help="Additional path to invalidate, e.g. '/*' (repeatable)",
    )
    parser.add_argument("--warn-threshold", type=int, default=None)
    parser.add_argument("--max-paths", type=int, default=None)
    parser.add_argument("--acl", default=None, help="Canned ACL for uploaded objects")
    parser.add_argument(
        "--no-delete",
        action="store_true",
        help="Keep remote objects that no longer exist locally",
    )
    parser.add_argument("--verbose", action="store_true")
    return parser.parse_args(argv)


def validate_inputs(args: argparse.Namespace) -> SyncTarget:
    if not os.path.isdir(args.local_path):
        raise ConfigurationError(f"Local source path ('{args.local_path}') is not a valid directory.")
    if not args.distribution.strip():
        raise ConfigurationError("CloudFront alias or ID cannot be empty.")
    return SyncTarget.from_uri(args.s3_target_uri)


def build_config(args: argparse.Namespace) -> DeployConfig:
    config = DeployConfig.from_env(
        aws_profile=args.profile,
        aws_region=args.region,
        sync_acl=args.acl,
        sync_delete=False if args.no_delete else None,
        warn_threshold=args.warn_threshold,
        max_paths=args.max_paths,
    )
    config.validate()
    return config


def main(argv: Optional[List[str]] = None, orchestrator: Optional[DeploymentOrchestrator] = None) -> int:
    """Entry point; the only place errors become exit codes."""
    args = parse_args(argv)
    configure_logging(logging.DEBUG if args.verbose else logging.INFO)

    try:
        target = validate_inputs(args)
        config = build_config(args)
        if config.aws_profile:
            StructuredLogger.info("Using AWS profile", aws_profile=config.aws_profile)

        orchestrator = orchestrator or DeploymentOrchestrator(config)
        result = orchestrator.run(
            args.local_path,
            target,
            args.distribution.strip(),
            extra_paths=args.extra_paths,
        )
    except ConfigurationError as e:
        StructuredLogger.error("Invalid configuration", exception=e)
        return EXIT_USAGE
    except SiteSyncError:
        # already logged with its run id by the orchestrator
        return EXIT_FAILED

    print(json.dumps(result.to_dict(), indent=2))
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
