"""Configuration management."""

import os
from dataclasses import dataclass, replace
from typing import Mapping, Optional

import boto3
from botocore.exceptions import BotoCoreError

from sitesync.errors import ConfigurationError

DEFAULT_WARN_THRESHOLD = 1000  # CloudFront free invalidation paths per month
DEFAULT_MAX_PATHS = 3000  # CloudFront paths per invalidation request


def _env_bool(value: str) -> bool:
    return value.strip().lower() in ("1", "true", "yes", "on")


@dataclass(frozen=True)
class DeployConfig:
    """Explicit deployment configuration, passed to every AWS-facing component."""

    aws_profile: Optional[str] = None
    aws_region: Optional[str] = None
    aws_cli: str = "aws"
    sync_acl: str = "private"
    sync_delete: bool = True
    warn_threshold: int = DEFAULT_WARN_THRESHOLD
    max_paths: int = DEFAULT_MAX_PATHS

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None, **overrides) -> "DeployConfig":
        """
        Build configuration from environment variables.

        Keyword overrides that are not None take precedence over the environment.
        """
        env = os.environ if environ is None else environ
        try:
            config = cls(
                aws_profile=env.get("AWS_PROFILE") or None,
                aws_region=env.get("AWS_REGION") or None,
                aws_cli=env.get("SITESYNC_AWS_CLI", "aws"),
                sync_acl=env.get("SITESYNC_ACL", "private"),
                sync_delete=_env_bool(env.get("SITESYNC_DELETE", "true")),
                warn_threshold=int(env.get("SITESYNC_WARN_THRESHOLD", DEFAULT_WARN_THRESHOLD)),
                max_paths=int(env.get("SITESYNC_MAX_PATHS", DEFAULT_MAX_PATHS)),
            )
        except ValueError as e:
            raise ConfigurationError(f"Invalid numeric setting in environment: {str(e)}") from e

        explicit = {key: value for key, value in overrides.items() if value is not None}
        return replace(config, **explicit)

    def validate(self) -> bool:
        """Validate configuration values."""
        if self.max_paths < 1:
            raise ConfigurationError(f"max_paths must be positive, got {self.max_paths}")
        if self.warn_threshold < 1:
            raise ConfigurationError(f"warn_threshold must be positive, got {self.warn_threshold}")
        if self.warn_threshold > self.max_paths:
            raise ConfigurationError(
                f"warn_threshold ({self.warn_threshold}) exceeds max_paths ({self.max_paths})"
            )
        if not self.aws_cli:
            raise ConfigurationError("Path to the aws executable is empty")

        return True

    def create_session(self) -> boto3.Session:
        try:
            return boto3.Session(profile_name=self.aws_profile, region_name=self.aws_region)
        except BotoCoreError as e:
            raise ConfigurationError(f"Could not create AWS session: {str(e)}") from e
