"""Shared fixtures for unit tests."""

from __future__ import annotations

import logging
from typing import Any

import pytest

from sitesync.aws_helpers import DistributionSummary, SyncOutcome

REGION = "us-east-1"


@pytest.fixture(autouse=True)
def aws_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("AWS_ACCESS_KEY_ID", "test")
    monkeypatch.setenv("AWS_SECRET_ACCESS_KEY", "test")
    monkeypatch.setenv("AWS_DEFAULT_REGION", REGION)
    for name in (
        "AWS_PROFILE",
        "AWS_REGION",
        "SITESYNC_AWS_CLI",
        "SITESYNC_ACL",
        "SITESYNC_DELETE",
        "SITESYNC_WARN_THRESHOLD",
        "SITESYNC_MAX_PATHS",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture(autouse=True)
def reset_logger() -> Any:
    logger = logging.getLogger("sitesync")
    logger.handlers = []
    logger.propagate = True
    logger.setLevel(logging.INFO)
    yield
    logger.handlers = []
    logger.propagate = True
    logger.setLevel(logging.INFO)


def distribution_config(reference: str, aliases: list[str]) -> dict[str, Any]:
    config: dict[str, Any] = {
        "CallerReference": reference,
        "Origins": {
            "Quantity": 1,
            "Items": [
                {
                    "Id": "site-origin",
                    "DomainName": "site-bucket.s3.amazonaws.com",
                    "S3OriginConfig": {"OriginAccessIdentity": ""},
                }
            ],
        },
        "DefaultCacheBehavior": {
            "TargetOriginId": "site-origin",
            "ViewerProtocolPolicy": "allow-all",
            "MinTTL": 0,
            "ForwardedValues": {"QueryString": False, "Cookies": {"Forward": "none"}},
        },
        "Comment": "sitesync test distribution",
        "Enabled": False,
    }
    if aliases:
        config["Aliases"] = {"Quantity": len(aliases), "Items": aliases}
    return config


class FakeCloudFront:
    """Stands in for CloudFrontHelper."""

    def __init__(
        self,
        distributions: list[DistributionSummary] | None = None,
        response: Any = None,
    ) -> None:
        self.distributions = distributions or []
        self.response = {"Invalidation": {"Id": "I2J0I21PCUYOIK"}} if response is None else response
        self.list_calls = 0
        self.invalidations: list[dict[str, Any]] = []

    def list_distributions(self) -> list[DistributionSummary]:
        self.list_calls += 1
        return list(self.distributions)

    def invalidate_paths(self, distribution_id: str, paths: Any, caller_reference: str) -> Any:
        self.invalidations.append(
            {
                "distribution_id": distribution_id,
                "paths": list(paths),
                "caller_reference": caller_reference,
            }
        )
        return self.response


class FakeSyncer:
    """Stands in for S3SyncHelper."""

    def __init__(self, transcript: str = "", returncode: int = 0) -> None:
        self.transcript = transcript
        self.returncode = returncode
        self.calls: list[tuple[str, str]] = []

    def sync(self, local_path: str, target_uri: str) -> SyncOutcome:
        self.calls.append((local_path, target_uri))
        return SyncOutcome(returncode=self.returncode, transcript=self.transcript)
