"""Unit tests for site_deployer.resolver."""

from __future__ import annotations

import boto3
import pytest
from moto import mock_aws

from conftest import REGION, FakeCloudFront, distribution_config
from sitesync.aws_helpers import CloudFrontHelper, DistributionSummary
from sitesync.config import DeployConfig
from sitesync.errors import AmbiguousAliasError, NoDistributionForAliasError
from site_deployer.resolver import DistributionResolver, looks_like_distribution_id


@pytest.mark.parametrize("value", ["E123ABCDEF4567", "E2QWRUHEXAMPLE", "E1"])
def test_distribution_id_shape(value: str) -> None:
    assert looks_like_distribution_id(value)


@pytest.mark.parametrize("value", ["www.example.com", "e123abcdef4567", "E", "X123", "E123-ABC", ""])
def test_alias_shape(value: str) -> None:
    assert not looks_like_distribution_id(value)


def test_single_match_returns_its_id() -> None:
    cloudfront = FakeCloudFront(
        [
            DistributionSummary("E1AAAAAAAAAAAA", aliases=("static.example.com",)),
            DistributionSummary("E2BBBBBBBBBBBB", aliases=("example.com", "www.example.com")),
        ]
    )
    assert DistributionResolver(cloudfront).resolve_by_alias("www.example.com") == "E2BBBBBBBBBBBB"
    assert cloudfront.list_calls == 1


def test_no_match_raises() -> None:
    cloudfront = FakeCloudFront([DistributionSummary("E1AAAAAAAAAAAA", aliases=("static.example.com",))])
    with pytest.raises(NoDistributionForAliasError) as excinfo:
        DistributionResolver(cloudfront).resolve_by_alias("www.example.com")
    assert excinfo.value.alias == "www.example.com"


def test_empty_account_raises() -> None:
    with pytest.raises(NoDistributionForAliasError):
        DistributionResolver(FakeCloudFront([])).resolve_by_alias("www.example.com")


def test_two_matches_report_both_ids() -> None:
    cloudfront = FakeCloudFront(
        [
            DistributionSummary("E1AAAAAAAAAAAA", aliases=("www.example.com",)),
            DistributionSummary("E3CCCCCCCCCCCC", aliases=("static.example.com",)),
            DistributionSummary("E2BBBBBBBBBBBB", aliases=("www.example.com",)),
        ]
    )
    with pytest.raises(AmbiguousAliasError) as excinfo:
        DistributionResolver(cloudfront).resolve_by_alias("www.example.com")
    assert excinfo.value.distribution_ids == ("E1AAAAAAAAAAAA", "E2BBBBBBBBBBBB")
    assert "E1AAAAAAAAAAAA" in str(excinfo.value)
    assert "E2BBBBBBBBBBBB" in str(excinfo.value)


def test_match_is_exact_and_case_sensitive() -> None:
    cloudfront = FakeCloudFront(
        [
            DistributionSummary("E1AAAAAAAAAAAA", aliases=("WWW.example.com",)),
            DistributionSummary("E2BBBBBBBBBBBB", aliases=("www.example.com.au",)),
        ]
    )
    with pytest.raises(NoDistributionForAliasError):
        DistributionResolver(cloudfront).resolve_by_alias("www.example.com")


@mock_aws
def test_resolves_against_cloudfront_listing() -> None:
    client = boto3.client("cloudfront", region_name=REGION)
    client.create_distribution(DistributionConfig=distribution_config("static", ["static.example.com"]))
    created = client.create_distribution(DistributionConfig=distribution_config("www", ["www.example.com"]))
    client.create_distribution(DistributionConfig=distribution_config("bare", []))
    expected_id = created["Distribution"]["Id"]

    resolver = DistributionResolver(CloudFrontHelper(DeployConfig(aws_region=REGION)))

    assert resolver.resolve_by_alias("www.example.com") == expected_id
    with pytest.raises(NoDistributionForAliasError):
        resolver.resolve_by_alias("missing.example.com")


def test_id_with_trailing_newline_is_not_an_id() -> None:
    assert not looks_like_distribution_id("E123ABCDEF4567\n")
