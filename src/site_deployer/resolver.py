"""Distribution resolver - CloudFront alias to distribution ID."""

import re
from typing import List

from sitesync.aws_helpers import CloudFrontHelper
from sitesync.errors import AmbiguousAliasError, NoDistributionForAliasError
from sitesync.logger import StructuredLogger

DISTRIBUTION_ID_PATTERN = re.compile(r"E[A-Z0-9]+")


def looks_like_distribution_id(value: str) -> bool:
    """CloudFront IDs are 'E' followed by uppercase letters and digits."""
    return bool(DISTRIBUTION_ID_PATTERN.fullmatch(value))


class DistributionResolver:
    """Find the single distribution that serves a hostname."""

    def __init__(self, cloudfront: CloudFrontHelper):
        self.cloudfront = cloudfront

    def matching_ids(self, alias: str) -> List[str]:
        return [
            distribution.id
            for distribution in self.cloudfront.list_distributions()
            if alias in distribution.aliases
        ]

    def resolve_by_alias(self, alias: str) -> str:
        """
        Resolve an alias (CNAME) to a distribution ID.

        Matching is exact and case-sensitive.

        Raises:
            NoDistributionForAliasError: no distribution lists the alias
            AmbiguousAliasError: several distributions list the alias
        """
        StructuredLogger.info("Looking up CloudFront distribution", alias=alias)

        matches = self.matching_ids(alias)

        if not matches:
            raise NoDistributionForAliasError(alias)
        if len(matches) > 1:
            StructuredLogger.error("Alias matches several distributions", alias=alias, distribution_ids=matches)
            raise AmbiguousAliasError(alias, matches)

        StructuredLogger.info("Found distribution", alias=alias, distribution_id=matches[0])
        return matches[0]
