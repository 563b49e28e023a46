"""
Filter Source - narrows the endpoints of a wrapped source

Endpoints are dropped when they are A records pointing into an ignored
network, when their name matches an ignore pattern, or when they fall
outside the configured base domains.
"""

import logging
from typing import Iterable, List, Optional, Sequence

from ..core.endpoint import RECORD_TYPE_A, Endpoint
from ..utils.domain_filter import DomainFilter
from ..utils.validators import IPNetwork, normalize_fqdn, parse_ip
from .base_source import Source

logger = logging.getLogger(__name__)


class FilterSource(Source):
    """Source wrapping another source and removing unwanted endpoints."""

    def __init__(
        self,
        source: Source,
        domain_filter: Optional[DomainFilter] = None,
        cidr_ignore: Optional[Sequence[IPNetwork]] = None,
        dns_ignore: Optional[Sequence[str]] = None,
    ):
        self.source = source
        self.domain_filter = domain_filter or DomainFilter()
        self.cidr_ignore = list(cidr_ignore or [])
        self.dns_ignore = list(dns_ignore or [])

    def endpoints(self) -> List[Endpoint]:
        """Return the wrapped source's endpoints that pass every filter."""
        endpoints = self.source.endpoints()

        filtered = []
        for endpoint in endpoints:
            if self._cidr_ignored(endpoint):
                logger.debug(f"Ignoring {endpoint}: target in ignored network")
                continue
            if self._dns_ignored(endpoint):
                logger.debug(f"Ignoring {endpoint}: name matches ignore pattern")
                continue
            if not self.domain_filter.match(endpoint.name):
                logger.debug(f"Ignoring {endpoint}: outside base domains")
                continue
            filtered.append(endpoint)

        if len(filtered) != len(endpoints):
            logger.info(
                f"Filtered out {len(endpoints) - len(filtered)} of {len(endpoints)} endpoints"
            )
        return filtered

    def _cidr_ignored(self, endpoint: Endpoint) -> bool:
        if endpoint.record_type != RECORD_TYPE_A:
            return False

        address = parse_ip(endpoint.target)
        if address is None:
            return False

        return any(address in network for network in self.cidr_ignore)

    def _dns_ignored(self, endpoint: Endpoint) -> bool:
        return match_any_dns_name(endpoint.name, self.dns_ignore)


def match_dns_name(name: str, pattern: str) -> bool:
    """
    Match a name against a literal name or a single-level wildcard.

    ``*.example.com`` matches ``foo.example.com`` but neither
    ``bar.foo.example.com`` nor the wildcard name ``*.example.com`` itself.
    """
    name = normalize_fqdn(name)
    if not pattern.startswith("*."):
        return name == pattern

    if name == pattern:
        return False

    suffix = pattern[1:]
    if not name.endswith(suffix):
        return False

    label = name[: -len(suffix)]
    return bool(label) and "." not in label


def match_any_dns_name(name: str, patterns: Iterable[str]) -> bool:
    return any(match_dns_name(name, pattern) for pattern in patterns)
