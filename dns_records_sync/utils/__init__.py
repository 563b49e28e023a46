"""
Utility functions and helpers.

This package contains validation helpers and the domain suffix filter.
"""

from .domain_filter import DomainFilter
from .validators import (
    normalize_fqdn,
    parse_cidr_list,
    parse_dns_ignore_list,
    parse_ip,
    validate_fqdn,
    validate_ipv4,
)

__all__ = [
    "DomainFilter",
    "normalize_fqdn",
    "parse_cidr_list",
    "parse_dns_ignore_list",
    "parse_ip",
    "validate_fqdn",
    "validate_ipv4",
]
