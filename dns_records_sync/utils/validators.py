"""
Validators - Input validation for DNS records and filter settings

This module provides validation and parsing functions for FQDNs, IP
addresses, CIDR ranges and DNS ignore patterns.
"""

import ipaddress
import logging
import re
from typing import Iterable, List, Optional, Union

logger = logging.getLogger(__name__)

IPNetwork = Union[ipaddress.IPv4Network, ipaddress.IPv6Network]
IPAddress = Union[ipaddress.IPv4Address, ipaddress.IPv6Address]

_LABEL_RE = re.compile(r"^[a-zA-Z0-9_]([a-zA-Z0-9_-]*[a-zA-Z0-9])?$")


def validate_fqdn(fqdn: str) -> bool:
    """
    Validate Fully Qualified Domain Name (FQDN).

    A leading ``*`` label is accepted so wildcard records can be managed.

    Args:
        fqdn: The FQDN to validate

    Returns:
        True if valid, False otherwise
    """
    if not fqdn or not isinstance(fqdn, str):
        return False

    fqdn = normalize_fqdn(fqdn)

    if len(fqdn) > 253:
        logger.warning(f"FQDN too long: {fqdn}")
        return False

    labels = fqdn.split(".")

    if len(labels) < 2:
        logger.warning(f"FQDN must have at least 2 labels: {fqdn}")
        return False

    # Check for empty labels (consecutive dots)
    if any(label == "" for label in labels):
        logger.warning(f"FQDN contains empty labels: {fqdn}")
        return False

    for i, label in enumerate(labels):
        if i == 0 and label == "*":
            continue
        if not _validate_label(label):
            logger.warning(f"Invalid label '{label}' in FQDN: {fqdn}")
            return False

    return True


def _validate_label(label: str) -> bool:
    if len(label) == 0 or len(label) > 63:
        return False
    return bool(_LABEL_RE.match(label))


def normalize_fqdn(fqdn: str) -> str:
    """Normalize FQDN by removing surrounding whitespace and the trailing dot."""
    return fqdn.strip().rstrip(".") if fqdn else fqdn


def parse_ip(value: str) -> Optional[IPAddress]:
    """Parse an IPv4 or IPv6 literal, returning None when it is not one."""
    if not value or not isinstance(value, str):
        return None

    try:
        return ipaddress.ip_address(value.strip())
    except ValueError:
        return None


def validate_ipv4(ipv4: str) -> bool:
    """Validate IPv4 address."""
    return isinstance(parse_ip(ipv4), ipaddress.IPv4Address)


def parse_cidr_list(cidrs: Iterable[str]) -> List[IPNetwork]:
    """
    Parse CIDR ranges such as ``192.168.100.0/24``.

    Raises:
        ValueError: If an entry is not a valid network
    """
    networks = []
    for cidr in cidrs or []:
        cidr = cidr.strip()
        if not cidr:
            continue
        try:
            networks.append(ipaddress.ip_network(cidr, strict=False))
        except ValueError as e:
            raise ValueError(f"Invalid CIDR range '{cidr}': {e}")
    return networks


def validate_dns_ignore_pattern(pattern: str) -> bool:
    """
    Validate a DNS ignore pattern.

    Patterns are either a literal name or a single-level wildcard ``*.suffix``.
    """
    if not pattern or not isinstance(pattern, str):
        return False

    if "*" in pattern and not pattern.startswith("*."):
        return False
    if pattern.count("*") > 1:
        return False

    return validate_fqdn(pattern)


def parse_dns_ignore_list(patterns: Iterable[str]) -> List[str]:
    """
    Normalize DNS ignore patterns.

    Raises:
        ValueError: If a pattern is neither a name nor a ``*.suffix`` wildcard
    """
    parsed = []
    for pattern in patterns or []:
        pattern = normalize_fqdn(pattern)
        if not pattern:
            continue
        if not validate_dns_ignore_pattern(pattern):
            raise ValueError(f"Invalid DNS ignore pattern '{pattern}'")
        parsed.append(pattern)
    return parsed
