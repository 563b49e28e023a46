"""
BIND DNS provider implementation.

This module provides BIND DNS server integration using the dnspython library.
Current records are read through a zone transfer and changes are sent as a
single RFC 2136 dynamic update per change-set.
"""

import logging
import re
from typing import Dict, List, Optional

import dns.message
import dns.name
import dns.query
import dns.rcode
import dns.rdatatype
import dns.tsigkeyring
import dns.update
import dns.zone

from ..core.endpoint import (
    RECORD_TYPE_CNAME,
    RECORD_TYPE_TXT,
    SUPPORTED_RECORD_TYPES,
    Endpoint,
)
from ..core.plan import Changes
from ..utils.domain_filter import DomainFilter
from ..utils.validators import normalize_fqdn
from .base_provider import DNSProvider

logger = logging.getLogger(__name__)

DEFAULT_TTL = 300


class BINDProvider(DNSProvider):
    """BIND DNS provider implementation using dnspython library."""

    def __init__(self, config: Dict, domain_filter: Optional[DomainFilter] = None):
        """Initialize BIND provider."""
        self.config = config
        self.nameserver = config.get("nameserver", "127.0.0.1")
        self.port = config.get("port", 53)
        self.zone = normalize_fqdn(config.get("zone", ""))
        self.key_file = config.get("key_file", "")
        self.key_name = config.get("key_name", "")
        self.timeout = config.get("timeout", 30)
        self.default_ttl = config.get("default_ttl", DEFAULT_TTL)
        self.domain_filter = domain_filter or DomainFilter()

        if not self.zone:
            raise ValueError("BIND provider requires a 'zone' setting")

        self.keyring = None
        if self.key_file and self.key_name:
            try:
                with open(self.key_file, "r") as f:
                    key_content = f.read().strip()

                secret = self._parse_bind_key_file(key_content, self.key_name)

                if secret:
                    self.keyring = dns.tsigkeyring.from_text({self.key_name: secret})
                    logger.info(f"TSIG key loaded from {self.key_file}")
                else:
                    logger.warning(
                        f"Could not extract secret for key '{self.key_name}' from {self.key_file}"
                    )
            except OSError as e:
                logger.warning(f"Failed to load TSIG key: {e}")
                logger.debug("TSIG authentication will not be available")

        logger.info(
            f"BIND provider initialized for zone {self.zone} on {self.nameserver}:{self.port}"
        )

    def _parse_bind_key_file(self, key_content: str, key_name: str) -> Optional[str]:
        """Parse BIND key file format to extract the secret for a specific key."""
        key_pattern = rf'key\s+"{re.escape(key_name)}"\s*{{(.*?)}}'
        match = re.search(key_pattern, key_content, re.DOTALL)
        if match:
            secret_match = re.search(r'secret\s+"([^"]+)"', match.group(1))
            if secret_match:
                return secret_match.group(1)
        return None

    def records(self) -> List[Endpoint]:
        """Get A, CNAME and TXT records of the zone through a zone transfer."""
        try:
            zone_obj = dns.zone.from_xfr(
                dns.query.xfr(
                    self.nameserver,
                    self.zone,
                    port=self.port,
                    keyring=self.keyring,
                    lifetime=self.timeout,
                )
            )
        except Exception as e:
            logger.error(f"Zone transfer failed for {self.zone}: {e}")
            raise

        records = []
        for name, node in zone_obj.nodes.items():
            fqdn = normalize_fqdn(name.derelativize(zone_obj.origin).to_text())
            if not self.domain_filter.match(fqdn):
                continue
            for rdataset in node.rdatasets:
                record_type = dns.rdatatype.to_text(rdataset.rdtype)
                if record_type not in SUPPORTED_RECORD_TYPES:
                    continue
                for rdata in rdataset:
                    if record_type == RECORD_TYPE_TXT:
                        target = b"".join(rdata.strings).decode()
                    else:
                        target = rdata.to_text(origin=zone_obj.origin, relativize=False)
                    if record_type == RECORD_TYPE_CNAME:
                        target = normalize_fqdn(target)
                    records.append(
                        Endpoint(
                            name=fqdn,
                            target=target,
                            record_type=record_type,
                            ttl=rdataset.ttl,
                        )
                    )

        logger.info(f"Retrieved {len(records)} records from BIND zone {self.zone}")
        return records

    def apply_changes(self, changes: Changes) -> None:
        """Send the change-set to BIND as one dynamic update."""
        update = dns.update.Update(self.zone, keyring=self.keyring)
        count = 0

        for record in self._in_domain(changes.delete):
            update.delete(self._name(record), record.record_type, self._rdata(record))
            count += 1

        for old, new in zip(changes.update_old, changes.update_new):
            if not self.domain_filter.match(new.name):
                continue
            update.delete(self._name(old), old.record_type, self._rdata(old))
            update.add(self._name(new), self._ttl(new), new.record_type, self._rdata(new))
            count += 1

        for record in self._in_domain(changes.create):
            update.add(
                self._name(record), self._ttl(record), record.record_type, self._rdata(record)
            )
            count += 1

        if count == 0:
            logger.info("No BIND changes to send")
            return

        response = dns.query.tcp(update, self.nameserver, port=self.port, timeout=self.timeout)
        if response.rcode() != dns.rcode.NOERROR:
            self._handle_dns_error(response, "apply changes to")
        logger.info(f"Sent {count} record changes to BIND zone {self.zone}")

    def _in_domain(self, records: List[Endpoint]) -> List[Endpoint]:
        return [record for record in records if self.domain_filter.match(record.name)]

    def _name(self, record: Endpoint) -> dns.name.Name:
        return dns.name.from_text(record.name)

    def _ttl(self, record: Endpoint) -> int:
        return record.ttl if record.ttl_configured else self.default_ttl

    def _rdata(self, record: Endpoint) -> str:
        target = record.target
        if record.record_type == RECORD_TYPE_CNAME and not target.endswith("."):
            return f"{target}."
        if record.record_type == RECORD_TYPE_TXT:
            escaped = target.replace("\\", "\\\\").replace('"', '\\"')
            return f'"{escaped}"'
        return target

    def _handle_dns_error(self, response: dns.message.Message, operation: str) -> None:
        """Handle DNS error responses by logging and raising appropriate exceptions."""
        error_message = (
            f"DNS update failed with response code: {dns.rcode.to_text(response.rcode())}"
        )
        if response.answer:
            error_message += f", server response: {response.answer}"
        logger.error(error_message)
        raise RuntimeError(f"Failed to {operation} the zone {self.zone}: {error_message}")
