"""
In-memory DNS provider for testing and demonstration.

This module provides a DNS provider that stores records in memory
for safe testing, dry runs and demonstration purposes.
"""

import logging
from dataclasses import replace
from typing import Dict, List, Optional, Tuple

from ..core.endpoint import Endpoint
from ..core.plan import Changes
from ..utils.domain_filter import DomainFilter
from .base_provider import DNSProvider

logger = logging.getLogger(__name__)

RecordKey = Tuple[str, str]


class InMemoryProvider(DNSProvider):
    """DNS provider keeping its records in a dictionary."""

    def __init__(self, config: Dict = None, domain_filter: Optional[DomainFilter] = None):
        """Initialize in-memory provider, optionally seeded from config records."""
        self.domain_filter = domain_filter or DomainFilter()
        self._records: Dict[RecordKey, Endpoint] = {}

        for entry in (config or {}).get("records", []):
            ttl = entry.get("ttl")
            self._store(
                Endpoint(
                    name=entry["name"],
                    target=entry["target"],
                    record_type=entry.get("type", "A"),
                    ttl=int(ttl) if ttl is not None else None,
                )
            )
        logger.info(f"In-memory DNS provider initialized with {len(self._records)} records")

    def records(self) -> List[Endpoint]:
        """Get all DNS records inside the provider's domains."""
        records = [
            _copy(record)
            for record in self._records.values()
            if self.domain_filter.match(record.name)
        ]
        logger.info(f"In-memory: Retrieved {len(records)} records")
        return records

    def apply_changes(self, changes: Changes) -> None:
        """
        Apply a change-set atomically.

        Raises:
            ValueError: If a create targets an existing record or an update
                or delete targets a missing one. Nothing is applied then.
        """
        creates = self._in_domain(changes.create)
        deletes = self._in_domain(changes.delete)
        updates = [
            (old, new)
            for old, new in zip(changes.update_old, changes.update_new)
            if self.domain_filter.match(new.name)
        ]

        self._validate(creates, updates, deletes)

        for record in deletes:
            del self._records[_key(record)]
            logger.info(f"In-memory: Deleted record {record}")

        for old, new in updates:
            del self._records[_key(old)]
            self._store(new)
            logger.info(f"In-memory: Updated record {old} -> {new}")

        for record in creates:
            self._store(record)
            logger.info(f"In-memory: Created record {record}")

    def _validate(self, creates, updates, deletes) -> None:
        seen = set()
        for record in creates:
            key = _key(record)
            if key in self._records or key in seen:
                raise ValueError(f"Record {record.name} ({record.record_type}) already exists")
            seen.add(key)

        for old, _ in updates:
            if _key(old) not in self._records:
                raise ValueError(f"Record {old.name} not found for update")

        for record in deletes:
            if _key(record) not in self._records:
                raise ValueError(f"Record {record.name} not found for deletion")

    def _in_domain(self, records: List[Endpoint]) -> List[Endpoint]:
        kept = []
        for record in records:
            if self.domain_filter.match(record.name):
                kept.append(record)
            else:
                logger.warning(f"In-memory: Skipping {record.name}, outside managed domains")
        return kept

    def _store(self, record: Endpoint) -> None:
        # Labels belong to the registry and are not persisted by the backend
        self._records[_key(record)] = replace(record, labels={})


def _key(record: Endpoint) -> RecordKey:
    return record.name, record.record_type


def _copy(record: Endpoint) -> Endpoint:
    return replace(record, labels=dict(record.labels))
