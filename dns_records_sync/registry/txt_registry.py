"""
TXT Registry - ownership tracking through TXT records

Each managed record ``name`` is accompanied by a TXT record named
``prefix + name`` whose text carries the owner id. Only records owned by
this instance are ever updated or deleted.
"""

import logging
from typing import Dict, List

from ..core.endpoint import OWNER_LABEL_KEY, RECORD_TYPE_TXT, Endpoint
from ..core.labels import InvalidHeritageError, parse_labels, serialize_labels
from ..core.plan import Changes
from ..providers.base_provider import DNSProvider
from .base_registry import Registry

logger = logging.getLogger(__name__)


class TXTRegistry(Registry):
    """Registry keeping ownership labels in TXT records next to each record."""

    def __init__(self, provider: DNSProvider, owner_id: str, prefix: str = ""):
        if not owner_id:
            raise ValueError("TXT registry requires a non-empty owner id")
        self.provider = provider
        self.owner_id = owner_id
        self.prefix = prefix
        # Ownership records seen by the last records() call, by endpoint name
        self._ownership_records: Dict[str, Endpoint] = {}

    def records(self) -> List[Endpoint]:
        """
        Get current records with labels taken from their ownership TXT records.

        Ownership TXT records themselves are not returned. TXT records without
        this tool's heritage are returned as ordinary records.
        """
        records = self.provider.records()

        endpoints = []
        label_map: Dict[str, Dict[str, str]] = {}
        ownership_records: Dict[str, Endpoint] = {}
        for record in records:
            if record.record_type != RECORD_TYPE_TXT:
                endpoints.append(record)
                continue

            try:
                labels = parse_labels(record.target)
            except InvalidHeritageError:
                endpoints.append(record)
                continue

            endpoint_name = self._endpoint_name(record.name)
            label_map[endpoint_name] = labels
            ownership_records[endpoint_name] = record

        self._ownership_records = ownership_records

        decorated = []
        for endpoint in endpoints:
            labels = label_map.get(endpoint.name)
            decorated.append(endpoint.with_labels(labels) if labels else endpoint)

        logger.debug(f"Found {len(label_map)} ownership records")
        return decorated

    def apply_changes(self, changes: Changes) -> None:
        """Apply owned changes and keep the ownership TXT records in step."""
        updates = [
            (old, new)
            for old, new in zip(changes.update_old, changes.update_new)
            if self._owned(old)
        ]
        skipped = len(changes.update_old) - len(updates)
        deletes = [record for record in changes.delete if self._owned(record)]
        skipped += len(changes.delete) - len(deletes)
        if skipped:
            logger.info(f"Skipping {skipped} changes to records not owned by '{self.owner_id}'")

        creates = []
        for record in changes.create:
            labels = dict(record.labels)
            labels[OWNER_LABEL_KEY] = self.owner_id
            creates.append(record.with_labels(labels))

        for record in list(creates):
            ownership = self._ownership_record(record)
            existing = self._ownership_records.get(record.name)
            if existing is None:
                creates.append(ownership)
            elif parse_labels(existing.target) != record.labels:
                # Left behind after its record was removed by someone else
                updates.append((existing, ownership))

        deletes.extend(
            [self._ownership_records.get(record.name) or self._ownership_record(record)
             for record in deletes]
        )

        self.provider.apply_changes(
            Changes(
                create=creates,
                update_old=[old for old, _ in updates],
                update_new=[new for _, new in updates],
                delete=deletes,
            )
        )

    def _owned(self, record: Endpoint) -> bool:
        return record.labels.get(OWNER_LABEL_KEY) == self.owner_id

    def _ownership_record(self, record: Endpoint) -> Endpoint:
        return Endpoint(
            name=self._txt_name(record.name),
            target=serialize_labels(record.labels, with_quotes=False),
            record_type=RECORD_TYPE_TXT,
        )

    def _txt_name(self, name: str) -> str:
        return f"{self.prefix}{name}"

    def _endpoint_name(self, txt_name: str) -> str:
        if self.prefix and txt_name.startswith(self.prefix):
            return txt_name[len(self.prefix):]
        return txt_name
