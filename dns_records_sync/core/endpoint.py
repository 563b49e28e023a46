"""
Endpoint - the DNS record unit exchanged between sources, planner and providers.
"""

from dataclasses import dataclass, field, replace
from typing import Dict, Optional

RECORD_TYPE_A = "A"
RECORD_TYPE_CNAME = "CNAME"
RECORD_TYPE_TXT = "TXT"

SUPPORTED_RECORD_TYPES = (RECORD_TYPE_A, RECORD_TYPE_CNAME, RECORD_TYPE_TXT)

# Label key holding the id of the instance that owns a record.
OWNER_LABEL_KEY = "owner"


def ttl_is_configured(ttl: Optional[int]) -> bool:
    """Return True when a TTL was explicitly requested."""
    return ttl is not None


@dataclass
class Endpoint:
    """A single DNS record: name, type, target, TTL and ownership labels."""

    name: str
    target: str
    record_type: str = RECORD_TYPE_A
    ttl: Optional[int] = None
    labels: Dict[str, str] = field(default_factory=dict)

    @property
    def ttl_configured(self) -> bool:
        return ttl_is_configured(self.ttl)

    @property
    def owner(self) -> str:
        return self.labels.get(OWNER_LABEL_KEY, "")

    def with_labels(self, labels: Dict[str, str]) -> "Endpoint":
        """Return a copy of this endpoint carrying the given labels."""
        return replace(self, labels=dict(labels))

    def inherit_from(
        self, current: "Endpoint", record_type: bool = False, ttl: bool = False
    ) -> "Endpoint":
        """
        Build the update target for this desired endpoint.

        Labels missing here are filled in from the current record, so the
        owner id assigned by the registry survives the update. The record
        type and TTL are taken from the current record when requested.
        The desired endpoint itself is left untouched.

        Args:
            current: The record currently published under the same name
            record_type: Take the record type from the current record
            ttl: Take the TTL from the current record

        Returns:
            A new Endpoint
        """
        labels = dict(self.labels)
        for key, value in current.labels.items():
            if not labels.get(key):
                labels[key] = value

        return replace(
            self,
            labels=labels,
            record_type=current.record_type if record_type else self.record_type,
            ttl=current.ttl if ttl else self.ttl,
        )

    def __str__(self) -> str:
        ttl = self.ttl if self.ttl_configured else "-"
        return f"{self.name} {ttl} IN {self.record_type} {self.target}"
