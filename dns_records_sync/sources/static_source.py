"""
Static source returning a fixed list of endpoints, typically from the config file.
"""

import logging
from typing import Dict, Iterable, List

from ..core.endpoint import RECORD_TYPE_A, Endpoint
from .base_source import Source

logger = logging.getLogger(__name__)


class StaticSource(Source):
    """Source serving the endpoints it was created with."""

    def __init__(self, endpoints: Iterable[Endpoint]):
        self._endpoints = list(endpoints)

    @classmethod
    def from_config(cls, entries: Iterable[Dict]) -> "StaticSource":
        """
        Build a source from config entries such as
        ``{"name": "www.example.org", "target": "10.0.0.1", "type": "A", "ttl": 300}``.
        """
        endpoints = []
        for entry in entries or []:
            if "name" not in entry or "target" not in entry:
                raise ValueError(f"Static endpoint needs 'name' and 'target': {entry}")
            ttl = entry.get("ttl")
            endpoints.append(
                Endpoint(
                    name=str(entry["name"]).rstrip("."),
                    target=str(entry["target"]),
                    record_type=str(entry.get("type", RECORD_TYPE_A)).upper(),
                    ttl=int(ttl) if ttl is not None else None,
                )
            )
        logger.info(f"Loaded {len(endpoints)} static endpoints")
        return cls(endpoints)

    def endpoints(self) -> List[Endpoint]:
        return list(self._endpoints)
