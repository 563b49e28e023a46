"""
Registry without ownership tracking; every record is treated as managed.
"""

from typing import List

from ..core.endpoint import Endpoint
from ..core.plan import Changes
from ..providers.base_provider import DNSProvider
from .base_registry import Registry


class NoopRegistry(Registry):
    """Passes records and changes straight through to the provider."""

    def __init__(self, provider: DNSProvider):
        self.provider = provider

    def records(self) -> List[Endpoint]:
        return self.provider.records()

    def apply_changes(self, changes: Changes) -> None:
        self.provider.apply_changes(changes)
