"""
Base DNS provider interface.

This module defines the abstract base class that all DNS providers must implement.
"""

from abc import ABC, abstractmethod
from typing import List

from ..core.endpoint import Endpoint
from ..core.plan import Changes


class DNSProvider(ABC):
    """Abstract base class for DNS providers."""

    @abstractmethod
    def records(self) -> List[Endpoint]:
        """Get all DNS records published by the backend."""
        pass

    @abstractmethod
    def apply_changes(self, changes: Changes) -> None:
        """Execute a change-set against the backend."""
        pass
