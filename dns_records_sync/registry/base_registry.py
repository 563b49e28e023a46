"""
Base registry interface.

A registry sits between the planner and a DNS provider and keeps track of
which records are owned by this instance.
"""

from abc import ABC, abstractmethod
from typing import List

from ..core.endpoint import Endpoint
from ..core.plan import Changes


class Registry(ABC):
    """Abstract base class for ownership registries."""

    @abstractmethod
    def records(self) -> List[Endpoint]:
        """Get current records, decorated with ownership labels."""
        pass

    @abstractmethod
    def apply_changes(self, changes: Changes) -> None:
        """Execute a change-set, including ownership bookkeeping."""
        pass
