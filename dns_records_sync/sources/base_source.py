"""
Base source interface.

This module defines the abstract base class that all endpoint sources must implement.
"""

from abc import ABC, abstractmethod
from typing import List

from ..core.endpoint import Endpoint


class Source(ABC):
    """Abstract base class for producers of desired endpoints."""

    @abstractmethod
    def endpoints(self) -> List[Endpoint]:
        """Return the desired endpoints, raising if they cannot be fetched."""
        pass
