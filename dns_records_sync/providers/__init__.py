"""
DNS provider implementations.

This package contains implementations for the supported DNS backends:
BIND through dynamic updates, and an in-memory provider.
"""

from .base_provider import DNSProvider
from .bind_provider import BINDProvider
from .factory import get_provider
from .inmemory_provider import InMemoryProvider

__all__ = ["DNSProvider", "BINDProvider", "InMemoryProvider", "get_provider"]
