"""
Ownership registries.

This package contains the registries wrapping a DNS provider: a pass-through
registry and a TXT-record based ownership registry.
"""

from .base_registry import Registry
from .noop_registry import NoopRegistry
from .txt_registry import TXTRegistry

__all__ = ["Registry", "NoopRegistry", "TXTRegistry"]
