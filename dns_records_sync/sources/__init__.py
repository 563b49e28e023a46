"""
Endpoint sources.

This package contains the producers of desired endpoints and the filter
source narrowing them before planning.
"""

from .base_source import Source
from .csv import CSVSource
from .filter_source import FilterSource
from .multi_source import MultiSource
from .static_source import StaticSource

__all__ = ["Source", "CSVSource", "FilterSource", "MultiSource", "StaticSource"]
