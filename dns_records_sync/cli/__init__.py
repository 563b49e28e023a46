"""
Command-line interface components.

This package contains CLI tools and entry points for DNS Records Sync.
"""

from .main import main

__all__ = ["main"]
