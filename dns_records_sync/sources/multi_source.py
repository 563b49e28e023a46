"""
Multi source concatenating the endpoints of several sources.
"""

from typing import Iterable, List

from ..core.endpoint import Endpoint
from .base_source import Source


class MultiSource(Source):
    """Combines child sources; fails as soon as one child fails."""

    def __init__(self, sources: Iterable[Source]):
        self.sources = list(sources)

    def endpoints(self) -> List[Endpoint]:
        endpoints = []
        for source in self.sources:
            endpoints.extend(source.endpoints())
        return endpoints
