"""
Domain suffix filter used for base-domain inclusion and provider zone limits.
"""

from typing import Iterable, List

from .validators import normalize_fqdn


class DomainFilter:
    """Matches names that equal or sit below one of the configured domains."""

    def __init__(self, domains: Iterable[str] = ()):
        self.domains: List[str] = [
            normalize_fqdn(domain) for domain in domains or [] if domain.strip()
        ]

    def is_configured(self) -> bool:
        return bool(self.domains)

    def match(self, name: str) -> bool:
        """
        Return True if name is under one of the domains.

        Matching happens at a label boundary, so ``cluster.example.org``
        matches ``foo.cluster.example.org`` but not ``foo.example.org`` or
        ``foocluster.example.org``. An unconfigured filter matches everything.
        """
        if not self.domains:
            return True

        name = normalize_fqdn(name)
        for domain in self.domains:
            if name == domain or name.endswith(f".{domain}"):
                return True
        return False

    def __repr__(self) -> str:
        return f"DomainFilter({self.domains!r})"
