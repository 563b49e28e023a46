"""
Synchronization policies applied to a computed change-set.
"""

from abc import ABC, abstractmethod

from .plan import Changes


class Policy(ABC):
    """Abstract base class for change-set policies."""

    name = ""

    @abstractmethod
    def apply(self, changes: Changes) -> Changes:
        """Return the change-set to pass on to the next policy."""
        pass


class SyncPolicy(Policy):
    """Allows every create, update and delete."""

    name = "sync"

    def apply(self, changes: Changes) -> Changes:
        return changes


class UpsertOnlyPolicy(Policy):
    """Allows creates and updates, never deletes existing records."""

    name = "upsert-only"

    def apply(self, changes: Changes) -> Changes:
        return Changes(
            create=list(changes.create),
            update_old=list(changes.update_old),
            update_new=list(changes.update_new),
            delete=[],
        )
