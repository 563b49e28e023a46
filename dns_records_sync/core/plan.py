"""
Plan - Core logic for DNS reconciliation planning

This module computes the changes needed to move the records currently
published by a DNS backend towards the desired records, and passes those
changes through the configured policies.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence

from .endpoint import Endpoint

logger = logging.getLogger(__name__)


@dataclass
class Changes:
    """Lists of actions to be executed by a DNS provider."""

    create: List[Endpoint] = field(default_factory=list)
    # update_old[i] and update_new[i] always refer to the same name
    update_old: List[Endpoint] = field(default_factory=list)
    update_new: List[Endpoint] = field(default_factory=list)
    delete: List[Endpoint] = field(default_factory=list)

    @property
    def total_changes(self) -> int:
        return len(self.create) + len(self.update_new) + len(self.delete)

    def has_changes(self) -> bool:
        return self.total_changes > 0


@dataclass(frozen=True)
class Plan:
    """
    Converts lists of desired and current records into create, update and
    delete actions.

    Attributes:
        current: Records currently published, as reported by the registry
        desired: Records that should be published
        policies: Policies applied, in order, to the computed changes
        changes: Populated on the Plan returned by calculate()
    """

    current: Sequence[Endpoint]
    desired: Sequence[Endpoint]
    policies: Sequence = ()
    changes: Optional[Changes] = None

    def calculate(self, log: Optional[logging.Logger] = None) -> "Plan":
        """
        Compute the actions needed to move current state towards desired state.

        Records are matched by name only. The desired endpoints passed in are
        never modified: update targets are new Endpoint values.

        Args:
            log: Optional logger receiving planning diagnostics

        Returns:
            A new Plan with the same current/desired lists and changes populated
        """
        log = log or logger
        changes = Changes()
        current_by_name = _index_by_name(self.current)
        desired_by_name = _index_by_name(self.desired)

        for desired in self.desired:
            current = current_by_name.get(desired.name)

            if current is None:
                log.debug(f"Planning creation {desired}")
                changes.create.append(desired)
                continue

            target_changed = _target_changed(desired, current)
            update_ttl = _should_update_ttl(desired, current)

            if not target_changed and not update_ttl:
                log.debug(f"Skipping endpoint {desired} because nothing has changed")
                continue

            log.debug(f"Updating old {current}")
            changes.update_old.append(current)

            updated = desired.inherit_from(
                current, record_type=target_changed, ttl=not update_ttl
            )
            log.debug(f"Updating new {updated}")
            changes.update_new.append(updated)

        for current in self.current:
            if current.name not in desired_by_name:
                log.debug(f"Planning deletion {current}")
                changes.delete.append(current)

        for policy in self.policies:
            changes = policy.apply(changes)

        return Plan(
            current=self.current,
            desired=self.desired,
            policies=self.policies,
            changes=changes,
        )


def _target_changed(desired: Endpoint, current: Endpoint) -> bool:
    return desired.target != current.target


def _should_update_ttl(desired: Endpoint, current: Endpoint) -> bool:
    if not desired.ttl_configured:
        return False
    return desired.ttl != current.ttl


def _index_by_name(records: Sequence[Endpoint]) -> Dict[str, Endpoint]:
    """Map each name to the first record carrying it."""
    index = {}
    for record in records:
        index.setdefault(record.name, record)
    return index
