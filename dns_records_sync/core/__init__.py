"""
Core DNS reconciliation functionality.

This package contains the record model, the planner, the policies and the
controller driving them.
"""

from .controller import Controller
from .endpoint import Endpoint
from .plan import Changes, Plan
from .policy import Policy, SyncPolicy, UpsertOnlyPolicy

__all__ = [
    "Controller",
    "Endpoint",
    "Changes",
    "Plan",
    "Policy",
    "SyncPolicy",
    "UpsertOnlyPolicy",
]
