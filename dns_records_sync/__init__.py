"""
DNS Records Sync - Reconcile desired DNS records with a DNS backend

Computes the create, update and delete operations that move the records
published by a DNS provider towards a desired set, filtered by CIDR, name
and base-domain rules and adjusted by synchronization policies.
"""

__version__ = "0.4.0"
__author__ = "DNS Records Sync Team"
__description__ = "Policy-driven DNS record reconciliation"

from .core.controller import Controller
from .core.endpoint import Endpoint
from .core.plan import Changes, Plan
from .core.policy import Policy, SyncPolicy, UpsertOnlyPolicy
from .sources.filter_source import FilterSource

__all__ = [
    "Controller",
    "Endpoint",
    "Changes",
    "Plan",
    "Policy",
    "SyncPolicy",
    "UpsertOnlyPolicy",
    "FilterSource",
]
