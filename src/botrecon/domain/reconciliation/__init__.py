"""Reconciliation of computed classifications against stored record state.

Flow for one record:
1) re-check the initial address when the latest one yields no bot
2) build candidate properties from the final classification
3) drop candidates equal to the stored state (loose equality)
4) pick the identity the update is recorded under
"""

from __future__ import annotations

from .normalize import normalize_value, values_match
from .plan import ReconciliationPlan
from .planner import ReconciliationPlanner

__all__ = [
    "ReconciliationPlan",
    "ReconciliationPlanner",
    "normalize_value",
    "values_match",
]
