"""Append-only audit log of every decision."""

from nofomo_core.decision_log.clock import MonotonicClock
from nofomo_core.decision_log.store import (
    MAX_READ_LIMIT,
    MIN_READ_LIMIT,
    DecisionLogError,
    DecisionLogStore,
    clamp_limit,
)

__all__ = [
    "MAX_READ_LIMIT",
    "MIN_READ_LIMIT",
    "DecisionLogError",
    "DecisionLogStore",
    "MonotonicClock",
    "clamp_limit",
]
