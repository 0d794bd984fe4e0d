"""Import all table modules so Base.metadata knows about them."""

from nofomo_core.db.tables.decision_log import DecisionLogRow

__all__ = ["DecisionLogRow"]
