"""Pydantic domain models."""

from nofomo_core.models.decision import Action, Decision, DecisionLogEntry, LoggedMarketData
from nofomo_core.models.intent import Direction, MarketSnapshot, SentimentSnapshot, TradeIntent

__all__ = [
    "Action",
    "Decision",
    "DecisionLogEntry",
    "Direction",
    "LoggedMarketData",
    "MarketSnapshot",
    "SentimentSnapshot",
    "TradeIntent",
]
