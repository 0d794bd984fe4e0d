"""Decision and audit log entry models."""

from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from nofomo_core.models.intent import Direction

Action = Literal["ALLOW", "WARN", "BLOCK"]


class Decision(BaseModel):
    """Verdict for one trade intent. Immutable once produced."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    action: Action
    impulse_score: int = Field(ge=0, le=100)
    confidence: int = Field(ge=0, le=100)
    cooling_seconds: int = Field(ge=0)
    reasons: tuple[str, ...] = Field(min_length=1)


class LoggedMarketData(BaseModel):
    """Reduced market snapshot kept with each log entry (sentiment omitted)."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    price: str | None = None
    change24h: str | None = Field(default=None, alias="change24h")
    fear_greed_index: int | None = None


class DecisionLogEntry(BaseModel):
    """A Decision plus provenance, self-contained for later review."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    request_id: str
    symbol: str
    direction: Direction
    decision: Decision
    market_data: LoggedMarketData
    created_at: datetime

    def to_payload(self) -> dict:
        """JSON-safe camelCase dict, the shape used on the wire and on disk."""
        return self.model_dump(mode="json", by_alias=True)
