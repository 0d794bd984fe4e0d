"""Trade intent models: the input to a decision.

Numeric market fields are kept raw here. Parsing (and degrading bad values
to "absent") is the Normalizer's job, so a malformed number never turns a
request into a validation error.
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

Direction = Literal["LONG", "SHORT"]


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class SentimentSnapshot(_CamelModel):
    """Social sentiment as reported by the sentiment provider."""

    label: Any = Field(default=None, validation_alias=AliasChoices("label", "overallSentiment"))
    confidence_percent: Any = None


class MarketSnapshot(_CamelModel):
    """Caller-supplied market context for one symbol."""

    price: str | None = None
    change24h: Any = Field(default=None, alias="change24h")
    fear_greed_index: Any = None
    high24h: Any = Field(default=None, alias="high24h")
    low24h: Any = Field(default=None, alias="low24h")
    sentiment: SentimentSnapshot | None = None

    @field_validator("price", mode="before")
    @classmethod
    def _price_to_str(cls, v: Any) -> str | None:
        # Price is display-only; anything unusable is logged as absent
        if isinstance(v, str):
            return v
        if isinstance(v, (int, float)) and not isinstance(v, bool):
            return str(v)
        return None

    @field_validator("sentiment", mode="before")
    @classmethod
    def _drop_malformed_sentiment(cls, v: Any) -> Any:
        if v is None or isinstance(v, (dict, SentimentSnapshot)):
            return v
        return None


class TradeIntent(_CamelModel):
    """A user's request to open a position, evaluated once and discarded."""

    symbol: str
    direction: Direction
    market_data: MarketSnapshot = Field(default_factory=MarketSnapshot)

    @field_validator("symbol")
    @classmethod
    def _normalize_symbol(cls, v: str) -> str:
        v = v.strip().upper()
        if not v:
            raise ValueError("symbol must not be empty")
        return v

    @field_validator("market_data", mode="before")
    @classmethod
    def _null_market_data(cls, v: Any) -> Any:
        return {} if v is None else v
