"""Signal normalizer: raw market fields to bounded caution contributions.

Every contribution is on a 0-100 scale meaning "how much this factor alone
argues for caution". Nothing here raises: missing or malformed input
degrades that factor to 0 and lowers the decision confidence instead.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Any

from nofomo_core.config.schema import ConfidenceConfig, EngineConfig, VolatilityTier
from nofomo_core.models import TradeIntent

ALIGNED_LABEL = {"LONG": "BULLISH", "SHORT": "BEARISH"}


@dataclass(frozen=True)
class Signals:
    """Normalized inputs for one trade intent."""

    change24h: float
    fear_greed_index: int | None
    sentiment_label: str | None
    sentiment_confidence: float
    volatility: float
    sentiment_alignment: float
    sentiment_extremity: float
    confidence: int


def parse_float_or_default(value: Any, default: float = 0.0) -> float:
    """Parse *value* as a finite float, or return *default*.

    Accepts numbers and numeric strings. None, booleans, unparsable strings,
    NaN and infinities all yield *default*.
    """
    if value is None or isinstance(value, bool):
        return default
    if isinstance(value, str):
        value = value.strip()
    elif not isinstance(value, (int, float, Decimal)):
        return default
    try:
        result = float(Decimal(value))
    except (InvalidOperation, ValueError, OverflowError):
        return default
    return result if math.isfinite(result) else default


def parse_index_or_none(value: Any) -> int | None:
    """Parse a fear/greed index; anything not an integer in [0, 100] is absent."""
    parsed = parse_float_or_default(value, default=math.nan)
    if math.isnan(parsed) or not parsed.is_integer():
        return None
    index = int(parsed)
    if 0 <= index <= 100:
        return index
    return None


def volatility_contribution(change24h: float, tiers: list[VolatilityTier]) -> float:
    """Step function on abs(change24h); direction of the move is irrelevant.

    *tiers* must be sorted by ``min_abs_change`` descending (EngineConfig
    guarantees this).
    """
    magnitude = abs(change24h)
    for tier in tiers:
        if magnitude >= tier.min_abs_change:
            return tier.contribution
    return 0.0


def sentiment_extremity_contribution(fear_greed_index: int | None) -> float:
    """U-shaped: 0 at neutral (50), 100 at extreme fear (0) or greed (100)."""
    if fear_greed_index is None:
        return 0.0
    return float(min(100, 2 * abs(fear_greed_index - 50)))


def sentiment_alignment_contribution(
    label: str | None,
    confidence_percent: float,
    direction: str,
) -> float:
    """Herd signal: crowd sentiment agrees with the requested direction.

    BULLISH + LONG and BEARISH + SHORT count equally, scaled by the
    provider's confidence. Contrarian and neutral trades contribute 0.
    """
    if label is None or ALIGNED_LABEL.get(direction) != label:
        return 0.0
    return max(0.0, min(100.0, confidence_percent))


def compute_confidence(has_fear_greed: bool, has_sentiment: bool, cfg: ConfidenceConfig) -> int:
    confidence = cfg.base
    if not has_fear_greed:
        confidence -= cfg.missing_fear_greed_penalty
    if not has_sentiment:
        confidence -= cfg.missing_sentiment_penalty
    return max(0, min(100, confidence))


def _sentiment_label(raw: Any) -> str | None:
    if not isinstance(raw, str):
        return None
    label = raw.strip().upper()
    return label if label in ("BULLISH", "BEARISH", "NEUTRAL") else None


def normalize(intent: TradeIntent, config: EngineConfig) -> Signals:
    """Turn a trade intent into per-factor contributions and a confidence."""
    market = intent.market_data
    change24h = parse_float_or_default(market.change24h)
    fear_greed = parse_index_or_none(market.fear_greed_index)

    label: str | None = None
    sentiment_confidence = 0.0
    if market.sentiment is not None:
        label = _sentiment_label(market.sentiment.label)
        sentiment_confidence = parse_float_or_default(market.sentiment.confidence_percent)

    return Signals(
        change24h=change24h,
        fear_greed_index=fear_greed,
        sentiment_label=label,
        sentiment_confidence=sentiment_confidence,
        volatility=volatility_contribution(change24h, config.volatility_tiers),
        sentiment_alignment=sentiment_alignment_contribution(
            label, sentiment_confidence, intent.direction,
        ),
        sentiment_extremity=sentiment_extremity_contribution(fear_greed),
        confidence=compute_confidence(fear_greed is not None, label is not None, config.confidence),
    )
