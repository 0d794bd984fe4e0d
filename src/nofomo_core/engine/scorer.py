"""Impulse scorer: weighted sum of normalized contributions."""

from __future__ import annotations

import math
from dataclasses import dataclass

from nofomo_core.config.schema import ScoringWeights
from nofomo_core.engine.normalizer import Signals

# Fixed order, also the tie-break order for reasons
FACTORS = ("volatility", "sentiment_alignment", "sentiment_extremity")


@dataclass(frozen=True)
class ImpulseScore:
    score: int
    weighted: dict[str, float]


def clamp(value: float, low: float = 0.0, high: float = 100.0) -> float:
    if math.isnan(value):
        return low
    return max(low, min(high, value))


def round_half_up(value: float) -> int:
    """Round a non-negative value, .5 going up (no banker's rounding)."""
    return int(math.floor(value + 0.5))


def score_impulse(signals: Signals, weights: ScoringWeights) -> ImpulseScore:
    """Combine contributions into a 0-100 impulse score.

    Returns the score together with each factor's weighted contribution,
    which the classifier ranks to build reasons.
    """
    weighted = {factor: getattr(weights, factor) * getattr(signals, factor) for factor in FACTORS}
    total = clamp(sum(weighted.values()))
    return ImpulseScore(score=round_half_up(total), weighted=weighted)
