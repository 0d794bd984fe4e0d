"""Decision pipeline: normalizer, scorer and classifier in sequence."""

from __future__ import annotations

from nofomo_core.config.schema import EngineConfig
from nofomo_core.engine.classifier import classify
from nofomo_core.engine.normalizer import normalize
from nofomo_core.engine.scorer import score_impulse
from nofomo_core.models import Decision, TradeIntent


def evaluate(intent: TradeIntent, config: EngineConfig) -> Decision:
    """Compute a fresh Decision for *intent*. Pure; never raises on bad market data."""
    signals = normalize(intent, config)
    impulse = score_impulse(signals, config.weights)
    return classify(signals, impulse, config)
