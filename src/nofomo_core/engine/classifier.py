"""Decision classifier: impulse score to action, cooling time and reasons.

Classification is stateless: every call stands alone. ``cooling_seconds``
is the wait the client UI is expected to enforce before letting the user
proceed. The engine has no way to stop a client that ignores it, so the
cooling period is an advisory control and not a security boundary.
"""

from __future__ import annotations

from nofomo_core.config.schema import EngineConfig, Thresholds
from nofomo_core.engine.normalizer import Signals
from nofomo_core.engine.scorer import FACTORS, ImpulseScore
from nofomo_core.models import Action, Decision

STABLE_REASON = "market conditions appear stable"


def classify_action(
    score: int,
    thresholds: Thresholds,
    warn_cooling_seconds: int,
    block_cooling_seconds: int,
) -> tuple[Action, int]:
    """Map an impulse score onto the three-tier ALLOW / WARN / BLOCK model."""
    if score >= thresholds.t_high:
        return "BLOCK", block_cooling_seconds
    if score >= thresholds.t_low:
        return "WARN", warn_cooling_seconds
    return "ALLOW", 0


def _volatility_reason(signals: Signals) -> str:
    if signals.volatility >= 85:
        level = "extreme"
    elif signals.volatility >= 70:
        level = "high"
    else:
        level = "elevated"
    change = signals.change24h
    shown = f"{change:.1f}" if abs(change) < 1000 else f"{change:.3g}"
    return f"24h change of {shown}% indicates {level} volatility"


def _alignment_reason(signals: Signals) -> str:
    side = "LONG" if signals.sentiment_label == "BULLISH" else "SHORT"
    return (
        f"social sentiment is {signals.sentiment_label} at "
        f"{signals.sentiment_confidence:.0f}% confidence, aligned with a {side} entry (herd risk)"
    )


def _extremity_reason(signals: Signals) -> str:
    index = signals.fear_greed_index
    mood = "greed" if index >= 50 else "fear"
    if abs(index - 50) >= 25:
        mood = f"extreme {mood}"
    return f"fear & greed index at {index} signals {mood}"


_REASON_BUILDERS = {
    "volatility": _volatility_reason,
    "sentiment_alignment": _alignment_reason,
    "sentiment_extremity": _extremity_reason,
}


def build_reasons(signals: Signals, impulse: ImpulseScore, materiality: float) -> list[str]:
    """One reason per material factor, strongest first. Never empty."""
    material = [
        (impulse.weighted[factor], position, factor)
        for position, factor in enumerate(FACTORS)
        if impulse.weighted[factor] > 0 and impulse.weighted[factor] >= materiality
    ]
    # Descending weight; equal weights keep FACTORS order
    material.sort(key=lambda item: (-item[0], item[1]))
    reasons = [_REASON_BUILDERS[factor](signals) for _, _, factor in material]
    return reasons or [STABLE_REASON]


def classify(signals: Signals, impulse: ImpulseScore, config: EngineConfig) -> Decision:
    action, cooling = classify_action(
        impulse.score,
        config.resolved_thresholds(),
        config.warn_cooling_seconds,
        config.block_cooling_seconds,
    )
    return Decision(
        action=action,
        impulse_score=impulse.score,
        confidence=signals.confidence,
        cooling_seconds=cooling,
        reasons=tuple(build_reasons(signals, impulse, config.materiality_threshold)),
    )
