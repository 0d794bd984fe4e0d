"""NoFOMO scoring engine: pure functions from trade intent to Decision."""

from nofomo_core.engine.classifier import STABLE_REASON, build_reasons, classify, classify_action
from nofomo_core.engine.normalizer import (
    Signals,
    normalize,
    parse_float_or_default,
    parse_index_or_none,
)
from nofomo_core.engine.pipeline import evaluate
from nofomo_core.engine.scorer import FACTORS, ImpulseScore, score_impulse

__all__ = [
    "FACTORS",
    "ImpulseScore",
    "STABLE_REASON",
    "Signals",
    "build_reasons",
    "classify",
    "classify_action",
    "evaluate",
    "normalize",
    "parse_float_or_default",
    "parse_index_or_none",
    "score_impulse",
]
