"""Configuration schema: Pydantic models for config.yaml."""

from __future__ import annotations

import math
from typing import Literal

from pydantic import BaseModel, Field, model_validator

Sensitivity = Literal["low", "balanced", "high"]

# (t_low, t_high) per sensitivity preset; higher sensitivity warns earlier
SENSITIVITY_PRESETS: dict[str, tuple[int, int]] = {
    "low": (40, 70),
    "balanced": (20, 45),
    "high": (10, 30),
}


class DatabaseConfig(BaseModel):
    url: str = "sqlite:///data/decision-log.db"


class LoggingConfig(BaseModel):
    level: str = "INFO"
    format: str = "json"


class ScoringWeights(BaseModel):
    """Factor weights for the impulse score. Must sum to 1.0."""

    volatility: float = Field(default=0.5, ge=0.0)
    sentiment_alignment: float = Field(default=0.3, ge=0.0)
    sentiment_extremity: float = Field(default=0.2, ge=0.0)

    @model_validator(mode="after")
    def _check_sum(self) -> ScoringWeights:
        total = self.volatility + self.sentiment_alignment + self.sentiment_extremity
        if not math.isclose(total, 1.0, abs_tol=1e-6):
            raise ValueError(f"weights must sum to 1.0, got {total}")
        return self


class VolatilityTier(BaseModel):
    """Minimum abs(change24h) percent at which *contribution* applies."""

    min_abs_change: float = Field(ge=0.0)
    contribution: float = Field(ge=0.0, le=100.0)


def _default_volatility_tiers() -> list[VolatilityTier]:
    return [
        VolatilityTier(min_abs_change=20, contribution=100),
        VolatilityTier(min_abs_change=15, contribution=85),
        VolatilityTier(min_abs_change=10, contribution=70),
        VolatilityTier(min_abs_change=5, contribution=50),
        VolatilityTier(min_abs_change=3, contribution=25),
    ]


class Thresholds(BaseModel):
    t_low: int = Field(gt=0, lt=100)
    t_high: int = Field(gt=0, lt=100)

    @model_validator(mode="after")
    def _check_order(self) -> Thresholds:
        if self.t_low >= self.t_high:
            raise ValueError(f"t_low ({self.t_low}) must be below t_high ({self.t_high})")
        return self


class ConfidenceConfig(BaseModel):
    base: int = Field(default=80, ge=0, le=100)
    missing_fear_greed_penalty: int = Field(default=12, ge=0, le=100)
    missing_sentiment_penalty: int = Field(default=12, ge=0, le=100)


class EngineConfig(BaseModel):
    weights: ScoringWeights = Field(default_factory=ScoringWeights)
    sensitivity: Sensitivity = "balanced"
    # Explicit thresholds win over the sensitivity preset
    thresholds: Thresholds | None = None
    volatility_tiers: list[VolatilityTier] = Field(default_factory=_default_volatility_tiers)
    warn_cooling_seconds: int = Field(default=20, gt=0)
    block_cooling_seconds: int = Field(default=180, gt=0)
    materiality_threshold: float = Field(default=5.0, ge=0.0)
    confidence: ConfidenceConfig = Field(default_factory=ConfidenceConfig)

    @model_validator(mode="after")
    def _check_tiers(self) -> EngineConfig:
        if self.warn_cooling_seconds > self.block_cooling_seconds:
            raise ValueError("warn_cooling_seconds must not exceed block_cooling_seconds")
        # Tiers are evaluated highest first; contributions must not increase
        # as the move shrinks, otherwise monotonicity breaks.
        ordered = sorted(self.volatility_tiers, key=lambda t: t.min_abs_change, reverse=True)
        for higher, lower in zip(ordered, ordered[1:]):
            if lower.contribution > higher.contribution:
                raise ValueError("volatility tier contributions must be monotonic")
        self.volatility_tiers = ordered
        return self

    def resolved_thresholds(self) -> Thresholds:
        """Explicit thresholds, or the ones implied by the sensitivity preset."""
        if self.thresholds is not None:
            return self.thresholds
        t_low, t_high = SENSITIVITY_PRESETS[self.sensitivity]
        return Thresholds(t_low=t_low, t_high=t_high)


class DecisionLogConfig(BaseModel):
    default_read_limit: int = Field(default=50, ge=1)
    max_read_limit: int = Field(default=500, ge=1, le=500)

    @model_validator(mode="after")
    def _check_limits(self) -> DecisionLogConfig:
        if self.default_read_limit > self.max_read_limit:
            raise ValueError("default_read_limit must not exceed max_read_limit")
        return self


class ApiConfig(BaseModel):
    host: str = "0.0.0.0"
    port: int = 8000
    cors_origins: list[str] = Field(default_factory=lambda: ["*"])


class AppConfig(BaseModel):
    database: DatabaseConfig = Field(default_factory=DatabaseConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    engine: EngineConfig = Field(default_factory=EngineConfig)
    decision_log: DecisionLogConfig = Field(default_factory=DecisionLogConfig)
    api: ApiConfig = Field(default_factory=ApiConfig)
