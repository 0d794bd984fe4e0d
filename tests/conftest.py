"""Shared test fixtures."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient

from nofomo_core.api.app import create_app
from nofomo_core.config.schema import AppConfig, EngineConfig
from nofomo_core.decision_log import DecisionLogStore
from nofomo_core.models import Decision, DecisionLogEntry, LoggedMarketData, TradeIntent

NOW = datetime(2026, 1, 1, 12, 0, 0, tzinfo=timezone.utc)


def make_intent(
    change24h=None,
    fear_greed_index=None,
    sentiment=None,
    direction="LONG",
    symbol="BTCUSDT",
    price="68000",
) -> TradeIntent:
    market: dict = {"price": price}
    if change24h is not None:
        market["change24h"] = change24h
    if fear_greed_index is not None:
        market["fearGreedIndex"] = fear_greed_index
    if sentiment is not None:
        market["sentiment"] = sentiment
    return TradeIntent.model_validate(
        {"symbol": symbol, "direction": direction, "marketData": market}
    )


def make_entry(request_id="r1", action="ALLOW", seconds=0, symbol="BTCUSDT") -> DecisionLogEntry:
    cooling = {"ALLOW": 0, "WARN": 20, "BLOCK": 180}[action]
    return DecisionLogEntry(
        request_id=request_id,
        symbol=symbol,
        direction="LONG",
        decision=Decision(
            action=action,
            impulse_score={"ALLOW": 5, "WARN": 30, "BLOCK": 60}[action],
            confidence=68,
            cooling_seconds=cooling,
            reasons=("market conditions appear stable",),
        ),
        market_data=LoggedMarketData(price="68000", change24h="1.2", fear_greed_index=52),
        created_at=NOW + timedelta(seconds=seconds),
    )


@pytest.fixture
def engine_config() -> EngineConfig:
    return EngineConfig()


@pytest.fixture
def db_url(tmp_path) -> str:
    return f"sqlite:///{tmp_path / 'data' / 'decision-log.db'}"


@pytest.fixture
def store(db_url):
    """An opened decision log store on a temporary SQLite file."""
    s = DecisionLogStore(db_url).open()
    yield s
    s.close()


@pytest.fixture
def app_config(db_url) -> AppConfig:
    return AppConfig.model_validate({"database": {"url": db_url}})


@pytest.fixture
def client(app_config):
    app = create_app(app_config)
    with TestClient(app) as c:
        yield c
