"""Tests for Pydantic domain models."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from conftest import NOW, make_entry
from nofomo_core.models import Decision, DecisionLogEntry, TradeIntent


class TestTradeIntent:
    def test_symbol_normalized(self):
        intent = TradeIntent.model_validate({"symbol": " ethusdt ", "direction": "SHORT"})
        assert intent.symbol == "ETHUSDT"

    def test_market_data_defaults_to_empty(self):
        intent = TradeIntent.model_validate({"symbol": "BTC", "direction": "LONG", "marketData": None})
        assert intent.market_data.price is None
        assert intent.market_data.sentiment is None

    def test_camel_case_fields(self):
        intent = TradeIntent.model_validate({
            "symbol": "BTC",
            "direction": "LONG",
            "marketData": {
                "price": "1",
                "change24h": "2.5",
                "fearGreedIndex": 70,
                "sentiment": {"label": "BULLISH", "confidencePercent": 88},
            },
        })
        assert intent.market_data.change24h == "2.5"
        assert intent.market_data.fear_greed_index == 70
        assert intent.market_data.sentiment.confidence_percent == 88

    def test_unknown_fields_ignored(self):
        intent = TradeIntent.model_validate({
            "symbol": "BTC", "direction": "LONG", "leverage": 20,
            "marketData": {"klines": None, "volume": "100"},
        })
        assert intent.symbol == "BTC"

    def test_non_object_sentiment_dropped(self):
        intent = TradeIntent.model_validate({
            "symbol": "BTC", "direction": "LONG", "marketData": {"sentiment": "very bullish"},
        })
        assert intent.market_data.sentiment is None

    @pytest.mark.parametrize("price,expected", [
        ("68000", "68000"),
        (68000, "68000"),
        (1.5, "1.5"),
        (True, None),
        ({"usd": 1}, None),
        ([1, 2], None),
    ])
    def test_price_kept_as_text_or_dropped(self, price, expected):
        intent = TradeIntent.model_validate({
            "symbol": "BTC", "direction": "LONG", "marketData": {"price": price},
        })
        assert intent.market_data.price == expected

    def test_invalid_direction(self):
        with pytest.raises(ValidationError):
            TradeIntent.model_validate({"symbol": "BTC", "direction": "UP"})


class TestDecision:
    def test_frozen(self):
        d = Decision(action="ALLOW", impulse_score=0, confidence=68, cooling_seconds=0, reasons=("ok",))
        with pytest.raises(ValidationError):
            d.action = "BLOCK"

    def test_reasons_required(self):
        with pytest.raises(ValidationError):
            Decision(action="ALLOW", impulse_score=0, confidence=68, cooling_seconds=0, reasons=())

    @pytest.mark.parametrize("score", [-1, 101])
    def test_score_bounds(self, score):
        with pytest.raises(ValidationError):
            Decision(action="ALLOW", impulse_score=score, confidence=50, cooling_seconds=0, reasons=("x",))

    def test_wire_format(self):
        d = Decision(action="WARN", impulse_score=38, confidence=68, cooling_seconds=20, reasons=("r",))
        assert d.model_dump(mode="json", by_alias=True) == {
            "action": "WARN",
            "impulseScore": 38,
            "confidence": 68,
            "coolingSeconds": 20,
            "reasons": ["r"],
        }


class TestDecisionLogEntry:
    def test_payload_shape(self):
        payload = make_entry("r9", "WARN").to_payload()
        assert set(payload) == {"requestId", "symbol", "direction", "decision", "marketData", "createdAt"}
        assert payload["marketData"] == {"price": "68000", "change24h": "1.2", "fearGreedIndex": 52}

    def test_payload_round_trip(self):
        entry = make_entry("r9", "BLOCK")
        restored = DecisionLogEntry.model_validate(entry.to_payload())
        assert restored == entry
        assert restored.created_at == NOW
