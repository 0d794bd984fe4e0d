"""Tests for structured logging setup."""

from __future__ import annotations

import json

from nofomo_core.logging import bind_request_id, clear_request_context, get_logger, setup_logging


class TestSetupLogging:
    def test_json_format(self, capsys):
        setup_logging(level="INFO", log_format="json")
        logger = get_logger("test_json")
        logger.info("decision_evaluated", symbol="BTCUSDT")

        captured = capsys.readouterr()
        line = json.loads(captured.err.strip())
        assert line["event"] == "decision_evaluated"
        assert line["symbol"] == "BTCUSDT"
        assert line["level"] == "info"
        assert "timestamp" in line

    def test_console_format(self, capsys):
        setup_logging(level="INFO", log_format="console")
        logger = get_logger("test_console")
        logger.info("hello console", action="WARN")

        captured = capsys.readouterr()
        assert "hello console" in captured.err
        assert "WARN" in captured.err

    def test_log_level_filtering(self, capsys):
        setup_logging(level="WARNING", log_format="json")
        logger = get_logger("test_level")
        logger.info("should be hidden")
        logger.warning("should appear")

        captured = capsys.readouterr()
        assert "should be hidden" not in captured.err
        assert "should appear" in captured.err

    def test_get_logger_with_context(self, capsys):
        setup_logging(level="INFO", log_format="json")
        logger = get_logger("test_ctx", symbol="ETHUSDT", direction="SHORT")
        logger.info("context test")

        captured = capsys.readouterr()
        line = json.loads(captured.err.strip())
        assert line["symbol"] == "ETHUSDT"
        assert line["direction"] == "SHORT"

    def test_request_id_binding(self, capsys):
        setup_logging(level="INFO", log_format="json")
        bind_request_id("abc123")

        logger = get_logger("test_ctxvars")
        logger.info("with request id")
        clear_request_context()
        logger.info("without request id")

        lines = [json.loads(l) for l in capsys.readouterr().err.strip().splitlines()]
        assert lines[0]["request_id"] == "abc123"
        assert "request_id" not in lines[1]

    def test_stdlib_records_rendered(self, capsys):
        import logging

        setup_logging(level="INFO", log_format="json")
        logging.getLogger("uvicorn.error").warning("stdlib warning")

        line = json.loads(capsys.readouterr().err.strip())
        assert line["event"] == "stdlib warning"
