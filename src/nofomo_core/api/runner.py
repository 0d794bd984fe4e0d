#!/usr/bin/env python3
"""FastAPI server runner."""

from __future__ import annotations

import os

import uvicorn
import structlog

from nofomo_core.api.app import create_app
from nofomo_core.config.loader import load_config
from nofomo_core.logging.setup import setup_logging

logger = structlog.get_logger("runner")


def main(config_path: str | None = None, host: str | None = None, port: int | None = None) -> None:
    """Run the decision API server."""
    config = load_config(config_path or os.environ.get("NOFOMO_CONFIG", "config.yaml"))
    setup_logging(config.logging.level, config.logging.format)

    host = host or config.api.host
    port = port or config.api.port
    logger.info("starting_decision_api", host=host, port=port)

    try:
        uvicorn.run(
            create_app(config),
            host=host,
            port=port,
            log_config=None  # Use our structlog setup
        )
    except Exception as e:
        logger.error("decision_api_failed", error=str(e))
        raise


if __name__ == "__main__":
    main()
