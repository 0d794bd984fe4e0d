"""Structured logging."""

from nofomo_core.logging.setup import (
    bind_request_id,
    clear_request_context,
    get_logger,
    setup_logging,
)

__all__ = ["bind_request_id", "clear_request_context", "get_logger", "setup_logging"]
