"""FastAPI application for the NoFOMO decision service."""

from __future__ import annotations

import uuid
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from datetime import datetime, timezone

import structlog
from fastapi import BackgroundTasks, Depends, FastAPI, Query, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from nofomo_core.api.errors import (
    NO_STORE,
    REQUEST_ID_HEADER,
    decision_log_exception_handler,
    validation_exception_handler,
)
from nofomo_core.config.schema import AppConfig
from nofomo_core.decision_log import (
    MAX_READ_LIMIT,
    MIN_READ_LIMIT,
    DecisionLogError,
    DecisionLogStore,
    MonotonicClock,
)
from nofomo_core.engine import evaluate, parse_index_or_none
from nofomo_core.logging import bind_request_id, clear_request_context
from nofomo_core.models import DecisionLogEntry, LoggedMarketData, TradeIntent

logger = structlog.get_logger("api")


def get_store(request: Request) -> DecisionLogStore:
    """Dependency returning the store opened in the lifespan."""
    return request.app.state.store


def get_config(request: Request) -> AppConfig:
    return request.app.state.config


def _logged_market_data(intent: TradeIntent) -> LoggedMarketData:
    market = intent.market_data
    return LoggedMarketData(
        price=market.price,
        change24h=None if market.change24h is None else str(market.change24h),
        fear_greed_index=parse_index_or_none(market.fear_greed_index),
    )


def append_entry(store: DecisionLogStore, entry: DecisionLogEntry) -> None:
    """Best-effort audit write; failures are logged, never raised."""
    try:
        store.append(entry)
    except DecisionLogError as exc:
        logger.error(
            "decision_log_append_failed",
            request_id=entry.request_id,
            symbol=entry.symbol,
            error=str(exc),
        )


def resolve_limit(limit: int | None, config: AppConfig) -> int:
    """Page size for a log read; above the configured maximum is a 400."""
    if limit is None:
        return config.decision_log.default_read_limit
    max_limit = config.decision_log.max_read_limit
    if limit > max_limit:
        raise RequestValidationError([{
            "type": "less_than_equal",
            "loc": ("query", "limit"),
            "msg": f"Input should be less than or equal to {max_limit}",
            "input": limit,
        }])
    return limit


def create_app(config: AppConfig | None = None, store: DecisionLogStore | None = None) -> FastAPI:
    """Build the API. *store* defaults to one at ``config.database.url``."""
    config = config or AppConfig()
    store = store or DecisionLogStore(
        config.database.url, max_read_limit=config.decision_log.max_read_limit,
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        # Verdicts are still served without an audit log; /health reports it
        try:
            store.open()
        except DecisionLogError as exc:
            logger.error("decision_log_unavailable", error=str(exc))
        logger.info(
            "decision_service_started",
            sensitivity=config.engine.sensitivity,
            thresholds=config.engine.resolved_thresholds().model_dump(),
        )
        yield
        store.close()
        logger.info("decision_service_stopped")

    app = FastAPI(
        title="NoFOMO Decision API",
        description="Impulse-trade risk verdicts and their audit log",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.config = config
    app.state.store = store
    app.state.clock = MonotonicClock()

    # Callers are the web app, the browser extension and the desktop app
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.api.cors_origins,
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=[REQUEST_ID_HEADER],
    )
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(DecisionLogError, decision_log_exception_handler)

    @app.middleware("http")
    async def request_context(request: Request, call_next):
        request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex
        request.state.request_id = request_id
        bind_request_id(request_id)
        try:
            response = await call_next(request)
        finally:
            clear_request_context()
        response.headers[REQUEST_ID_HEADER] = request_id
        response.headers.update(NO_STORE)
        return response

    @app.get("/health")
    async def health_check(store: DecisionLogStore = Depends(get_store)):
        """Service health, including whether the decision log is readable."""
        checks: dict[str, dict] = {}
        try:
            recent = store.ping()
            checks["decisionLog"] = {"ok": True, "detail": f"{recent} recent"}
        except DecisionLogError as exc:
            checks["decisionLog"] = {"ok": False, "detail": str(exc)}

        healthy = all(c["ok"] for c in checks.values())
        return JSONResponse(
            {
                "status": "healthy" if healthy else "degraded",
                "checks": checks,
                "timestamp": datetime.now(timezone.utc).isoformat(),
            },
            status_code=200 if healthy else 503,
        )

    @app.post("/decision")
    async def create_decision(
        intent: TradeIntent,
        request: Request,
        background_tasks: BackgroundTasks,
        store: DecisionLogStore = Depends(get_store),
        config: AppConfig = Depends(get_config),
    ):
        """Score a trade intent and return ALLOW / WARN / BLOCK.

        The audit append runs after the response is sent; the verdict is
        returned even when the append fails.
        """
        request_id = request.state.request_id
        decision = evaluate(intent, config.engine)
        logger.info(
            "decision_evaluated",
            symbol=intent.symbol,
            direction=intent.direction,
            action=decision.action,
            impulse_score=decision.impulse_score,
            confidence=decision.confidence,
        )

        entry = DecisionLogEntry(
            request_id=request_id,
            symbol=intent.symbol,
            direction=intent.direction,
            decision=decision,
            market_data=_logged_market_data(intent),
            created_at=request.app.state.clock.now(),
        )
        background_tasks.add_task(append_entry, store, entry)

        return {
            "requestId": request_id,
            "decision": decision.model_dump(mode="json", by_alias=True),
        }

    @app.get("/decision-log")
    async def list_decision_log(
        limit: int | None = Query(default=None, ge=MIN_READ_LIMIT, le=MAX_READ_LIMIT),
        store: DecisionLogStore = Depends(get_store),
        config: AppConfig = Depends(get_config),
    ):
        """Most recent decisions, newest first."""
        entries = store.read(resolve_limit(limit, config))
        return {"count": len(entries), "items": [e.to_payload() for e in entries]}

    @app.get("/decision-log/summary")
    async def decision_log_summary(
        limit: int | None = Query(default=None, ge=MIN_READ_LIMIT, le=MAX_READ_LIMIT),
        store: DecisionLogStore = Depends(get_store),
        config: AppConfig = Depends(get_config),
    ):
        """ALLOW / WARN / BLOCK counts over the most recent decisions."""
        return store.summary(resolve_limit(limit, config))

    return app
