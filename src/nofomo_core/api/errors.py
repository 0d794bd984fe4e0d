"""Structured API errors: ``{error, code, requestId, detail?}``."""

from __future__ import annotations

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

REQUEST_ID_HEADER = "X-Request-Id"
NO_STORE = {"Cache-Control": "no-store"}


def error_response(
    status: int,
    code: str,
    error: str,
    request_id: str,
    detail: str | None = None,
) -> JSONResponse:
    payload = {"error": error, "code": code, "requestId": request_id}
    if detail:
        payload["detail"] = detail
    return JSONResponse(
        payload,
        status_code=status,
        headers={**NO_STORE, REQUEST_ID_HEADER: request_id},
    )


def _describe(error: dict) -> str:
    loc = ".".join(str(part) for part in error.get("loc", ()) if part not in ("body", "query"))
    msg = error.get("msg", "invalid value")
    return f"{loc}: {msg}" if loc else msg


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Client errors become a 400 before any scoring or logging happens."""
    request_id = getattr(request.state, "request_id", "")
    errors = exc.errors()
    if any(e.get("type") == "json_invalid" for e in errors):
        return error_response(400, "INVALID_JSON", "Invalid parameters", request_id, "Invalid JSON body")
    detail = "; ".join(_describe(e) for e in errors)
    return error_response(400, "INVALID_PARAMETERS", "Invalid parameters", request_id, detail)


async def decision_log_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """The read path of the audit log is down; live decisions are unaffected."""
    request_id = getattr(request.state, "request_id", "")
    return error_response(503, "DECISION_LOG_UNAVAILABLE", "Decision log unavailable", request_id, str(exc))
