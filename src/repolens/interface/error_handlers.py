"""Global exception handlers: translate domain errors to HTTP responses.

Each domain exception maps to an HTTP status code and the
``{"error": "...", "details": ...}`` envelope.
"""

from __future__ import annotations

import logging
from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from repolens.domain.exceptions import (
    ContentUnavailableError,
    InvalidReferenceError,
    LlmError,
    PersistenceError,
    RepoLensError,
    ReportNotFoundError,
    UpstreamError,
)

logger = logging.getLogger(__name__)

_EXCEPTION_STATUS: list[tuple[type[RepoLensError], int]] = [
    (InvalidReferenceError, 400),
    (ReportNotFoundError, 404),
    # Both are absorbed inside the pipeline; these only apply if one escapes.
    (LlmError, 500),
    (ContentUnavailableError, 500),
]


def _error_json(status_code: int, message: str, details: Any = None) -> JSONResponse:
    content: dict[str, Any] = {"error": message}
    if details is not None:
        content["details"] = details
    return JSONResponse(status_code=status_code, content=content)


def register_error_handlers(app: FastAPI) -> None:
    """Attach exception handlers to the FastAPI application."""

    # ── Domain exceptions ───────────────────────────────────────────────

    for exc_type, code in _EXCEPTION_STATUS:

        def _make_handler(
            status_code: int,
        ):  # type: ignore[no-untyped-def]
            async def handler(request: Request, exc: Exception) -> JSONResponse:
                logger.warning("%s: %s", type(exc).__name__, exc)
                return _error_json(status_code, str(exc))

            return handler

        app.add_exception_handler(exc_type, _make_handler(code))

    @app.exception_handler(UpstreamError)
    async def upstream_handler(request: Request, exc: UpstreamError) -> JSONResponse:
        logger.warning("%s (HTTP %d): %s", type(exc).__name__, exc.status_code, exc)
        return _error_json(exc.status_code, str(exc))

    @app.exception_handler(PersistenceError)
    async def persistence_handler(request: Request, exc: PersistenceError) -> JSONResponse:
        logger.error("PersistenceError: %s", exc)
        return _error_json(500, "Database error")

    # ── Pydantic / FastAPI validation errors ────────────────────────────

    @app.exception_handler(RequestValidationError)
    async def validation_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        messages = []
        for err in exc.errors():
            loc = ".".join(str(p) for p in err.get("loc", []))
            messages.append(f"{loc}: {err.get('msg', 'validation error')}")
        return _error_json(400, "Invalid request", details=messages)

    # ── Catch-all for unexpected errors ─────────────────────────────────

    @app.exception_handler(Exception)
    async def generic_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled exception")
        return _error_json(500, "Analysis failed")
