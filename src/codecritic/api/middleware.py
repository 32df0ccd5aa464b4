"""Middleware — CORS, request logging, error handling."""

from __future__ import annotations

import time
import uuid

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from codecritic.core.exceptions import (
    CodeCriticError,
    ConfigurationError,
    EmptyResponseError,
    ExtractionError,
    TransportError,
    ValidationError,
)
from codecritic.core.logging import get_logger

logger = get_logger(__name__)


def setup_middleware(app: FastAPI) -> None:
    """Attach all middleware to the FastAPI app."""

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def request_logging(request: Request, call_next):
        """Log every request with timing and a correlation ID."""
        request_id = str(uuid.uuid4())[:8]
        start = time.perf_counter_ns()

        response = await call_next(request)

        duration_ms = (time.perf_counter_ns() - start) // 1_000_000
        logger.info(
            "http_request",
            method=request.method,
            path=str(request.url.path),
            status=response.status_code,
            duration_ms=duration_ms,
            request_id=request_id,
        )
        response.headers["X-Request-ID"] = request_id
        return response


def _error_response(status_code: int, exc: CodeCriticError) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": exc.category, "detail": str(exc)})


def setup_exception_handlers(app: FastAPI) -> None:
    """Register domain exception → HTTP response mappings."""

    @app.exception_handler(ConfigurationError)
    async def handle_configuration(request: Request, exc: ConfigurationError):
        return _error_response(400, exc)

    @app.exception_handler(TransportError)
    async def handle_transport(request: Request, exc: TransportError):
        return _error_response(502, exc)

    @app.exception_handler(EmptyResponseError)
    async def handle_empty(request: Request, exc: EmptyResponseError):
        return _error_response(502, exc)

    @app.exception_handler(ExtractionError)
    async def handle_extraction(request: Request, exc: ExtractionError):
        return _error_response(502, exc)

    @app.exception_handler(ValidationError)
    async def handle_validation(request: Request, exc: ValidationError):
        logger.warning("review_rejected", violations=exc.detail)
        return _error_response(502, exc)

    @app.exception_handler(CodeCriticError)
    async def handle_codecritic(request: Request, exc: CodeCriticError):
        return _error_response(500, exc)
