"""Domain exception hierarchy.

All exceptions inherit from ``CodeCriticError`` so callers can catch broadly
or narrowly as needed.  FastAPI exception handlers map these to HTTP responses.

None of these are retried automatically: every category ends the current review.
"""

from __future__ import annotations

from typing import Any


class CodeCriticError(Exception):
    """Base exception for all codecritic errors."""

    category: str = "Internal Error"

    def __init__(self, message: str = "", *, detail: str = "") -> None:
        self.detail = detail or message
        super().__init__(message)


# ── Caller input ─────────────────────────────────────────────────────────────


class ConfigurationError(CodeCriticError):
    """Missing code or credential. Raised before any network call."""

    category = "Configuration Error"


# ── Endpoint ─────────────────────────────────────────────────────────────────


class TransportError(CodeCriticError):
    """The endpoint was unreachable or answered with an error status."""

    category = "Transport Error"

    def __init__(
        self,
        message: str = "",
        *,
        status_code: int | None = None,
        body: str = "",
        detail: str = "",
    ) -> None:
        self.status_code = status_code
        self.body = body
        super().__init__(message, detail=detail)


class EmptyResponseError(CodeCriticError):
    """Success status, but the body held no usable model text."""

    category = "Empty Response"


# ── Model output ─────────────────────────────────────────────────────────────


class ExtractionError(CodeCriticError):
    """No parseable JSON could be located in the model text."""

    category = "Extraction Error"


class ValidationError(CodeCriticError):
    """JSON was found but does not match the review schema."""

    category = "Validation Error"

    def __init__(
        self,
        message: str = "",
        *,
        errors: list[dict[str, Any]] | None = None,
        detail: str = "",
    ) -> None:
        self.errors = errors or []
        super().__init__(message, detail=detail)
