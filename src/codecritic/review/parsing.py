"""Response validator: locate JSON in model text, then check it against the schema.

The two phases stay separate.  :func:`extract_json` only answers "is there
JSON in here?" and raises :class:`ExtractionError`; :func:`validate_review`
only answers "is this the review shape?" and raises :class:`ValidationError`.
An extraction failure points at prompt drift, a validation failure at schema
drift.
"""

from __future__ import annotations

import json
import re
from typing import Any

import pydantic

from codecritic.core.exceptions import ExtractionError, ValidationError
from codecritic.core.logging import get_logger
from codecritic.core.models import ReviewResult

logger = get_logger(__name__)

_FENCE_RE = re.compile(r"```(?:json)?", re.IGNORECASE)

# Greedy: first "{" through last "}"
_OBJECT_SPAN_RE = re.compile(r"\{[\s\S]*\}")


def strip_code_fences(text: str) -> str:
    """Remove Markdown fence markers (optionally tagged ``json``) and trim."""
    return _FENCE_RE.sub("", text).strip()


def extract_json(text: str) -> Any:
    """Parse the JSON value carried by a model response.

    1. Strip code fences and parse what is left.
    2. Failing that, parse the span from the first ``{`` to the last ``}``.

    Raises:
        ExtractionError: Neither attempt produced valid JSON.
    """
    try:
        return json.loads(strip_code_fences(text))
    except json.JSONDecodeError:
        pass

    match = _OBJECT_SPAN_RE.search(text)
    if match:
        try:
            return json.loads(match.group(0))
        except json.JSONDecodeError as e:
            logger.warning("json_span_unparseable", error=str(e), length=len(text))
            raise ExtractionError(f"Model did not return valid JSON: {e}") from e

    logger.warning("json_not_found", length=len(text))
    raise ExtractionError("Model did not return valid JSON")


def validate_review(value: Any) -> ReviewResult:
    """Check an extracted JSON value against the review schema.

    Unknown top-level keys are ignored.  Unknown severity or type values are
    rejected, never coerced.

    Raises:
        ValidationError: With the individual violations on ``errors``.
    """
    try:
        return ReviewResult.model_validate(value)
    except pydantic.ValidationError as e:
        errors = e.errors(include_url=False, include_context=False, include_input=False)
        logger.warning("review_schema_invalid", error_count=len(errors), errors=errors[:5])
        raise ValidationError(
            "Model output failed validation",
            errors=errors,
            detail=_summarize(errors),
        ) from e


def parse_review_text(text: str) -> ReviewResult:
    """Extract and validate in one step."""
    return validate_review(extract_json(text))


def _summarize(errors: list[dict[str, Any]]) -> str:
    parts = []
    for err in errors:
        loc = ".".join(str(p) for p in err.get("loc", ())) or "<root>"
        parts.append(f"{loc}: {err.get('msg', 'invalid')}")
    return "; ".join(parts)
