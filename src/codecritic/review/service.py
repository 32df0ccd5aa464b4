"""Review service: validate input, make the single model call, parse the result."""

from __future__ import annotations

import time

from codecritic.core.config import Settings
from codecritic.core.exceptions import ConfigurationError
from codecritic.core.logging import get_logger
from codecritic.core.models import ReviewRequest, ReviewResult
from codecritic.llm.base import LLMProvider
from codecritic.review.parsing import parse_review_text
from codecritic.review.prompt import build_generation_config, build_review_prompt

logger = get_logger(__name__)


def _blank_to_none(value: str | None) -> str | None:
    if value is None:
        return None
    return value.strip() or None


class ReviewService:
    """Runs submit-for-review against one LLM provider.

    The fallback credential comes from the injected :class:`Settings`; nothing
    here reads the process environment.  Each call is independent: there is no
    retry, no caching and no shared state between submissions.
    """

    def __init__(self, llm: LLMProvider, settings: Settings) -> None:
        self._llm = llm
        self._settings = settings

    def resolve_credential(self, explicit: str | None) -> str:
        """Explicit key, else the configured key, else ConfigurationError."""
        credential = _blank_to_none(explicit) or self._settings.fallback_credential
        if not credential:
            raise ConfigurationError(
                "Missing Gemini API key. Provide one with the request or set CODECRITIC_GEMINI_API_KEY."
            )
        return credential

    def resolve_model(self, explicit: str | None) -> str:
        return _blank_to_none(explicit) or self._settings.gemini_model

    async def submit_for_review(
        self,
        request: ReviewRequest | str,
        *,
        language: str | None = None,
        credential: str | None = None,
        model_id: str | None = None,
    ) -> ReviewResult:
        """Review a piece of code.

        Accepts either a :class:`ReviewRequest` or the code plus keyword options.

        Raises:
            ConfigurationError: Missing code or credential (no network call made).
            TransportError: Endpoint unreachable or non-success status.
            EmptyResponseError: Success status but no model text.
            ExtractionError: No JSON in the model text.
            ValidationError: JSON does not match the review schema.
        """
        if isinstance(request, str):
            request = ReviewRequest(code=request, language=language, model_id=model_id)
            explicit_key = credential
        else:
            explicit_key = request.credential.get_secret_value() if request.credential else None

        if not request.code:
            raise ConfigurationError("Missing code")

        key = self.resolve_credential(explicit_key)
        model = self.resolve_model(request.model_id)
        language_hint = _blank_to_none(request.language)

        start_ms = time.perf_counter_ns() // 1_000_000
        logger.info(
            "review_started",
            model=model,
            language=language_hint or "auto",
            code_chars=len(request.code),
            own_key=explicit_key is not None and bool(explicit_key.strip()),
        )

        response = await self._llm.complete(
            build_review_prompt(request.code, language_hint),
            credential=key,
            model=model,
            config=build_generation_config(self._settings),
        )
        result = parse_review_text(response.content)

        duration_ms = (time.perf_counter_ns() // 1_000_000) - start_ms
        logger.info(
            "review_complete",
            model=response.model or model,
            issues=len(result.issues),
            has_fix=result.has_fix,
            prompt_tokens=response.prompt_tokens,
            completion_tokens=response.completion_tokens,
            duration_ms=duration_ms,
        )
        return result
