"""Google Gemini provider over the ``generateContent`` REST endpoint."""

from __future__ import annotations

from typing import Any
from urllib.parse import quote

import httpx

from codecritic.core.config import Settings
from codecritic.core.constants import ERROR_BODY_EXCERPT_CHARS
from codecritic.core.exceptions import EmptyResponseError, TransportError
from codecritic.core.logging import get_logger
from codecritic.llm.base import GenerationConfig, LLMProvider, LLMResponse

logger = get_logger(__name__)


def build_request_body(prompt: str, config: GenerationConfig) -> dict[str, Any]:
    """Request payload: one user message plus the generation config block."""
    generation_config: dict[str, Any] = {
        "temperature": config.temperature,
        "maxOutputTokens": config.max_output_tokens,
    }
    if config.response_mime_type:
        generation_config["response_mime_type"] = config.response_mime_type

    return {
        "contents": [{"role": "user", "parts": [{"text": prompt}]}],
        "generationConfig": generation_config,
    }


def extract_candidate_text(data: Any) -> str | None:
    """Return ``candidates[0].content.parts[0].text`` if it is a string."""
    try:
        text = data["candidates"][0]["content"]["parts"][0]["text"]
    except (KeyError, IndexError, TypeError):
        return None
    return text if isinstance(text, str) else None


def _token_count(value: Any) -> int:
    """Usage counts are informational; anything but a non-negative int counts as 0."""
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        return 0
    return value


class GeminiProvider(LLMProvider):
    """Gemini adapter using httpx with connection pooling.

    The API key is passed per call, so one provider serves both the configured
    key and keys supplied by individual callers.
    """

    def __init__(
        self,
        settings: Settings,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._settings = settings
        self._base_url = settings.gemini_api_base.rstrip("/")
        self._transport = transport
        self._default_config = GenerationConfig(
            temperature=settings.temperature,
            max_output_tokens=settings.max_output_tokens,
            response_mime_type=settings.response_mime_type,
        )
        self._client: httpx.AsyncClient | None = None

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                headers={"Content-Type": "application/json"},
                timeout=self._settings.request_timeout_seconds,
                transport=self._transport,
            )
        return self._client

    def endpoint_url(self, model: str) -> str:
        return f"{self._base_url}/{quote(model, safe='')}:generateContent"

    async def complete(
        self,
        prompt: str,
        *,
        credential: str,
        model: str,
        config: GenerationConfig | None = None,
    ) -> LLMResponse:
        """POST the prompt to Gemini and return the first candidate's text."""
        body = build_request_body(prompt, config or self._default_config)
        client = self._get_client()

        try:
            response = await client.post(
                self.endpoint_url(model),
                params={"key": credential},
                json=body,
            )
        except httpx.HTTPError as e:
            logger.error("gemini_unreachable", model=model, error=type(e).__name__)
            raise TransportError(f"Gemini request failed for model \"{model}\": {type(e).__name__}") from e

        if not response.is_success:
            excerpt = response.text[:ERROR_BODY_EXCERPT_CHARS]
            logger.error(
                "gemini_request_failed",
                model=model,
                status=response.status_code,
                body=excerpt,
            )
            raise TransportError(
                f"Gemini request failed ({response.status_code}) for model \"{model}\". "
                f"{excerpt or 'Please verify your API key and try again.'}",
                status_code=response.status_code,
                body=excerpt,
            )

        try:
            data = response.json()
        except ValueError as e:
            logger.error("gemini_invalid_json", model=model, body=response.text[:ERROR_BODY_EXCERPT_CHARS])
            raise EmptyResponseError("Invalid response from Gemini") from e

        text = extract_candidate_text(data)
        if not text:
            logger.error("gemini_empty_response", model=model, body=str(data)[:ERROR_BODY_EXCERPT_CHARS])
            raise EmptyResponseError("Invalid response from Gemini")

        usage = data.get("usageMetadata")
        if not isinstance(usage, dict):
            usage = {}
        model_version = data.get("modelVersion")
        return LLMResponse(
            content=text,
            prompt_tokens=_token_count(usage.get("promptTokenCount")),
            completion_tokens=_token_count(usage.get("candidatesTokenCount")),
            model=model_version if isinstance(model_version, str) and model_version else model,
        )

    async def close(self) -> None:
        """Close the underlying HTTP client."""
        if self._client and not self._client.is_closed:
            await self._client.aclose()
            self._client = None
