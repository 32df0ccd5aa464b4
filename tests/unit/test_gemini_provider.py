"""Tests for codecritic.llm: base interface and the Gemini provider."""

from __future__ import annotations

import httpx
import pytest

from codecritic.core.exceptions import EmptyResponseError, TransportError
from codecritic.llm.base import GenerationConfig, LLMProvider, LLMResponse
from codecritic.llm.gemini_provider import (
    GeminiProvider,
    build_request_body,
    extract_candidate_text,
)


# ── Interface ───────────────────────────────────────────────────────────────


class TestLLMProviderInterface:
    def test_cannot_instantiate_abstract(self):
        with pytest.raises(TypeError):
            LLMProvider()

    def test_response_defaults(self):
        r = LLMResponse(content="Hi")
        assert r.prompt_tokens == 0
        assert r.completion_tokens == 0
        assert r.model == ""


# ── Request body ────────────────────────────────────────────────────────────


class TestBuildRequestBody:
    def test_single_user_message(self):
        body = build_request_body("review this", GenerationConfig())
        assert body["contents"] == [{"role": "user", "parts": [{"text": "review this"}]}]

    def test_generation_config(self):
        body = build_request_body("p", GenerationConfig(temperature=0.2, max_output_tokens=1000))
        assert body["generationConfig"] == {
            "temperature": 0.2,
            "maxOutputTokens": 1000,
            "response_mime_type": "application/json",
        }

    def test_mime_type_omitted_when_unset(self):
        body = build_request_body("p", GenerationConfig(response_mime_type=None))
        assert "response_mime_type" not in body["generationConfig"]


class TestExtractCandidateText:
    def test_happy_path(self, body_for):
        assert extract_candidate_text(body_for("hello")) == "hello"

    @pytest.mark.parametrize(
        "data",
        [
            {},
            {"candidates": []},
            {"candidates": [{"content": {}}]},
            {"candidates": [{"content": {"parts": []}}]},
            {"candidates": [{"content": {"parts": [{"text": 5}]}}]},
            [],
            None,
        ],
    )
    def test_missing_text(self, data):
        assert extract_candidate_text(data) is None


# ── Provider ────────────────────────────────────────────────────────────────


class TestGeminiProvider:
    @pytest.mark.asyncio
    async def test_returns_candidate_text(self, make_provider, transport_cls):
        transport = transport_cls.returning_text('{"issues": []}')
        provider = make_provider(transport)

        response = await provider.complete("prompt", credential="AIza-k", model="gemini-2.5-flash")

        assert response.content == '{"issues": []}'
        assert response.prompt_tokens == 120
        assert response.completion_tokens == 45
        assert response.model == "gemini-2.5-flash"
        await provider.close()

    @pytest.mark.asyncio
    async def test_request_shape(self, make_provider, transport_cls):
        transport = transport_cls.returning_text("{}")
        provider = make_provider(transport)

        await provider.complete("the prompt", credential="AIza-k", model="gemini-2.5-pro")

        assert transport.call_count == 1
        request = transport.requests[0]
        assert request.method == "POST"
        assert request.url.scheme == "https"
        assert request.url.host == "generativelanguage.googleapis.com"
        assert request.url.path == "/v1beta/models/gemini-2.5-pro:generateContent"
        assert request.url.params["key"] == "AIza-k"
        body = transport.last_json()
        assert body["contents"][0]["parts"][0]["text"] == "the prompt"
        assert body["generationConfig"]["temperature"] == 0.1
        assert body["generationConfig"]["maxOutputTokens"] == 2000
        await provider.close()

    @pytest.mark.asyncio
    async def test_model_id_is_url_quoted(self, make_provider, transport_cls):
        transport = transport_cls.returning_text("{}")
        provider = make_provider(transport)

        await provider.complete("p", credential="k", model="tuned/my model")

        assert transport.requests[0].url.raw_path.startswith(
            b"/v1beta/models/tuned%2Fmy%20model:generateContent"
        )
        await provider.close()

    @pytest.mark.asyncio
    async def test_explicit_config_overrides_defaults(self, make_provider, transport_cls):
        transport = transport_cls.returning_text("{}")
        provider = make_provider(transport)

        await provider.complete(
            "p", credential="k", model="m", config=GenerationConfig(temperature=0.0, max_output_tokens=64)
        )

        config = transport.last_json()["generationConfig"]
        assert config["temperature"] == 0.0
        assert config["maxOutputTokens"] == 64
        await provider.close()

    @pytest.mark.asyncio
    async def test_error_status_raises_transport_error(self, make_provider, transport_cls):
        transport = transport_cls.returning_status(429, "rate limited")
        provider = make_provider(transport)

        with pytest.raises(TransportError) as exc_info:
            await provider.complete("p", credential="k", model="gemini-2.5-flash")

        err = exc_info.value
        assert err.status_code == 429
        assert err.body == "rate limited"
        assert "429" in str(err)
        assert "rate limited" in str(err)
        assert transport.call_count == 1
        await provider.close()

    @pytest.mark.asyncio
    async def test_error_body_truncated(self, make_provider, transport_cls):
        transport = transport_cls.returning_status(500, "x" * 2000)
        provider = make_provider(transport)

        with pytest.raises(TransportError) as exc_info:
            await provider.complete("p", credential="k", model="m")

        assert len(exc_info.value.body) == 500
        await provider.close()

    @pytest.mark.asyncio
    async def test_unreachable_raises_transport_error(self, make_provider, transport_cls):
        def refuse(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        provider = make_provider(transport_cls(refuse))

        with pytest.raises(TransportError) as exc_info:
            await provider.complete("p", credential="k", model="m")

        assert exc_info.value.status_code is None
        await provider.close()

    @pytest.mark.asyncio
    async def test_success_without_text_is_empty_response(self, make_provider, transport_cls):
        transport = transport_cls(lambda request: httpx.Response(200, json={"candidates": []}))
        provider = make_provider(transport)

        with pytest.raises(EmptyResponseError):
            await provider.complete("p", credential="k", model="m")
        await provider.close()

    @pytest.mark.asyncio
    async def test_success_with_non_json_body(self, make_provider, transport_cls):
        transport = transport_cls(lambda request: httpx.Response(200, text="<html>oops</html>"))
        provider = make_provider(transport)

        with pytest.raises(EmptyResponseError):
            await provider.complete("p", credential="k", model="m")
        await provider.close()

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "usage",
        [
            {"promptTokenCount": None, "candidatesTokenCount": None},
            [1, 2],
            "n/a",
            None,
        ],
    )
    async def test_malformed_usage_counts_as_zero(self, make_provider, transport_cls, body_for, usage):
        body = body_for('{"issues": []}')
        body["usageMetadata"] = usage
        body["modelVersion"] = None
        provider = make_provider(transport_cls(lambda request: httpx.Response(200, json=body)))

        response = await provider.complete("p", credential="k", model="gemini-2.5-flash")

        assert response.content == '{"issues": []}'
        assert response.prompt_tokens == 0
        assert response.completion_tokens == 0
        assert response.model == "gemini-2.5-flash"
        await provider.close()

    @pytest.mark.asyncio
    async def test_no_retry_on_failure(self, make_provider, transport_cls):
        transport = transport_cls.returning_status(503, "unavailable")
        provider = make_provider(transport)

        with pytest.raises(TransportError):
            await provider.complete("p", credential="k", model="m")

        assert transport.call_count == 1
        await provider.close()

    @pytest.mark.asyncio
    async def test_close_is_idempotent(self, make_provider, transport_cls):
        provider = make_provider(transport_cls.returning_text("{}"))
        await provider.complete("p", credential="k", model="m")
        await provider.close()
        await provider.close()

    def test_endpoint_url_strips_trailing_slash(self, settings):
        s = settings.model_copy(update={"gemini_api_base": "https://example.test/v1beta/models/"})
        provider = GeminiProvider(s)
        assert provider.endpoint_url("gemini-2.5-flash") == (
            "https://example.test/v1beta/models/gemini-2.5-flash:generateContent"
        )
