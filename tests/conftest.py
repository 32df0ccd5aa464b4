"""Shared test fixtures for all codecritic tests."""

from __future__ import annotations

import json
from collections.abc import Callable

import httpx
import pytest
from pydantic import SecretStr

from codecritic.core.config import Settings
from codecritic.core.models import Issue, IssueType, ReviewResult, Severity
from codecritic.llm.base import LLMProvider, LLMResponse
from codecritic.llm.gemini_provider import GeminiProvider


def gemini_body(text: str) -> dict:
    """A generateContent response carrying ``text`` as the first candidate."""
    return {
        "candidates": [{"content": {"role": "model", "parts": [{"text": text}]}}],
        "usageMetadata": {"promptTokenCount": 120, "candidatesTokenCount": 45},
        "modelVersion": "gemini-2.5-flash",
    }


class RecordingTransport:
    """httpx transport stub that answers with a fixed response and records requests."""

    def __init__(self, handler: Callable[[httpx.Request], httpx.Response]) -> None:
        self.requests: list[httpx.Request] = []
        self._handler = handler
        self.transport = httpx.MockTransport(self._handle)

    def _handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self._handler(request)

    @property
    def call_count(self) -> int:
        return len(self.requests)

    def last_json(self) -> dict:
        return json.loads(self.requests[-1].content)

    @classmethod
    def returning_text(cls, text: str) -> RecordingTransport:
        return cls(lambda request: httpx.Response(200, json=gemini_body(text)))

    @classmethod
    def returning_status(cls, status: int, body: str) -> RecordingTransport:
        return cls(lambda request: httpx.Response(status, text=body))


class StaticLLM(LLMProvider):
    """Test LLM that returns a fixed text and remembers what it was asked."""

    def __init__(self, content: str = "", error: Exception | None = None) -> None:
        self.content = content
        self.error = error
        self.calls: list[dict] = []

    async def complete(self, prompt, *, credential, model, config=None) -> LLMResponse:
        self.calls.append({"prompt": prompt, "credential": credential, "model": model, "config": config})
        if self.error:
            raise self.error
        return LLMResponse(content=self.content, model=model)

    async def close(self) -> None:
        pass


@pytest.fixture
def settings() -> Settings:
    return Settings(_env_file=None, gemini_api_key=SecretStr("server-key"))


@pytest.fixture
def keyless_settings() -> Settings:
    return Settings(_env_file=None, gemini_api_key=None)


@pytest.fixture
def make_provider(settings: Settings):
    def _make(transport: RecordingTransport, s: Settings | None = None) -> GeminiProvider:
        return GeminiProvider(s or settings, transport=transport.transport)

    return _make


@pytest.fixture
def sample_payload() -> dict:
    return {
        "issues": [
            {
                "title": "String concatenation instead of addition",
                "description": 'add(2, "3") returns "23" because + concatenates strings.',
                "severity": "high",
                "type": "bug",
                "lineStart": 5,
                "suggestion": "Convert arguments with Number() before adding.",
            },
            {
                "title": "Missing semicolons",
                "description": "Statements rely on automatic semicolon insertion.",
                "severity": "low",
                "type": "style",
                "lineStart": 2,
                "lineEnd": 3,
            },
            {
                "title": "No input validation",
                "description": "The function accepts any type.",
                "severity": "medium",
            },
        ],
        "fixedCode": "function add(a, b) {\n  return Number(a) + Number(b);\n}\n",
    }


@pytest.fixture
def sample_result(sample_payload: dict) -> ReviewResult:
    return ReviewResult.model_validate(sample_payload)


@pytest.fixture
def critical_issue() -> Issue:
    return Issue(
        title="SQL injection",
        description="User input is interpolated into the query.",
        severity=Severity.CRITICAL,
        type=IssueType.SECURITY,
        lineStart=12,
        lineEnd=14,
    )


@pytest.fixture
def transport_cls() -> type[RecordingTransport]:
    return RecordingTransport


@pytest.fixture
def llm_cls() -> type[StaticLLM]:
    return StaticLLM


@pytest.fixture
def body_for() -> Callable[[str], dict]:
    return gemini_body
