"""API request/response schemas."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, SecretStr

from codecritic.core.constants import detect_language
from codecritic.core.models import ReviewRequest


class ReviewSubmission(BaseModel):
    """Body of ``POST /reviews``. Field names follow the browser client."""

    model_config = ConfigDict(populate_by_name=True)

    # Non-string values are reviewed as missing code
    code: Any = Field(
        default=None,
        description="Source code to review",
        examples=['function add(a, b){\nreturn a+b\n}\nconsole.log(add(2,"3"))'],
    )
    language: str | None = Field(
        default=None,
        description="Language hint; the model is told 'auto' when omitted",
        examples=["javascript"],
    )
    api_key: SecretStr | None = Field(
        default=None,
        alias="apiKey",
        description="Gemini API key; falls back to the server's configured key",
    )
    model: str | None = Field(
        default=None,
        description="Gemini model id; falls back to the configured default",
    )
    filename: str | None = Field(
        default=None,
        description="Used to detect the language when no hint is given",
    )

    def to_request(self) -> ReviewRequest:
        language = self.language
        if not language and self.filename:
            language = detect_language(self.filename)
        return ReviewRequest(
            code=self.code if isinstance(self.code, str) else "",
            language=language,
            model_id=self.model,
            credential=self.api_key,
        )


class LanguageOption(BaseModel):
    id: str
    label: str
    editor_language: str


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = "healthy"
    version: str = "0.1.0"
    services: dict[str, str] = {}


class ErrorResponse(BaseModel):
    """Error response."""

    error: str
    detail: str = ""
