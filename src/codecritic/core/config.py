"""Environment-driven configuration using Pydantic Settings."""

from __future__ import annotations

from pydantic import SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

from codecritic.core.constants import (
    DEFAULT_MAX_OUTPUT_TOKENS,
    DEFAULT_MODEL,
    DEFAULT_RESPONSE_MIME_TYPE,
    DEFAULT_TEMPERATURE,
    GEMINI_BASE_URL,
)


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    All env vars are prefixed with ``CODECRITIC_`` and can be set via a ``.env`` file.
    The API key is only a fallback: callers may pass their own key per request.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="CODECRITIC_",
        case_sensitive=False,
    )

    # --- LLM (Gemini) ---
    gemini_api_key: SecretStr | None = None
    gemini_model: str = DEFAULT_MODEL
    gemini_api_base: str = GEMINI_BASE_URL
    temperature: float = DEFAULT_TEMPERATURE
    max_output_tokens: int = DEFAULT_MAX_OUTPUT_TOKENS
    response_mime_type: str | None = DEFAULT_RESPONSE_MIME_TYPE
    request_timeout_seconds: float | None = None

    # --- Server ---
    host: str = "0.0.0.0"
    port: int = 8000
    log_level: str = "INFO"
    debug: bool = False

    @property
    def fallback_credential(self) -> str | None:
        """The configured API key, or None when unset or blank."""
        if self.gemini_api_key is None:
            return None
        return self.gemini_api_key.get_secret_value().strip() or None


def get_settings() -> Settings:
    """Factory that creates a Settings instance."""
    return Settings()
