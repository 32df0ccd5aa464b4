"""Dependency injection — shared services and configuration."""

from __future__ import annotations

import functools

from fastapi import Request

from codecritic.core.config import Settings, get_settings
from codecritic.llm.base import LLMProvider
from codecritic.llm.gemini_provider import GeminiProvider
from codecritic.review.service import ReviewService


@functools.lru_cache
def get_app_settings() -> Settings:
    """Cached application settings (singleton)."""
    return get_settings()


def create_llm_provider(settings: Settings | None = None) -> LLMProvider:
    """Create an LLM provider from settings."""
    s = settings or get_app_settings()
    return GeminiProvider(s)


def get_review_service(request: Request) -> ReviewService:
    """The service built by the app factory."""
    return request.app.state.review_service


def get_request_settings(request: Request) -> Settings:
    return request.app.state.settings
