"""Health check endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from codecritic.api.dependencies import get_request_settings
from codecritic.api.schemas import HealthResponse
from codecritic.core.config import Settings

router = APIRouter(tags=["Health"])


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Basic health check — confirms the service is running."""
    return HealthResponse(
        status="healthy",
        version="0.1.0",
        services={
            "api": "running",
        },
    )


@router.get("/readiness", response_model=HealthResponse)
async def readiness_check(settings: Settings = Depends(get_request_settings)) -> HealthResponse:
    """Readiness check. Reports whether requests without their own key can be served."""
    return HealthResponse(
        status="ready",
        version="0.1.0",
        services={
            "api": "ready",
            "fallback_key": "configured" if settings.fallback_credential else "missing",
            "model": settings.gemini_model,
        },
    )
