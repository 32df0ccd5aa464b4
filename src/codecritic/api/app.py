"""FastAPI application factory with lifespan management."""

from __future__ import annotations

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.responses import RedirectResponse

from codecritic.api.dependencies import create_llm_provider, get_app_settings
from codecritic.api.middleware import setup_exception_handlers, setup_middleware
from codecritic.api.routers import health, reviews
from codecritic.core.config import Settings
from codecritic.core.logging import get_logger, setup_logging
from codecritic.llm.base import LLMProvider
from codecritic.review.service import ReviewService

logger = get_logger(__name__)

VERSION = "0.1.0"


def create_app(settings: Settings | None = None, llm: LLMProvider | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    This is the factory function used by uvicorn:
        uvicorn codecritic.api.app:create_app --factory --reload
    """
    settings = settings or get_app_settings()
    setup_logging(settings.log_level)

    provider = llm or create_llm_provider(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        yield
        await provider.close()
        logger.info("app_shutdown")

    app = FastAPI(
        title="codecritic",
        description="AI code review: paste code, get structured issues and a suggested fix",
        version=VERSION,
        docs_url="/docs",
        redoc_url="/redoc",
        debug=settings.debug,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.review_service = ReviewService(provider, settings)

    setup_middleware(app)
    setup_exception_handlers(app)

    app.include_router(health.router, prefix="/api/v1")
    app.include_router(reviews.router, prefix="/api/v1")

    @app.get("/", include_in_schema=False)
    async def root():
        """Root redirect to docs."""
        return RedirectResponse(url="/docs")

    logger.info("app_created", version=VERSION, model=settings.gemini_model)
    return app
