"""Review endpoints — submit code for AI-powered review."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from codecritic.api.dependencies import get_review_service
from codecritic.api.schemas import ErrorResponse, LanguageOption, ReviewSubmission
from codecritic.core.constants import SUPPORTED_LANGUAGES, editor_language
from codecritic.core.models import ReviewResult
from codecritic.review.service import ReviewService

router = APIRouter(tags=["Reviews"])


@router.post(
    "/reviews",
    response_model=ReviewResult,
    response_model_exclude_none=True,
    status_code=200,
    responses={400: {"model": ErrorResponse}, 502: {"model": ErrorResponse}},
)
async def create_review(
    submission: ReviewSubmission,
    service: ReviewService = Depends(get_review_service),
) -> ReviewResult:
    """Review a code snippet.

    Returns the issues in the order the model produced them, plus ``fixedCode``.
    Missing code or key is a 400; any endpoint or model-output failure is a 502.
    """
    return await service.submit_for_review(submission.to_request())


@router.get("/languages", response_model=list[LanguageOption])
async def list_languages() -> list[LanguageOption]:
    """Language hints offered to reviewers, with the editor mode for each."""
    return [
        LanguageOption(id=lang, label=label, editor_language=editor_language(lang))
        for lang, label in SUPPORTED_LANGUAGES.items()
    ]
