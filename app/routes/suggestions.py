"""
API routes for prompt suggestions.
"""
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import settings
from app.database import get_db
from app.middleware.jwt import get_bearer_token
from app.schemas.suggestion import (
    AnalyzeRequest,
    AnalyzeResponse,
    Platform,
    PlatformOptimizationResponse,
)
from app.services.access_gate import access_gate
from app.services.suggestion_engine import generate, get_platform_optimizations
from app.utils.logger import get_logger

logger = get_logger("suggestion_routes")

router = APIRouter()


@router.post(
    "/analyze",
    response_model=AnalyzeResponse,
    response_model_exclude_none=True,
    summary="Analyze prompt text",
    description="Generate prompt-improvement suggestions; premium rules require an active subscription"
)
async def analyze(
    request: AnalyzeRequest,
    token: str = Depends(get_bearer_token),
    db: AsyncSession = Depends(get_db)
) -> AnalyzeResponse:
    """
    Analyze prompt text and return ordered suggestions.

    The tier is resolved from the credential on the server; a failed
    subscription lookup falls back to free-tier suggestions.

    Raises:
        HTTPException: 400 when text is missing, 401 when the token is invalid
    """
    if not request.text:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Text is required for analysis"
        )

    access = await access_gate.resolve_tier(db, token)
    if not access.authenticated:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Unauthorized",
            headers={"WWW-Authenticate": "Bearer"}
        )

    platform = Platform.parse(request.platform)
    suggestions = generate(
        request.text,
        platform,
        access.tier,
        upsell_mode=settings.SUGGESTION_UPSELL_MODE,
        caps=settings.suggestion_caps
    )

    logger.info(
        f"Suggestions generated",
        user_id=str(access.user_id),
        platform=platform.value,
        tier=access.tier.value,
        count=len(suggestions)
    )

    return AnalyzeResponse(
        suggestions=suggestions,
        has_subscription=access.has_subscription,
        platform=platform
    )


@router.get(
    "/platforms/{platform}",
    response_model=PlatformOptimizationResponse,
    summary="Platform prompting hints",
    description="Preferred structure, length limit and phrases for a platform. No authentication required."
)
async def platform_optimizations(platform: str) -> PlatformOptimizationResponse:
    resolved = Platform.parse(platform)
    return PlatformOptimizationResponse(platform=resolved, **get_platform_optimizations(resolved))
