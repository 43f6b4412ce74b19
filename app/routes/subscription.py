"""
API routes for subscription status.
"""
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db
from app.middleware.jwt import get_bearer_token, require_token_data
from app.schemas.subscription import (
    SubscriptionCheckRequest,
    SubscriptionCheckResponse,
    SubscriptionInfo,
)
from app.schemas.suggestion import Tier
from app.services.database import db_service
from app.utils.logger import get_logger

logger = get_logger("subscription_routes")

router = APIRouter()


@router.post(
    "/check",
    response_model=SubscriptionCheckResponse,
    summary="Check subscription status",
    description="Report whether the authenticated user has an active subscription"
)
async def check_subscription(
    request: SubscriptionCheckRequest,
    token: str = Depends(get_bearer_token),
    db: AsyncSession = Depends(get_db)
) -> SubscriptionCheckResponse:
    """
    Check the caller's subscription.

    Unlike suggestion analysis, a failed lookup is reported as an error
    here rather than downgraded to free.

    Raises:
        HTTPException: 400 without userId, 401 for an invalid token or a
            userId belonging to someone else, 500 when the lookup fails
    """
    if not request.user_id:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="User ID is required"
        )

    token_data = require_token_data(token)
    if str(token_data.user_id) != request.user_id:
        logger.warning(
            f"Subscription check for another user rejected",
            user_id=str(token_data.user_id),
            requested_user_id=request.user_id
        )
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Unauthorized",
            headers={"WWW-Authenticate": "Bearer"}
        )

    subscription = await db_service.get_active_subscription(db, token_data.user_id)
    has_subscription = subscription is not None

    logger.info(
        f"Subscription checked",
        user_id=str(token_data.user_id),
        active=has_subscription
    )

    return SubscriptionCheckResponse(
        active=has_subscription,
        has_subscription=has_subscription,
        plan=Tier.PREMIUM if has_subscription else Tier.FREE,
        subscription=SubscriptionInfo.model_validate(subscription) if subscription else None
    )
