"""
Database service for subscription lookups.
"""
from uuid import UUID
from typing import Optional
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from fastapi import HTTPException, status

from app.models.subscription import Subscription, SubscriptionStatus
from app.utils.logger import get_logger

logger = get_logger("database_service")


class DatabaseService:
    """Service for read operations on the subscriptions table."""

    async def get_active_subscription(
        self,
        db: AsyncSession,
        user_id: UUID
    ) -> Optional[Subscription]:
        """
        Get the user's active subscription, if any.

        When several active rows exist the most recently updated one wins.

        Args:
            db: Database session
            user_id: Auth provider user ID

        Returns:
            Active Subscription or None

        Raises:
            HTTPException: If the lookup fails
        """
        try:
            result = await db.execute(
                select(Subscription)
                .where(
                    Subscription.user_id == user_id,
                    Subscription.status == SubscriptionStatus.ACTIVE.value
                )
                .order_by(Subscription.updated_at.desc())
                .limit(1)
            )
            subscription = result.scalar_one_or_none()

            logger.debug(
                f"Subscription lookup",
                user_id=str(user_id),
                active=subscription is not None
            )

            return subscription

        except Exception as e:
            logger.error(
                f"Failed to look up subscription",
                user_id=str(user_id),
                error=str(e),
                exc_info=True
            )
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail="Failed to check subscription"
            )


# Global database service instance
db_service = DatabaseService()
