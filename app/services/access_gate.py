"""
Access gate: resolves a bearer credential to an identity and a tier.

The suggestion engine never calls this itself; routes resolve the tier
here and pass it in.
"""
from typing import Optional
from fastapi import HTTPException
from sqlalchemy.ext.asyncio import AsyncSession
from jose import JWTError

from app.schemas.auth import AccessResult, TokenData
from app.schemas.suggestion import Tier
from app.services.database import db_service
from app.utils.jwt import verify_token
from app.utils.logger import get_logger

logger = get_logger("access_gate")


class AccessGate:
    """Service resolving credentials to subscription tiers."""

    def authenticate(self, credential: Optional[str]) -> Optional[TokenData]:
        """
        Verify a bearer credential.

        Args:
            credential: Raw token without the "Bearer " prefix

        Returns:
            TokenData for a valid token, None otherwise
        """
        if not credential:
            return None

        try:
            return verify_token(credential)
        except JWTError as e:
            logger.warning(f"Credential rejected", error=str(e))
            return None

    async def resolve_tier(
        self,
        db: AsyncSession,
        credential: Optional[str]
    ) -> AccessResult:
        """
        Resolve identity and tier for a credential.

        A failed subscription lookup does not fail the caller: the user is
        treated as free tier and the failure is logged.

        Args:
            db: Database session
            credential: Raw bearer token

        Returns:
            AccessResult (unauthenticated and free when the token is invalid)
        """
        token_data = self.authenticate(credential)
        if token_data is None:
            return AccessResult(authenticated=False)

        tier = Tier.FREE
        try:
            subscription = await db_service.get_active_subscription(db, token_data.user_id)
            if subscription is not None:
                tier = Tier.PREMIUM
        except HTTPException as e:
            logger.error(
                f"Tier resolution failed, degrading to free",
                user_id=str(token_data.user_id),
                error=str(e.detail)
            )
        except Exception as e:
            logger.error(
                f"Tier resolution failed, degrading to free",
                user_id=str(token_data.user_id),
                error=str(e),
                exc_info=True
            )

        logger.debug(f"Access resolved", user_id=str(token_data.user_id), tier=tier.value)

        return AccessResult(
            authenticated=True,
            tier=tier,
            user_id=token_data.user_id,
            email=token_data.email
        )


# Global access gate instance
access_gate = AccessGate()
