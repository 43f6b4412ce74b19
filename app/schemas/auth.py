"""
Pydantic schemas for credential validation and access resolution.
"""
from uuid import UUID
from typing import Optional
from pydantic import BaseModel, Field

from app.schemas.suggestion import Tier


class TokenData(BaseModel):
    """
    Schema for data encoded in the auth provider's JWT.
    """
    user_id: UUID
    email: Optional[str] = None


class AccessResult(BaseModel):
    """
    Outcome of resolving a bearer credential.

    `tier` is always FREE when the caller is not authenticated.
    """
    authenticated: bool = False
    tier: Tier = Tier.FREE
    user_id: Optional[UUID] = None
    email: Optional[str] = None

    @property
    def has_subscription(self) -> bool:
        return self.tier is Tier.PREMIUM


class ValidatedUser(BaseModel):
    """User identity returned by token validation."""
    id: UUID
    email: Optional[str] = None


class ValidateTokenResponse(BaseModel):
    """
    Schema for POST /auth/validate response.
    """
    valid: bool = Field(True, description="Always true on success")
    user: ValidatedUser
