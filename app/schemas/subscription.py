"""
Pydantic schemas for subscription status lookups.
"""
from datetime import datetime
from uuid import UUID
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field

from app.schemas.suggestion import Tier


class SubscriptionInfo(BaseModel):
    """Subscription row as exposed to the extension."""
    id: UUID
    user_id: UUID
    provider_subscription_id: str
    status: str
    current_period_end: Optional[datetime] = None
    cancel_at_period_end: bool = False

    model_config = ConfigDict(from_attributes=True)


class SubscriptionCheckRequest(BaseModel):
    """
    Body of POST /subscription/check.
    """
    model_config = ConfigDict(populate_by_name=True)

    user_id: Optional[str] = Field(None, alias="userId", description="User whose subscription is checked")


class SubscriptionCheckResponse(BaseModel):
    """
    Response of POST /subscription/check.
    """
    model_config = ConfigDict(populate_by_name=True)

    active: bool
    has_subscription: bool = Field(..., alias="hasSubscription")
    plan: Tier
    subscription: Optional[SubscriptionInfo] = None
