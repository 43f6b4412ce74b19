"""
SQLAlchemy model for subscriptions table.
"""
import uuid
from datetime import datetime, timezone
from enum import Enum
from typing import Optional
from sqlalchemy import String, Boolean, DateTime, Index
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column
from app.config import settings
from app.database import Base


class SubscriptionStatus(str, Enum):
    """Statuses mirrored from the payment provider."""
    INCOMPLETE = "incomplete"
    TRIALING = "trialing"
    ACTIVE = "active"
    PAST_DUE = "past_due"
    CANCELED = "canceled"
    UNPAID = "unpaid"
    REVOKED = "revoked"


class Subscription(Base):
    """
    Mirror of a payment-provider subscription.

    Rows are written by the payment webhook handler; this service only
    reads them to decide whether a user is on the premium tier.

    Attributes:
        id: Unique identifier (UUID4)
        user_id: Auth provider user ID the subscription belongs to
        provider_subscription_id: Subscription ID at the payment provider
        status: Provider status string (see SubscriptionStatus)
        current_period_end: End of the paid period, if known
        cancel_at_period_end: Whether the subscription lapses at period end
    """

    __tablename__ = "subscriptions"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4
    )

    user_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        nullable=False,
        index=True
    )

    provider_subscription_id: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        unique=True
    )

    status: Mapped[str] = mapped_column(
        String(50),
        nullable=False,
        default=SubscriptionStatus.INCOMPLETE.value
    )

    current_period_end: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True),
        nullable=True
    )

    cancel_at_period_end: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=False,
        server_default="false"
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc)
    )

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc)
    )

    __table_args__ = (
        Index("idx_subscriptions_user_status", "user_id", "status"),
        {"schema": settings.DB_SCHEMA}
    )

    def __repr__(self) -> str:
        return f"<Subscription(id={self.id}, user_id={self.user_id}, status={self.status})>"
