"""
SQLAlchemy models for the prompt enhancer service.
"""
from app.models.subscription import Subscription, SubscriptionStatus

__all__ = [
    "Subscription",
    "SubscriptionStatus",
]
