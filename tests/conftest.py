"""
Pytest configuration and fixtures for prompt enhancer tests.
"""
import os
import uuid
from typing import AsyncGenerator
from unittest.mock import AsyncMock

import pytest
from httpx import AsyncClient, ASGITransport

# Set required environment variables before importing Settings to avoid validation error
os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key-for-testing-only-not-for-production")
os.environ.setdefault("DATABASE_PASSWORD", "password")
os.environ["DB_SCHEMA"] = "enhancer_test"  # MUST be set before app imports

from app.database import get_db
from app.main import app
from app.models.subscription import Subscription, SubscriptionStatus
from app.utils.jwt import create_access_token


@pytest.fixture
def mock_db_session() -> AsyncMock:
    """Database session stand-in; subscription lookups are patched per test."""
    return AsyncMock()


@pytest.fixture
async def client(mock_db_session: AsyncMock) -> AsyncGenerator[AsyncClient, None]:
    """
    Async test client for the FastAPI application.
    Overrides the database dependency with the mock session.
    """
    async def override_get_db():
        yield mock_db_session

    app.dependency_overrides[get_db] = override_get_db

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest.fixture
def user_id() -> uuid.UUID:
    return uuid.uuid4()


@pytest.fixture
def access_token(user_id: uuid.UUID) -> str:
    return create_access_token(user_id, "prompt.writer@example.com")


@pytest.fixture
def auth_headers(access_token: str) -> dict:
    return {"Authorization": f"Bearer {access_token}"}


@pytest.fixture
def active_subscription(user_id: uuid.UUID) -> Subscription:
    """An active subscription row for the test user (not persisted)."""
    return Subscription(
        id=uuid.uuid4(),
        user_id=user_id,
        provider_subscription_id="sub_test_123",
        status=SubscriptionStatus.ACTIVE.value,
        current_period_end=None,
        cancel_at_period_end=False
    )


@pytest.fixture
def long_prompt() -> str:
    """149-character lowercase prompt with no terminal punctuation."""
    return " ".join(["word"] * 30)
