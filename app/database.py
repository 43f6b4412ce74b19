"""
Database connection and session management.
Provides the async engine used for subscription lookups.
"""
from typing import AsyncGenerator
from sqlalchemy import text
from sqlalchemy.ext.asyncio import (
    AsyncSession,
    create_async_engine,
    async_sessionmaker
)
from sqlalchemy.orm import declarative_base
from fastapi import HTTPException
from app.config import settings
from app.utils.logger import get_logger

logger = get_logger("database")

# SQL echo stays off; use SQLALCHEMY_LOG_LEVEL instead
engine = create_async_engine(
    settings.database_url,
    pool_size=settings.DB_POOL_SIZE,
    max_overflow=settings.DB_MAX_OVERFLOW,
    pool_pre_ping=True,
    echo=False
)

AsyncSessionLocal = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autoflush=False
)

Base = declarative_base()


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """
    Dependency yielding an async database session.

    The session is read-mostly here; it is rolled back on error and
    always closed.
    """
    async with AsyncSessionLocal() as session:
        try:
            yield session
        except HTTPException:
            raise
        except Exception as e:
            await session.rollback()
            logger.error(f"Database session error", error=str(e), exc_info=True)
            raise


async def check_db_connection() -> bool:
    """
    Check if database connection is working.

    Returns:
        bool: True if connection successful, False otherwise
    """
    try:
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
        logger.info("Database connection successful")
        return True
    except Exception as e:
        logger.error(f"Database connection failed", error=str(e), exc_info=True)
        return False
