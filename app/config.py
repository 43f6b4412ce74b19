"""
Configuration management using Pydantic Settings.
Loads configuration from environment variables and .env file.
"""
from typing import Dict, List, Optional
from pydantic_settings import BaseSettings, SettingsConfigDict

from app.schemas.suggestion import Tier


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Database Configuration
    DATABASE_HOST: str = "localhost"
    DATABASE_PORT: int = 5432
    DATABASE_NAME: str = "postgres"
    DATABASE_USER: str = "enhancer_user"
    DATABASE_PASSWORD: str  # Required - no default for security
    DB_SCHEMA: str = "enhancer"  # Schema name for all tables (use "enhancer_test" for tests)

    # Application Configuration
    HOST: str = "0.0.0.0"
    PORT: int = 8000
    LOG_LEVEL: str = "INFO"

    # Suggestion Engine Configuration
    FREE_SUGGESTION_CAP: int = 3
    PREMIUM_SUGGESTION_CAP: int = 8
    SUGGESTION_UPSELL_MODE: str = "append"  # Options: append, reserve

    # Delivery Client Configuration
    API_BASE_URL: str = "http://localhost:8000"
    ANALYZE_DEBOUNCE_MS: int = 500  # Quiet period before re-analyzing input
    MIN_ANALYZE_LENGTH: int = 10  # Client skips analysis below this length
    CLIENT_TIMEOUT_SECONDS: float = 10.0

    # CORS Configuration
    CORS_ORIGINS: str = "*"

    # Database Pool Configuration
    DB_POOL_SIZE: int = 5
    DB_MAX_OVERFLOW: int = 10

    # Development/Debug
    DEBUG: bool = False
    RELOAD: bool = False

    # Authentication & JWT Configuration
    # Tokens are issued by the external auth provider and signed with a shared secret
    JWT_SECRET_KEY: str  # Required - no default for security
    JWT_ALGORITHM: str = "HS256"
    JWT_AUDIENCE: Optional[str] = "authenticated"
    ACCESS_TOKEN_EXPIRE_DAYS: int = 30

    # Logging Configuration (Optional - per-module log levels)
    APP_LOG_LEVEL: Optional[str] = None
    SQLALCHEMY_LOG_LEVEL: Optional[str] = None
    UVICORN_LOG_LEVEL: Optional[str] = None
    HTTPX_LOG_LEVEL: Optional[str] = None
    ASYNCPG_LOG_LEVEL: Optional[str] = None

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True
    )

    @property
    def database_url(self) -> str:
        """Construct async database URL."""
        return (
            f"postgresql+asyncpg://{self.DATABASE_USER}:{self.DATABASE_PASSWORD}"
            f"@{self.DATABASE_HOST}:{self.DATABASE_PORT}/{self.DATABASE_NAME}"
        )

    @property
    def cors_origins_list(self) -> List[str]:
        """Parse CORS origins from comma-separated string."""
        if self.CORS_ORIGINS == "*":
            return ["*"]
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",")]

    @property
    def analyze_debounce_seconds(self) -> float:
        """Convert debounce window from milliseconds to seconds."""
        return self.ANALYZE_DEBOUNCE_MS / 1000

    @property
    def suggestion_caps(self) -> Dict[Tier, int]:
        """Per-tier suggestion caps."""
        return {
            Tier.FREE: self.FREE_SUGGESTION_CAP,
            Tier.PREMIUM: self.PREMIUM_SUGGESTION_CAP,
        }


# Global settings instance
settings = Settings()
