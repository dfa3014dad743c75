# settings.py
"""
CoachHub API Settings.

Pydantic settings management with environment variable support.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import List, Optional
from urllib.parse import urlparse, urlunparse


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore",
    )

    # MongoDB - REQUIRED from environment
    DATABASE_URL: str = Field(..., description="MongoDB connection string (required)")
    DATABASE_NAME: str = Field(default="coachhub")
    MONGO_MAX_POOL_SIZE: int = Field(default=50)
    MONGO_MIN_POOL_SIZE: int = Field(default=10)
    MONGO_SERVER_SELECTION_TIMEOUT_MS: int = Field(default=5000)

    # JWT issued by the auth provider - REQUIRED from environment
    SECRET_KEY: str = Field(..., description="JWT signing secret shared with the auth provider (required)")
    ALGORITHM: str = Field(default="HS256")
    ACCESS_TOKEN_EXPIRE_MINUTES: int = Field(default=30)

    # Environment
    ENV: str = Field(default="development")
    DEBUG: bool = Field(default=True)

    # CORS
    CORS_ORIGINS: str = Field(
        default="http://localhost:3000",
        description="Comma-separated list of allowed CORS origins"
    )

    # Redis Configuration
    REDIS_URL: str = Field(
        default="redis://localhost:6379/0",
        description="Redis connection URL (redis://[:password@]host:port/db)"
    )
    REDIS_PASSWORD: Optional[str] = Field(
        default=None,
        description="Redis password for authentication"
    )
    REDIS_MAX_CONNECTIONS: int = Field(
        default=50,
        description="Redis connection pool size"
    )
    REDIS_SOCKET_TIMEOUT: int = Field(
        default=5,
        description="Redis socket timeout in seconds"
    )

    # Cache TTL Defaults (in seconds)
    CACHE_TTL_DEFAULT: int = Field(
        default=300,
        description="Read cache TTL; tag revalidation usually evicts earlier"
    )
    CACHE_TTL_STATS: int = Field(
        default=600,
        description="Dashboard statistics cache TTL (10 minutes)"
    )

    # ImageKit (media uploads)
    IMAGEKIT_PRIVATE_KEY: Optional[str] = None
    IMAGEKIT_PUBLIC_KEY: Optional[str] = None
    IMAGEKIT_URL_ENDPOINT: Optional[str] = None

    # Sentry Error Tracking
    SENTRY_DSN: Optional[str] = None
    SENTRY_ENVIRONMENT: str = "production"
    SENTRY_TRACES_SAMPLE_RATE: float = 0.1

    @property
    def cors_origins_list(self) -> List[str]:
        """Parse comma-separated CORS origins into a list."""
        if self.CORS_ORIGINS == "*":
            return ["*"]
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",") if origin.strip()]

    @property
    def redis_url_with_auth(self) -> str:
        """Build Redis URL with authentication if password is provided."""
        if self.REDIS_PASSWORD:
            parsed = urlparse(self.REDIS_URL)
            netloc_with_auth = f":{self.REDIS_PASSWORD}@{parsed.netloc}"
            return urlunparse((
                parsed.scheme,
                netloc_with_auth,
                parsed.path,
                parsed.params,
                parsed.query,
                parsed.fragment
            ))
        return self.REDIS_URL

    def validate_required_settings(self) -> None:
        """Validate that required settings are configured."""
        if not self.DATABASE_URL:
            raise ValueError("DATABASE_URL must be set")
        if not self.SECRET_KEY:
            raise ValueError("SECRET_KEY must be changed from default in production")


settings = Settings()

# Validate in production
if settings.ENV == "production":
    settings.validate_required_settings()
