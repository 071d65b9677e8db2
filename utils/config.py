"""
Configuration Utility - Environment Variables Management

Centralized configuration loading from the environment (and an optional .env
file) using pydantic-settings. Values are read once, at first access.

Usage:
    from utils.config import settings

    database_url = settings.DATABASE_URL
    debug = settings.DEBUG
"""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # Database Configuration
    DATABASE_URL: str = Field(default="postgresql://postgres:postgres@db:5432/postgres")
    DB_CONNECT_MAX_RETRIES: int = Field(default=5, ge=1)

    # Debug tracing of handler database calls
    DEBUG: bool = Field(default=False)

    # Backend API Configuration
    API_HOST: str = Field(default="0.0.0.0")
    API_PORT: int = Field(default=8000)
    API_PREFIX: str = Field(default="/api/go")

    # CORS Configuration
    CORS_ALLOW_ORIGIN: str = Field(default="*")
    CORS_ALLOW_METHODS: str = Field(default="GET, POST, PUT, DELETE, OPTIONS")
    CORS_ALLOW_HEADERS: str = Field(default="Content-Type, Authorization")

    # Logging Configuration
    LOG_LEVEL: str = Field(default="INFO")
    LOG_FORMAT: str = Field(default="json")

    # Application Metadata
    ENVIRONMENT: str = Field(default="production")
    APP_NAME: str = Field(default="users-api")
    APP_VERSION: str = Field(default="0.1.0")


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance.

    Returns:
        Singleton Settings instance
    """
    return Settings()


# Global settings instance
settings = get_settings()
