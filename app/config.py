# =============================================================================
# app/config.py - Application Settings
# =============================================================================
# This module loads configuration from environment variables using pydantic-settings.
# It provides a single Settings class with all configuration values.
#
# Usage:
#   from app.config import settings
#   print(settings.SUPABASE_URL)
#
# Environment variables are loaded from:
# 1. System environment variables
# 2. .env file in project root (if exists)
# =============================================================================

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All settings are accessed via the global `settings` instance.
    """

    # -------------------------------------------------------------------------
    # Supabase Configuration
    # -------------------------------------------------------------------------

    SUPABASE_URL: str = Field(
        ...,
        description="Supabase project URL (e.g., https://xxx.supabase.co)"
    )

    SUPABASE_ANON_KEY: str = Field(
        ...,
        description="Supabase anon/public API key"
    )

    SUPABASE_SERVICE_KEY: str = Field(
        ...,
        description="Supabase service_role key (bypasses RLS)"
    )

    SUPABASE_JWT_SECRET: str = Field(
        default="",
        description="Legacy HS256 secret used to verify Supabase access tokens"
    )

    # -------------------------------------------------------------------------
    # Redis Configuration (Celery broker + live team channels)
    # -------------------------------------------------------------------------

    REDIS_URL: str = Field(
        default="redis://localhost:6379/0",
        description="Redis connection URL for Celery broker and pub/sub"
    )

    # -------------------------------------------------------------------------
    # Email (Resend)
    # -------------------------------------------------------------------------

    RESEND_API_KEY: str = Field(
        default="",
        description="Resend API key; emails are simulated when empty"
    )

    RESEND_API_URL: str = Field(
        default="https://api.resend.com",
        description="Base URL of the Resend REST API"
    )

    EMAIL_FROM: str = Field(
        default="Team Manager <noreply@yourapp.com>",
        description="Sender address for outgoing email"
    )

    EMAIL_TIMEOUT_SECONDS: float = Field(
        default=10.0,
        gt=0,
        description="HTTP timeout for email API calls"
    )

    APP_URL: str = Field(
        default="http://localhost:3000",
        description="Public URL of the frontend, used in email links"
    )

    # -------------------------------------------------------------------------
    # Application Settings
    # -------------------------------------------------------------------------

    ENVIRONMENT: Literal["development", "staging", "production"] = Field(
        default="development",
        description="Current environment"
    )

    DEBUG: bool = Field(
        default=False,
        description="Enable debug mode (verbose logging, auto-reload)"
    )

    API_HOST: str = Field(
        default="0.0.0.0",
        description="Host to bind the API server to"
    )

    API_PORT: int = Field(
        default=8000,
        ge=1,
        le=65535,
        description="Port for the API server"
    )

    DASHBOARD_EVENT_LIMIT: int = Field(
        default=5,
        ge=1,
        le=50,
        description="Number of upcoming events shown on the dashboard"
    )

    # -------------------------------------------------------------------------
    # Security
    # -------------------------------------------------------------------------

    # CORS origins (comma-separated string that gets parsed)
    CORS_ORIGINS: str = Field(
        default="http://localhost:3000",
        description="Allowed CORS origins (comma-separated)"
    )

    PROTECTED_PATH_PREFIXES: str = Field(
        default="/admin",
        description="Path prefixes that require a session (comma-separated)"
    )

    LOGIN_URL: str = Field(
        default="/login",
        description="Where unauthenticated browser requests are redirected"
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_ignore_empty=True,
        case_sensitive=True,
        extra="ignore",
    )

    # -------------------------------------------------------------------------
    # Computed Properties
    # -------------------------------------------------------------------------

    @property
    def cors_origins_list(self) -> list[str]:
        """
        Parse CORS_ORIGINS string into a list.

        Example: "http://localhost:3000, https://myapp.com" -> ["http://localhost:3000", "https://myapp.com"]
        """
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",")]

    @property
    def protected_prefixes_list(self) -> list[str]:
        """Parse PROTECTED_PATH_PREFIXES into a list, dropping blanks."""
        return [
            prefix.strip()
            for prefix in self.PROTECTED_PATH_PREFIXES.split(",")
            if prefix.strip()
        ]

    @property
    def email_enabled(self) -> bool:
        """Real email is only sent outside development and with an API key."""
        return bool(self.RESEND_API_KEY) and not self.is_development

    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.ENVIRONMENT == "development"

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.ENVIRONMENT == "production"


@lru_cache
def get_settings() -> Settings:
    """
    Get cached Settings instance.

    Using lru_cache ensures we only parse .env and validate once,
    not on every access.

    Returns:
        Settings: The application settings instance
    """
    return Settings()


# Global settings instance for easy importing
# Usage: from app.config import settings
settings = get_settings()
