"""
Email Service - Configuration Management

Centralized configuration for environment variables and deployment settings.
This module ensures:
- No hardcoded secrets
- Missing provider credentials are reported at startup
- Environment-specific settings (dev/staging/prod)
"""

import logging
from functools import lru_cache
from typing import List

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.
    Uses pydantic-settings for validation and type coercion.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # ==================== ENVIRONMENT ====================
    ENVIRONMENT: str = Field(
        default="development",
        description="Runtime environment: development, staging, production"
    )
    DEBUG: bool = Field(
        default=False,
        description="Enable verbose request logging"
    )

    # ==================== EMAIL PROVIDER ====================
    RESEND_API_KEY: str = Field(
        default="",
        description="Resend API key"
    )
    FROM_EMAIL: str = Field(
        default="",
        description="Sender address used on every outgoing message"
    )

    # ==================== SERVER ====================
    HOST: str = Field(default="0.0.0.0")
    PORT: int = Field(
        default=3001,
        description="Listening port"
    )
    CORS_ORIGINS: str = Field(
        default="",
        description="Comma-separated list of allowed origins (empty disables CORS)"
    )

    # ==================== OBSERVABILITY ====================
    SENTRY_DSN: str = Field(
        default="",
        description="Sentry DSN for error tracking"
    )
    LOG_LEVEL: str = Field(
        default="INFO",
        description="Logging level: DEBUG, INFO, WARNING, ERROR"
    )

    SERVICE_NAME: str = Field(default="email-service")

    # ==================== COMPUTED PROPERTIES ====================

    @property
    def is_production(self) -> bool:
        return self.ENVIRONMENT.lower() == "production"

    @property
    def is_development(self) -> bool:
        return self.ENVIRONMENT.lower() == "development"

    @property
    def debug_enabled(self) -> bool:
        """Enable debug in development or when explicitly set"""
        return self.DEBUG or self.is_development

    @property
    def cors_origins_list(self) -> List[str]:
        if not self.CORS_ORIGINS:
            return []
        return [o.strip() for o in self.CORS_ORIGINS.split(",") if o.strip()]

    def validate_provider_config(self) -> List[str]:
        """
        Validate the email provider configuration.
        Returns list of validation errors.
        """
        errors = []

        if not self.RESEND_API_KEY:
            errors.append("RESEND_API_KEY is required")

        if not self.FROM_EMAIL:
            errors.append("FROM_EMAIL is required")

        return errors


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.
    Settings are loaded once and cached for the application lifetime.
    """
    return Settings()


# ==================== CORS CONFIGURATION ====================

def get_cors_config(settings: Settings) -> dict:
    """
    Get CORS middleware configuration.

    Returns configuration dict for CORSMiddleware.
    """
    return {
        "allow_origins": settings.cors_origins_list,
        "allow_credentials": False,
        "allow_methods": ["GET", "POST", "OPTIONS"],
        "allow_headers": [
            "Content-Type",
            "Accept",
            "Origin",
            "X-Request-ID",
        ],
        "expose_headers": ["X-Request-ID"],
        "max_age": 600,  # Cache preflight for 10 minutes
    }


# ==================== ENVIRONMENT VALIDATION ====================

def validate_environment(settings: Settings) -> dict:
    """
    Validate all required environment variables.

    Returns a status dict with validation results.
    """
    status = {
        "valid": True,
        "environment": settings.ENVIRONMENT,
        "errors": [],
        "warnings": [],
        "variables": {}
    }

    errors = settings.validate_provider_config()
    if errors:
        status["errors"].extend(errors)
        status["valid"] = False

    for name, value in (
        ("RESEND_API_KEY", settings.RESEND_API_KEY),
        ("FROM_EMAIL", settings.FROM_EMAIL),
    ):
        status["variables"][name] = "✓ Set" if value else "✗ Not set"

    if not settings.SENTRY_DSN:
        status["warnings"].append("Error tracking disabled")
        status["variables"]["SENTRY_DSN"] = "⚠ Not set"
    else:
        status["variables"]["SENTRY_DSN"] = "✓ Set"

    return status
