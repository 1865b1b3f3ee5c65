from functools import lru_cache
from typing import ClassVar

from pydantic import model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from tutorguard.core.constants import (
    CLASSIFIER_TIMEOUT_SECONDS,
    DEFAULT_MODERATION_API_URL,
    DEFAULT_MODERATION_MODEL,
)


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Secrets required only when the audit log is switched on
    AUDIT_LOG_SECRETS: ClassVar[list[str]] = [
        "supabase_url",
        "supabase_service_role_key",
    ]

    # Environment (development, staging, production)
    environment: str = "development"

    # App
    app_name: str = "Tutor Chat Moderation API"
    debug: bool = False
    api_prefix: str = "/api/v1"

    # CORS
    cors_origins: list[str] = ["http://localhost:3000"]

    # External classifier (optional - rule-only moderation without a key)
    openai_api_key: str = ""
    moderation_classifier_enabled: bool = True
    moderation_api_url: str = DEFAULT_MODERATION_API_URL
    moderation_model: str = DEFAULT_MODERATION_MODEL
    moderation_timeout_seconds: float = CLASSIFIER_TIMEOUT_SECONDS

    # Audit log (Supabase)
    audit_log_enabled: bool = False
    supabase_url: str = ""
    supabase_service_role_key: str = ""

    # Rate limiting
    rate_limit_enabled: bool = True
    rate_limit_storage_uri: str = "memory://"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
    )

    @property
    def classifier_configured(self) -> bool:
        """True when the external classifier should be called."""
        return self.moderation_classifier_enabled and bool(self.openai_api_key.strip())

    @model_validator(mode="after")
    def validate_audit_log_secrets(self) -> "Settings":
        """Validate that Supabase secrets are set when the audit log is enabled."""
        if not self.audit_log_enabled:
            return self

        missing = []
        for secret_name in self.AUDIT_LOG_SECRETS:
            value = getattr(self, secret_name, "")
            if not value or not value.strip():
                missing.append(secret_name.upper())

        if missing:
            raise ValueError(
                f"Missing required secrets: {', '.join(missing)}. "
                "Set these environment variables or disable AUDIT_LOG_ENABLED."
            )

        return self

    @model_validator(mode="after")
    def validate_moderation_timeout(self) -> "Settings":
        if self.moderation_timeout_seconds <= 0:
            raise ValueError("MODERATION_TIMEOUT_SECONDS must be positive.")
        return self

    @model_validator(mode="after")
    def validate_cors_origins_in_production(self) -> "Settings":
        """Validate CORS origins are safe in production."""
        from urllib.parse import urlparse

        if self.environment != "production":
            return self

        unsafe_hostnames = {"localhost", "127.0.0.1", "0.0.0.0"}

        for origin in self.cors_origins:
            if origin == "*":
                raise ValueError(
                    "Wildcard (*) CORS origin is not allowed in production. "
                    "Specify exact origins instead."
                )

            hostname = urlparse(origin).hostname or ""
            if hostname in unsafe_hostnames:
                raise ValueError(
                    f"CORS origin '{origin}' uses hostname '{hostname}' which is not "
                    f"allowed in production. Use HTTPS production URLs instead."
                )

        return self


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
