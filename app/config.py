"""Application configuration settings."""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

ENV_FILE = ".env"
ENV_FILE_ENCODING = "utf-8"


class Settings(BaseSettings):
    """Application configuration values loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=ENV_FILE, env_file_encoding=ENV_FILE_ENCODING, extra="ignore"
    )

    database_url: str = Field(
        description="Database connection URL used by SQLAlchemy to connect to the DB",
        min_length=1,
    )
    environment: str = Field(
        default="development",
        description="Deployment environment; cookies are only marked secure outside development",
    )

    session_duration_days: int = Field(
        default=30, description="Lifetime of a freshly created session", gt=0
    )
    session_refresh_threshold_days: int = Field(
        default=15,
        description="Sessions with less remaining lifetime than this are extended on use",
        gt=0,
    )
    session_cookie_name: str = Field(default="auth_session", min_length=1)
    csrf_cookie_name: str = Field(default="csrf_token", min_length=1)
    csrf_header_name: str = Field(default="X-CSRF-Token", min_length=1)

    allow_registration: bool = Field(
        default=True, description="Whether new accounts can sign up"
    )
    email_verification_required: bool = Field(
        default=False,
        description="Require new accounts to confirm a code sent by email before logging in",
    )
    verification_code_ttl_minutes: int = Field(default=15, gt=0)

    notification_encryption_key: str | None = Field(
        default=None,
        description="64 hex characters (256-bit key) used to encrypt relay URLs at rest",
    )
    vapid_public_key: str | None = Field(default=None)
    vapid_private_key: str | None = Field(default=None)
    vapid_email: str | None = Field(
        default=None, description="Administrative contact sent in the VAPID claims"
    )
    notification_timeout_seconds: float = Field(
        default=5.0,
        description="Upper bound for a single push or relay delivery request",
        gt=0,
    )

    reminder_scheduler_enabled: bool = Field(
        default=True,
        description="Start the once-per-minute reminder scheduler with the application",
    )
    rate_limit_cleanup_interval_seconds: int = Field(default=60, gt=0)
    cors_allow_origins: list[str] = Field(
        default_factory=list,
        description="Origins allowed to call the API with credentials (JSON list)",
    )

    sendgrid_api_key: str | None = Field(
        default=None,
        description="SendGrid API key used for sending transactional emails via the REST API",
    )
    sendgrid_sender: str | None = Field(
        default=None,
        description="Email address that will appear as the sender of transactional messages",
        min_length=3,
    )

    @model_validator(mode="after")
    def _validate_sendgrid_pair(self) -> "Settings":
        if bool(self.sendgrid_api_key) ^ bool(self.sendgrid_sender):
            raise ValueError(
                "SENDGRID_API_KEY and SENDGRID_SENDER must both be provided to enable email"
            )
        if self.sendgrid_sender and "@" not in self.sendgrid_sender:
            raise ValueError("SENDGRID_SENDER must be a valid email address")
        return self

    @model_validator(mode="after")
    def _validate_session_window(self) -> "Settings":
        if self.session_refresh_threshold_days >= self.session_duration_days:
            raise ValueError(
                "SESSION_REFRESH_THRESHOLD_DAYS must be shorter than SESSION_DURATION_DAYS"
            )
        return self

    @property
    def secure_cookies(self) -> bool:
        return self.environment.strip().lower() != "development"

    @property
    def web_push_configured(self) -> bool:
        return bool(self.vapid_public_key and self.vapid_private_key and self.vapid_email)


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings instance."""

    return Settings()


def reset_settings_cache() -> None:
    """Clear the settings cache to force reloading from the environment."""

    get_settings.cache_clear()


__all__ = ["Settings", "get_settings", "reset_settings_cache"]
