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
    database_timeout_seconds: float = Field(
        default=10.0,
        description="Upper bound in seconds for acquiring a connection or running a statement",
        gt=0,
    )
    secret_key: str = Field(
        description="Secret key for signing JWT tokens", min_length=1
    )
    access_token_expire_minutes: int = Field(
        default=60,
        description="Number of minutes before access tokens expire",
        gt=0,
    )
    app_timezone: str = Field(
        default="Asia/Kuala_Lumpur",
        description="Timezone used to decide which calendar day is 'today'",
    )
    environment: str = Field(
        default="development",
        description="Deployment environment name; 'production' locks the init endpoint",
    )
    init_secret: str | None = Field(
        default=None,
        description="Secret required to call the database init endpoint in production",
    )
    default_admin_name: str = Field(default="System Admin")
    default_admin_email: str = Field(default="admin@example.com")
    default_admin_password: str | None = Field(
        default=None,
        description="Password for the admin seeded by the init endpoint; seeding is skipped when unset",
    )
    email_test_mode: bool = Field(
        default=False,
        description="Return generated email content instead of transmitting it",
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
    notification_lookahead_days: int = Field(
        default=3,
        description="Number of days ahead of today that count as 'upcoming' for event reminders",
        gt=0,
    )
    notification_recipient_roles: list[str] = Field(
        default_factory=lambda: ["member"],
        description="User roles that receive upcoming event reminders",
    )
    notification_email_enabled: bool = Field(
        default=False,
        description="Also email each newly created event reminder",
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

    def is_production(self) -> bool:
        """Return ``True`` when running in the production environment."""

        return self.environment.strip().lower() == "production"


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings instance."""

    return Settings()


def reset_settings_cache() -> None:
    """Clear the settings cache to force reloading from the environment."""

    get_settings.cache_clear()


__all__ = ["Settings", "get_settings", "reset_settings_cache"]
