"""Application configuration settings."""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

ENV_FILE = ".env"
ENV_FILE_ENCODING = "utf-8"


class Settings(BaseSettings):
    """Relay configuration values loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=ENV_FILE, env_file_encoding=ENV_FILE_ENCODING, extra="ignore"
    )

    database_url: str = Field(
        default="sqlite:///./relay.db",
        description="Database connection URL used by SQLAlchemy",
        min_length=1,
    )
    secret_key: str = Field(
        description="Secret key used to verify JWT credentials", min_length=1
    )
    jwt_algorithm: str = Field(default="HS256", description="JWT signing algorithm")
    access_token_expire_minutes: int = Field(
        default=60,
        description="Lifetime of tokens issued by the development token script",
        gt=0,
    )
    auth_cookie_name: str = Field(
        default="auth_token",
        description="Cookie inspected first when authenticating a connection",
        min_length=1,
    )
    auth_error_grace_seconds: float = Field(
        default=0.1,
        description="Delay between an auth_error frame and the forced disconnect",
        ge=0,
    )
    allowed_origins: str = Field(
        default="*",
        description="Comma separated list of CORS origins, or '*' for any origin",
    )
    dedup_ledger_capacity: int = Field(
        default=1000,
        description="High-water mark of the delivered notification ledger",
        gt=0,
    )
    dedup_ledger_eviction: int = Field(
        default=100,
        description="Entries evicted in one pass once the ledger exceeds its capacity",
        gt=0,
    )
    fcm_project_id: str | None = Field(
        default=None,
        description="Firebase project receiving push messages (defaults to the service account project)",
    )
    fcm_service_account_json: str | None = Field(
        default=None,
        description="Firebase service account credentials as raw JSON",
    )
    fcm_service_account_b64: str | None = Field(
        default=None,
        description="Firebase service account credentials as base64 encoded JSON",
    )
    shutdown_drain_seconds: float = Field(
        default=5.0,
        description="Time allowed for background relay work to finish on shutdown",
        ge=0,
    )
    log_level: str = Field(default="INFO", description="Root logging level")

    @model_validator(mode="after")
    def _validate_ledger_bounds(self) -> "Settings":
        if self.dedup_ledger_eviction > self.dedup_ledger_capacity:
            raise ValueError(
                "DEDUP_LEDGER_EVICTION must not exceed DEDUP_LEDGER_CAPACITY"
            )
        return self

    @property
    def cors_origins(self) -> list[str]:
        """Return the configured CORS origins as a list."""

        raw = self.allowed_origins.strip()
        if not raw or raw == "*":
            return ["*"]
        return [origin.strip() for origin in raw.split(",") if origin.strip()]

    @property
    def push_enabled(self) -> bool:
        return bool(self.fcm_service_account_json or self.fcm_service_account_b64)


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings instance."""

    return Settings()


def reset_settings_cache() -> None:
    """Clear the settings cache to force reloading from the environment."""

    get_settings.cache_clear()


__all__ = ["Settings", "get_settings", "reset_settings_cache"]
