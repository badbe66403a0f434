"""Application configuration loaded from environment variables."""

from functools import lru_cache
from typing import Literal

from pydantic import SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Allowed URL schemes for DATABASE_URL (module-level so validators can use it).
VALID_DATABASE_URL_PREFIXES = (
    "sqlite://",
    "postgresql://",
    "postgresql+psycopg2://",
    "postgres://",
    "postgres+psycopg2://",
)


class Settings(BaseSettings):
    """Validated application settings from env and optional .env file."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    APP_ENV: Literal["dev", "prod"] = "dev"
    DEBUG: bool = False
    LOG_LEVEL: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"

    # SQLite for local dev; Postgres in production
    DATABASE_URL: str = "sqlite:///./orderdesk.db"

    # Signed-cookie session (holds the account id only)
    SESSION_SECRET: SecretStr = SecretStr("change-me-in-production")
    SESSION_COOKIE_NAME: str = "orderdesk_session"
    SESSION_MAX_AGE_SECONDS: int = 8 * 60 * 60
    SESSION_HTTPS_ONLY: bool = False

    # Bcrypt cost (rounds); 12 is a good default for security vs speed.
    BCRYPT_ROUNDS: int = 12

    # Where a successful login lands
    DEFAULT_LANDING_PATH: str = "/orders"

    @field_validator("DATABASE_URL")
    @classmethod
    def validate_database_url(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("DATABASE_URL must be set and non-empty")
        if not any(v.startswith(prefix) for prefix in VALID_DATABASE_URL_PREFIXES):
            raise ValueError(
                "DATABASE_URL must be a SQLite or PostgreSQL URL (e.g. sqlite:/// or postgresql://)"
            )
        return v.strip()

    @field_validator("SESSION_SECRET")
    @classmethod
    def validate_session_secret(cls, v: SecretStr) -> SecretStr:
        if not v.get_secret_value() or not v.get_secret_value().strip():
            raise ValueError("SESSION_SECRET must be set and non-empty")
        return v

    @field_validator("SESSION_COOKIE_NAME")
    @classmethod
    def validate_session_cookie_name(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("SESSION_COOKIE_NAME must be set and non-empty")
        return v.strip()

    @field_validator("SESSION_MAX_AGE_SECONDS")
    @classmethod
    def validate_session_max_age(cls, v: int) -> int:
        if v < 60 or v > 604800:
            raise ValueError(
                "SESSION_MAX_AGE_SECONDS must be between 60 and 604800 (1 min to 7 days)"
            )
        return v

    @field_validator("BCRYPT_ROUNDS")
    @classmethod
    def validate_bcrypt_rounds(cls, v: int) -> int:
        if v < 4 or v > 31:
            raise ValueError("BCRYPT_ROUNDS must be between 4 and 31")
        return v

    @field_validator("DEFAULT_LANDING_PATH")
    @classmethod
    def validate_default_landing_path(cls, v: str) -> str:
        s = v.strip()
        if not s.startswith("/") or s.startswith("//"):
            raise ValueError("DEFAULT_LANDING_PATH must be a local path (e.g. /orders)")
        return s


@lru_cache
def get_settings() -> Settings:
    """Return cached settings instance (safe to call from dependencies)."""
    return Settings()


settings = get_settings()
