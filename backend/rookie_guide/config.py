"""
Environment-backed settings for the Rookie Guide API.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Configuration constructed once at startup and handed to collaborators."""

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    # ---------------------------
    # API / Project
    # ---------------------------
    project_name: str = Field(default="Rookie Guide API", validation_alias="PROJECT_NAME")
    version: str = Field(default="0.1.0", validation_alias="API_VERSION")
    environment: str = Field(default="development", validation_alias="ENVIRONMENT")
    cors_origins: list[str] = Field(
        default=["http://localhost:3000"], validation_alias="CORS_ORIGINS"
    )

    # ---------------------------
    # Database
    # ---------------------------
    database_url: str = Field(
        default="sqlite:///./rookie_guide.db", validation_alias="DATABASE_URL"
    )
    database_pool_size: int = Field(default=5, validation_alias="DATABASE_MAX_CONNECTIONS")
    create_tables_on_startup: bool = Field(
        default=True, validation_alias="CREATE_TABLES_ON_STARTUP"
    )

    # ---------------------------
    # Security / Auth
    # ---------------------------
    secret_key: str = Field(
        default="change-me-in-production", validation_alias="SECRET_KEY"
    )
    algorithm: str = Field(default="HS256", validation_alias="ALGORITHM")
    access_token_expire_seconds: int = Field(
        default=86400, validation_alias="JWT_EXPIRATION"
    )

    # ---------------------------
    # Logging / Observability
    # ---------------------------
    log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")
    sentry_dsn: Optional[str] = Field(default=None, validation_alias="SENTRY_DSN")
    testing: bool = Field(default=False, validation_alias="TESTING")

    @property
    def is_sqlite(self) -> bool:
        return self.database_url.startswith("sqlite")


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return cached settings instance."""
    return Settings()
