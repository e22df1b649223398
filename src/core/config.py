"""Application configuration using pydantic-settings."""
from functools import lru_cache
from typing import Literal

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from sqlalchemy.engine import make_url
from sqlalchemy.exc import ArgumentError


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    # Bearer token every bookmark/list request must present
    api_token: str = ""

    # Development mode - bypasses auth for local development
    dev_mode: bool = False

    # Store backend - "memory" keeps everything in process, "database" uses SQLAlchemy
    store_backend: Literal["memory", "database"] = "memory"

    # Database (only used by the "database" backend)
    database_url: str = ""
    db_pool_size: int = 5
    db_max_overflow: int = 10

    # CORS - comma-separated list of allowed origins (stored as string, parsed via property)
    cors_origins_str: str = Field(
        default="http://localhost:3000",
        validation_alias="CORS_ORIGINS",
    )

    # Field length limits
    max_title_length: int = 500
    max_description_length: int = 2000

    # Server
    log_level: str = "INFO"
    host: str = "127.0.0.1"
    port: int = 8000

    @model_validator(mode="after")
    def validate_database_url(self) -> "Settings":
        """Require a database URL when the database backend is selected."""
        if self.store_backend == "database" and not self.database_url:
            raise ValueError(
                "DATABASE_URL must be set when STORE_BACKEND is 'database'.",
            )
        return self

    @model_validator(mode="after")
    def validate_dev_mode_security(self) -> "Settings":
        """
        Prevent DEV_MODE from being enabled with a production database.

        DEV_MODE completely bypasses authentication, so we must ensure it's only
        used with the in-memory store or a local development database.
        """
        if not self.dev_mode or self.store_backend == "memory":
            return self

        try:
            url = make_url(self.database_url)
        except ArgumentError:
            # If we can't parse the URL, block DEV_MODE (fail-safe)
            url = None

        if url is not None and url.get_backend_name() == "sqlite":
            return self

        hostname = (url.host if url is not None else None) or ""
        local_hosts = {"localhost", "127.0.0.1", "0.0.0.0", "::1"}
        if hostname.lower() not in local_hosts:
            raise ValueError(
                f"DEV_MODE cannot be enabled with a non-local database. "
                f"Database host '{hostname}' appears to be a production database. "
                f"DEV_MODE bypasses all authentication and must only be used locally.",
            )

        return self

    @property
    def cors_origins(self) -> list[str]:
        """Parse comma-separated CORS origins string into a list."""
        if not self.cors_origins_str:
            return []
        return [origin.strip() for origin in self.cors_origins_str.split(",") if origin.strip()]


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
