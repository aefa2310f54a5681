from __future__ import annotations

import re
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


DEFAULT_DATABASE_URL = "sqlite+aiosqlite:///./clinic.db"


class Settings(BaseSettings):
    """
    Database settings for the clinic query layer.

    Reads from environment variables (or .env via pydantic-settings). Either a
    full DATABASE_URL is given, or the POSTGRES_* parts are combined into one.
    With neither, a local SQLite file is used.
    """

    DATABASE_URL: Optional[str] = Field(
        default=None, description="If provided, full SQLAlchemy connection URL."
    )
    POSTGRES_USER: Optional[str] = Field(default=None, description="DB username")
    POSTGRES_PASSWORD: Optional[str] = Field(default=None, description="DB password")
    POSTGRES_DB: Optional[str] = Field(default=None, description="Database name")
    POSTGRES_PORT: Optional[int] = Field(
        default=5432, description="Database port (default 5432)"
    )
    POSTGRES_HOST: Optional[str] = Field(
        default="localhost", description="Database host (default localhost)"
    )

    # SQLAlchemy engine options
    SQL_ECHO: bool = Field(
        default=False, description="Echo SQL statements for debugging (default False)"
    )

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    @property
    def database_url(self) -> str:
        """
        Compute the configured database URL. Prefers DATABASE_URL, then the
        POSTGRES_* parts, then the local SQLite default.
        """
        if self.DATABASE_URL:
            return self.DATABASE_URL

        if not any([self.POSTGRES_USER, self.POSTGRES_PASSWORD, self.POSTGRES_DB]):
            return DEFAULT_DATABASE_URL

        if not all([self.POSTGRES_USER, self.POSTGRES_PASSWORD, self.POSTGRES_DB]):
            raise ValueError(
                "Database configuration incomplete. Ensure POSTGRES_USER, "
                "POSTGRES_PASSWORD, and POSTGRES_DB are all set, or provide DATABASE_URL."
            )
        host = self.POSTGRES_HOST or "localhost"
        port = self.POSTGRES_PORT or 5432
        return f"postgresql://{self.POSTGRES_USER}:{self.POSTGRES_PASSWORD}@{host}:{port}/{self.POSTGRES_DB}"

    @property
    def async_database_url(self) -> str:
        """
        Convert the URL to an async driver URL, required for AsyncEngine.

        PostgreSQL URLs are normalized to asyncpg and SQLite URLs to aiosqlite.
        """
        url = self.database_url
        if url.startswith("postgresql"):
            return re.sub(r"^postgresql(\+\w+)?://", "postgresql+asyncpg://", url)
        if url.startswith("sqlite"):
            return re.sub(r"^sqlite(\+\w+)?://", "sqlite+aiosqlite://", url)
        return url


# PUBLIC_INTERFACE
def get_settings() -> Settings:
    """Return a settings object populated from the environment."""
    return Settings()
