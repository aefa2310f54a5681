from __future__ import annotations

from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppSettings(BaseSettings):
    """
    Application-level settings for the demo runner and the HTTP surface.

    This is separate from src.db.config.Settings, which focuses on the database layer.
    """

    APP_NAME: str = Field(default="Clinic Query API")
    APP_DESCRIPTION: str = Field(
        default=(
            "Read-only query catalogue over pets, owners and veterinarians."
        )
    )
    APP_VERSION: str = Field(default="0.1.0")

    LOG_LEVEL: str = Field(default="INFO", description="Root logging level name.")

    # Startup behavior
    AUTO_SEED: bool = Field(
        default=False,
        description="If true, create the schema and load sample data at app startup.",
    )

    # Environment label
    ENVIRONMENT: Optional[str] = Field(
        default=None, description="Environment label (dev/test/prod)"
    )

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    @field_validator("LOG_LEVEL", mode="before")
    @classmethod
    def _normalize_log_level(cls, v):
        """
        Accept level names in any case; fall back to INFO for blanks.
        """
        if v is None or (isinstance(v, str) and not v.strip()):
            return "INFO"
        return str(v).strip().upper()


# PUBLIC_INTERFACE
def get_app_settings() -> AppSettings:
    """
    Return a new AppSettings instance populated from environment variables.
    """
    return AppSettings()
