"""
Application configuration with environment-driven settings.
"""

from functools import lru_cache
import os
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "contact-relay"
    app_env: Literal["dev", "qa", "uat", "prod"] = "dev"
    debug: bool = False
    log_level: str = "INFO"

    # HTTP surface
    contact_path: str = Field(
        default="/api/contact",
        description="Path of the contact-form endpoint",
    )
    cors_allow_origin: str = Field(
        default="*",
        description="Value of Access-Control-Allow-Origin on every response",
    )

    # Standalone server
    host: str = "0.0.0.0"
    port: int = Field(default=8000, ge=1, le=65535)

    @field_validator("contact_path")
    @classmethod
    def validate_contact_path(cls, v: str) -> str:
        """Normalize to a single leading slash and no trailing slash."""
        path = "/" + v.strip().strip("/")
        return path

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        return v.upper()


@lru_cache
def _get_settings_cached() -> Settings:
    return Settings()


def get_settings() -> Settings:
    # Tests patch the environment between cases; never hand them a stale instance.
    if os.environ.get("PYTEST_CURRENT_TEST"):
        return Settings()
    return _get_settings_cached()
