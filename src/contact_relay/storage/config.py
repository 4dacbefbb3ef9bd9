"""
Record store configuration.
"""

from enum import Enum

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class StoreType(str, Enum):
    """Supported record store backends."""

    NONE = "none"
    MEMORY = "memory"
    REDIS = "redis"
    DYNAMODB = "dynamodb"


class StoreConfig(BaseSettings):
    """Record store configuration from environment."""

    model_config = SettingsConfigDict(
        env_prefix="STORE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    type: StoreType = Field(default=StoreType.NONE)

    redis_url: str = Field(default="redis://localhost:6379/0")
    key_prefix: str = Field(default="", description="Prepended to every stored key")

    dynamodb_table: str = Field(default="ContactFormSubmissions")
    aws_region: str = Field(default="eu-central-1")

    timeout_seconds: float = Field(default=5.0, ge=1, le=60)

    @property
    def enabled(self) -> bool:
        return self.type != StoreType.NONE


def get_store_config() -> StoreConfig:
    return StoreConfig()
