"""Application configuration utilities."""

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime configuration loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
    )

    app_name: str = Field(
        default="Dental Center Management",
    )
    app_version: str = Field(
        default="0.1.0",
    )

    redis_url: str = Field(
        default="redis://localhost:6379/0",
    )
    storage_backend: Literal["redis", "memory"] = Field(
        default="redis",
    )
    storage_key_prefix: str = Field(
        default="dental_",
    )
    seed_on_startup: bool = Field(
        default=True,
    )
    log_level: str = Field(
        default="INFO",
    )


@lru_cache()
def get_settings() -> Settings:
    """Return cached settings instance."""

    return Settings()
