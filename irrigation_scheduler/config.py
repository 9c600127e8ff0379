"""
Configuration settings for the irrigation scheduler.

Uses Pydantic Settings to load environment variables for capacity limits,
resource defaults, logging, and result persistence.
"""
from __future__ import annotations

from functools import lru_cache
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Application
    app_env: str = Field("development", alias="APP_ENV")
    log_level: str = Field("INFO", alias="LOG_LEVEL")
    log_json: bool = Field(False, alias="LOG_JSON")

    # Capacity limits
    max_fields: int = Field(10, alias="SCHEDULER_MAX_FIELDS")
    max_total_water: int = Field(100_000, alias="SCHEDULER_MAX_TOTAL_WATER")
    max_name_length: int = Field(99, alias="SCHEDULER_MAX_NAME_LENGTH")

    # Substituted when the request does not activate time constraints
    default_delivery_rate: int = Field(50, alias="SCHEDULER_DEFAULT_DELIVERY_RATE")
    default_total_electricity: int = Field(1000, alias="SCHEDULER_DEFAULT_TOTAL_ELECTRICITY")

    # Runs
    default_strategy: str = Field("auto", alias="SCHEDULER_DEFAULT_STRATEGY")
    results_dir: str = Field("results", alias="SCHEDULER_RESULTS_DIR")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Retrieve a cached instance of Settings to avoid repeated env parsing.
    """
    return Settings()


__all__ = ["Settings", "get_settings"]
