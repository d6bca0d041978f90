"""Application configuration."""

import os
from pathlib import Path
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict

from water_log.domain.records import DEFAULT_GOAL_ML

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    storage_backend: Literal["file", "supabase", "memory"] = "file"
    data_path: Path = Path("water_log.json")
    supabase_url: str | None = None
    supabase_service_key: str | None = None
    supabase_table: str = "app_storage"
    default_goal_ml: float = DEFAULT_GOAL_ML
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_prefix="WATER_LOG_",
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )
