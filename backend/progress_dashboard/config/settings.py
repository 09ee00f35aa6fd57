"""
Application Configuration

Engine constants, stats-source connection and app options, read from the
environment (or a .env file) and validated on startup. Optional overrides
for the aggregation engine live in config/default.yaml.

Usage:
    from progress_dashboard.config import settings

    # Catalog sizes and the stats source
    denominator = settings.TERM_DENOMINATOR
    base_url = settings.STATS_API_BASE_URL
"""

from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml
from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Application
    APP_NAME: str = "Learning Progress"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"
    CORS_ORIGINS: list[str] = ["*"]

    # Catalog sizes used as fixed denominators for daily percentages.
    # These are NOT derived from the data: a day's count is measured against
    # the whole catalog, so 5 items read out of 3 available is 167%.
    INFO_DENOMINATOR: int = Field(3, gt=0)
    TERM_DENOMINATOR: int = Field(60, gt=0)

    # Trailing window (days) for the weekly-achievement averages
    ROLLING_WINDOW_DAYS: int = Field(7, gt=0)

    # Preset period lengths (inclusive day counts ending today)
    WEEK_PERIOD_DAYS: int = Field(7, gt=0)
    MONTH_PERIOD_DAYS: int = Field(30, gt=0)

    # Remote stats source
    STATS_API_BASE_URL: str = "http://localhost:8000"
    STATS_API_TIMEOUT: float = 10.0
    STATS_API_MAX_RETRIES: int = Field(3, ge=1)

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


settings = get_settings()


@lru_cache()
def load_yaml_config() -> dict[str, Any]:
    """Load application configuration from config/default.yaml."""
    config_path = Path(__file__).parent.parent.parent.parent / "config" / "default.yaml"

    if not config_path.exists():
        return {}

    with open(config_path) as f:
        return yaml.safe_load(f) or {}


yaml_config: dict[str, Any] = load_yaml_config()
