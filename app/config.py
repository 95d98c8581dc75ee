# app/config.py
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    ENV: str = "dev"
    APP_NAME: str = "Tripboard Availability API"

    # DB URL – for now SQLite local
    DATABASE_URL: str = "sqlite:///./app.db"

    LOG_LEVEL: str = "INFO"

    # Bulk range votes and ranking both stop after this many days
    AVAILABILITY_MAX_RANGE_DAYS: int = 90

    # How many "best dates" to return when the caller doesn't ask
    RANKING_TOP_N: int = 3

    # Per-status weights used by the date score
    SCORE_WEIGHT_CAN: int = 3
    SCORE_WEIGHT_MAYBE: int = 1
    SCORE_WEIGHT_CANNOT: int = -2

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

_settings: Optional[Settings] = None

def get_settings() -> Settings:
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings
