"""Settings loaded from environment variables and an optional .env file."""

from functools import lru_cache
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        populate_by_name=True,
        extra="ignore",
    )

    # Logging
    log_level: str = Field(default="INFO", alias="GALLEYOPS_LOG_LEVEL")
    log_format: str = Field(default="console", alias="GALLEYOPS_LOG_FORMAT")

    # Replanning
    reassignment_window_hours: float = Field(
        default=6.0, gt=0, alias="GALLEYOPS_REASSIGNMENT_WINDOW_HOURS"
    )
    airline_codes_path: Optional[str] = Field(
        default=None, alias="GALLEYOPS_AIRLINE_CODES_PATH"
    )
    flights_csv: Optional[str] = Field(default=None, alias="GALLEYOPS_FLIGHTS_CSV")

    # Weather
    openweathermap_api_key: str = Field(default="", alias="OPENWEATHERMAP_API_KEY")
    weather_timeout: int = Field(default=10, alias="GALLEYOPS_WEATHER_TIMEOUT")


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
