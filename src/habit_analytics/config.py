"""Configuration settings for the habit analytics engine."""

from functools import lru_cache
from pathlib import Path
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Engine settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="HABIT_ANALYTICS_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Calendar
    timezone: Optional[str] = None  # IANA name, None = system local time
    first_weekday: int = Field(default=2, ge=1, le=7)  # Sunday=1, Monday=2

    # Result sizes
    insight_limit: int = Field(default=15, gt=0)
    suggestion_limit: int = Field(default=10, gt=0)

    # Analysis windows (days, ending today inclusive)
    pattern_window_days: int = Field(default=30, gt=0)
    adaptive_window_days: int = Field(default=7, gt=0)
    combination_window_days: int = Field(default=30, gt=0)
    combination_threshold: float = Field(default=0.5, ge=0.0, le=1.0)

    # Persistence for dismissed suggestions (None = in-memory)
    store_path: Optional[Path] = None

    log_level: str = "WARNING"

    @field_validator("timezone")
    @classmethod
    def validate_timezone(cls, v: Optional[str]) -> Optional[str]:
        if v is None or v == "":
            return None
        try:
            ZoneInfo(v)
        except (ZoneInfoNotFoundError, ValueError) as e:
            raise ValueError(f"Unknown time zone: {v}") from e
        return v

    @property
    def tzinfo(self) -> Optional[ZoneInfo]:
        """Resolved time zone, or None for system local time."""
        return ZoneInfo(self.timezone) if self.timezone else None


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
