"""Runtime settings read from SCHEDULER_* environment variables or a .env file.

The engine never reads these itself; the command line passes them in.
"""

from functools import lru_cache
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

LOG_LEVELS = ("TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL")


class Settings(BaseSettings):
    """Defaults for slot synthesis, conflict reporting, calendar export and logging."""

    slot_stride_minutes: int = Field(default=15, validation_alias="SCHEDULER_SLOT_STRIDE_MINUTES")
    supported_durations: list[int] = Field(
        default_factory=lambda: [30, 45, 60],
        validation_alias="SCHEDULER_SUPPORTED_DURATIONS",
    )
    # Report overlaps that share no room, supervisor or participant
    report_time_only_overlaps: bool = Field(default=True, validation_alias="SCHEDULER_REPORT_TIME_ONLY_OVERLAPS")
    calendar_timezone: str = Field(default="Asia/Jerusalem", validation_alias="SCHEDULER_CALENDAR_TIMEZONE")
    calendar_name: str = Field(default="Ensemble Schedule", validation_alias="SCHEDULER_CALENDAR_NAME")
    log_level: str = Field(default="INFO", validation_alias="SCHEDULER_LOG_LEVEL")
    log_file: Optional[str] = Field(default=None, validation_alias="SCHEDULER_LOG_FILE")

    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
        populate_by_name=True,
    )

    @field_validator("slot_stride_minutes")
    @classmethod
    def validate_stride(cls, value: int) -> int:
        if value <= 0:
            raise ValueError("SCHEDULER_SLOT_STRIDE_MINUTES must be a positive number of minutes")
        return value

    @field_validator("supported_durations")
    @classmethod
    def validate_durations(cls, value: list[int]) -> list[int]:
        if not value:
            raise ValueError("SCHEDULER_SUPPORTED_DURATIONS must list at least one duration")
        if any(duration <= 0 for duration in value):
            raise ValueError("SCHEDULER_SUPPORTED_DURATIONS must contain positive minutes only")
        return value

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        level = value.upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"SCHEDULER_LOG_LEVEL must be one of {', '.join(LOG_LEVELS)}, got '{value}'")
        return level


@lru_cache
def get_settings() -> Settings:
    """Return the process-wide settings, read once."""
    return Settings()
