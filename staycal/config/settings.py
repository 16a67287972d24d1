"""Application settings and configuration management."""
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class CalendarSettings(BaseSettings):
    """Booking calendar behaviour."""

    min_stay_nights: int = 2
    blocking_statuses: list[str] = ["pending", "confirmed"]
    month_names: list[str] = [
        "January",
        "February",
        "March",
        "April",
        "May",
        "June",
        "July",
        "August",
        "September",
        "October",
        "November",
        "December",
    ]

    # User-facing messages surfaced by the range picker
    conflict_warning: str = (
        "Warning: The selected dates conflict with existing reservations. "
        "Please choose different dates."
    )
    checkout_before_checkin_message: str = "Check-out must be after check-in."

    model_config = SettingsConfigDict(env_prefix="CALENDAR_")


class LoggingSettings(BaseSettings):
    """Logging configuration."""

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    format: Literal["json", "console"] = "console"

    model_config = SettingsConfigDict(env_prefix="LOG_")


class Settings(BaseSettings):
    """Main application settings."""

    environment: Literal["dev", "staging", "prod"] = "dev"
    debug: bool = False

    # Sub-settings
    calendar: CalendarSettings = CalendarSettings()
    logging: LoggingSettings = LoggingSettings()

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
    )

    @property
    def blocking_statuses(self) -> frozenset[str]:
        """Lowercased statuses that occupy the calendar."""
        return frozenset(s.lower() for s in self.calendar.blocking_statuses)


# Global settings instance
settings = Settings()
