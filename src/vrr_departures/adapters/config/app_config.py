"""12-factor configuration adapter using environment variables and TOML config."""

import tomllib
from pathlib import Path
from typing import Any
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DISPLAY_TIME_OPTIONS = ("countdown", "time", "time+countdown")


class AppConfig(BaseSettings):
    """Application configuration following 12-factor principles."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        validate_assignment=True,
    )

    # Feed routing
    city: str = Field(default="Düsseldorf", description="City the station belongs to")
    station: str = Field(default="Hauptbahnhof", description="Station to show departures for")
    number_of_results: int = Field(
        default=10, description="Maximum number of departures to request and display"
    )
    feed_base_url: str = Field(
        default="https://vrrf.finalrewind.org",
        description="Base URL of the departure feed",
    )
    request_timeout_seconds: float = Field(
        default=10, description="Timeout for feed requests in seconds"
    )

    # Cadence (milliseconds)
    update_interval: int = Field(
        default=60000, description="Interval between display redraws in milliseconds"
    )
    retry_delay: int = Field(
        default=30000, description="Delay before retrying a failed fetch in milliseconds"
    )

    # Display configuration
    timezone: str = Field(
        default="Europe/Berlin",
        description="Timezone of the feed's scheduled times (IANA timezone name)",
    )
    language: str = Field(default="en", description="Language for labels ('en' or 'de')")
    display_time_option: str = Field(
        default="countdown",
        description="Time column: 'countdown', 'time' or 'time+countdown'",
    )
    display_icons: bool = Field(default=True, description="Show transport type icons")
    line_max_length: int = Field(
        default=7, description="Line names longer than this are truncated"
    )

    # TOML config file path, optional
    config_file: str | None = Field(
        default=None,
        description="Path to TOML configuration file with [feed] and [display] sections",
    )

    @field_validator("number_of_results", "line_max_length")
    @classmethod
    def validate_positive(cls, v: int) -> int:
        """Validate counts are positive."""
        if v <= 0:
            raise ValueError("value must be a positive integer")
        return v

    @field_validator("update_interval")
    @classmethod
    def validate_update_interval(cls, v: int) -> int:
        """Validate the refresh interval is positive."""
        if v <= 0:
            raise ValueError("update_interval must be positive")
        return v

    @field_validator("retry_delay")
    @classmethod
    def validate_delay(cls, v: int) -> int:
        """Validate the retry delay is not negative."""
        if v < 0:
            raise ValueError("delay must not be negative")
        return v

    @field_validator("display_time_option")
    @classmethod
    def validate_display_time_option(cls, v: str) -> str:
        """Validate display time option is one of the supported layouts."""
        if v not in DISPLAY_TIME_OPTIONS:
            raise ValueError(
                "display_time_option must be one of 'countdown', 'time' or 'time+countdown'"
            )
        return v

    @field_validator("timezone")
    @classmethod
    def validate_timezone(cls, v: str) -> str:
        """Validate timezone is a known IANA name."""
        try:
            ZoneInfo(v)
        except (ZoneInfoNotFoundError, ValueError) as e:
            raise ValueError(f"Unknown timezone: {v}") from e
        return v

    def load_toml(self) -> dict[str, Any]:
        """Load the TOML file and apply its [feed] and [display] sections.

        Returns the parsed TOML data. Values from the file override
        environment variables and defaults.
        """
        if not self.config_file:
            raise ValueError("config_file must be set to load a TOML configuration")

        config_path = Path(self.config_file)
        if not config_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {config_path}")

        with open(config_path, "rb") as f:
            toml_data = tomllib.load(f)

        feed = toml_data.get("feed", {})
        for key in (
            "city",
            "station",
            "number_of_results",
            "feed_base_url",
            "request_timeout_seconds",
            "update_interval",
            "retry_delay",
        ):
            if key in feed:
                setattr(self, key, feed[key])

        display = toml_data.get("display", {})
        for key in (
            "timezone",
            "language",
            "display_time_option",
            "display_icons",
            "line_max_length",
        ):
            if key in display:
                setattr(self, key, display[key])

        return toml_data

    @property
    def update_interval_seconds(self) -> float:
        """Redraw interval in seconds."""
        return self.update_interval / 1000

    @property
    def retry_delay_seconds(self) -> float:
        """Retry delay in seconds."""
        return self.retry_delay / 1000
