"""Raw departure domain model."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class RawDeparture(BaseModel):
    """A single upcoming departure exactly as the feed reports it.

    Date and time stay unparsed strings: a malformed pair must only exclude
    this record when it is filtered, never reject the whole payload.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    line: str
    destination: str
    transport_type: str = Field(default="", alias="type")
    scheduled_date: str = Field(alias="sched_date")  # DD-MM-YYYY
    scheduled_time: str = Field(alias="sched_time")  # HH:mm
    platform: str | None = None
    # Countdown claimed by the feed. Lags behind by several minutes, display code ignores it.
    countdown: int | None = None
    delay: int | None = None
    is_cancelled: bool = False

    @field_validator("line", "destination", "platform", mode="before")
    @classmethod
    def coerce_number_to_text(cls, v: Any) -> Any:
        """Accept numeric line numbers and platforms."""
        if isinstance(v, int | float) and not isinstance(v, bool):
            return str(v)
        return v

    @field_validator("countdown", "delay", mode="before")
    @classmethod
    def blank_to_none(cls, v: Any) -> Any:
        """Treat blank or non-numeric optional counters as missing."""
        if isinstance(v, int) and not isinstance(v, bool):
            return v
        if isinstance(v, str):
            try:
                return int(v.strip())
            except ValueError:
                return None
        return None

    @field_validator("is_cancelled", mode="before")
    @classmethod
    def coerce_cancelled(cls, v: Any) -> bool:
        """The feed reports cancellation as 0/1, a boolean or an empty string."""
        if isinstance(v, str):
            return v.strip().lower() in ("1", "true", "yes")
        return bool(v)
