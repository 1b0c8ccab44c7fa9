"""Domain layer - core business logic and models."""

from vrr_departures.domain.errors import (
    DepartureTimeParseError,
    FeedError,
    HttpError,
    NetworkError,
    ParseError,
)
from vrr_departures.domain.models import (
    DepartureView,
    FeedSnapshot,
    RawDeparture,
    ScheduleState,
)

__all__ = [
    "DepartureTimeParseError",
    "DepartureView",
    "FeedError",
    "FeedSnapshot",
    "HttpError",
    "NetworkError",
    "ParseError",
    "RawDeparture",
    "ScheduleState",
]
