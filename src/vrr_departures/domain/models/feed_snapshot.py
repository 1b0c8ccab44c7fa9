"""Feed snapshot domain model."""

from dataclasses import dataclass
from datetime import datetime

from vrr_departures.domain.models.raw_departure import RawDeparture


@dataclass(frozen=True)
class FeedSnapshot:
    """Complete result of one successful fetch.

    Replaced wholesale on every successful fetch, never merged.
    """

    departures: tuple[RawDeparture, ...]
    fetched_at: datetime
    version: str | None = None
    feed_error: str | None = None  # Error text the feed reports next to its data

    def __len__(self) -> int:
        return len(self.departures)
