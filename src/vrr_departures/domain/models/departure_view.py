"""Departure view domain model."""

from dataclasses import dataclass
from datetime import datetime

from vrr_departures.domain.models.raw_departure import RawDeparture
from vrr_departures.domain.models.remaining_time import RemainingTime


@dataclass(frozen=True)
class DepartureView:
    """A raw departure with its departure instant and remaining time at one point in time."""

    departure: RawDeparture
    departs_at: datetime
    remaining: RemainingTime

    @property
    def line(self) -> str:
        return self.departure.line

    @property
    def destination(self) -> str:
        return self.departure.destination
