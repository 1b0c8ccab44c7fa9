"""Protocol for reading render-time departures."""

from datetime import datetime
from typing import Protocol

from vrr_departures.domain.models.departure_view import DepartureView
from vrr_departures.domain.models.error_details import ErrorDetails


class DepartureSourceProtocol(Protocol):
    """Provides upcoming departures as of a given instant."""

    error: ErrorDetails | None

    @property
    def is_loaded(self) -> bool:
        """Whether any snapshot has been received yet."""
        ...

    def views(self, now: datetime) -> list[DepartureView]:
        """Return upcoming departures as of ``now``."""
        ...
