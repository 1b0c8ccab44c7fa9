"""Application services."""

from vrr_departures.application.services.departure_board import DepartureBoard
from vrr_departures.application.services.time_filter import (
    TimeFilterEngine,
    parse_departure_instant,
)

__all__ = ["DepartureBoard", "TimeFilterEngine", "parse_departure_instant"]
