"""Domain models for VRR departures."""

from vrr_departures.domain.models.board_row import BoardRow
from vrr_departures.domain.models.departure_view import DepartureView
from vrr_departures.domain.models.error_details import ErrorDetails
from vrr_departures.domain.models.feed_snapshot import FeedSnapshot
from vrr_departures.domain.models.raw_departure import RawDeparture
from vrr_departures.domain.models.relative_time_labels import RelativeTimeLabels
from vrr_departures.domain.models.remaining_time import RemainingTime
from vrr_departures.domain.models.schedule_state import ScheduleState, SchedulerPhase

__all__ = [
    "BoardRow",
    "DepartureView",
    "ErrorDetails",
    "FeedSnapshot",
    "RawDeparture",
    "RelativeTimeLabels",
    "RemainingTime",
    "ScheduleState",
    "SchedulerPhase",
]
