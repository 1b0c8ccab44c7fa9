"""Remaining-time computation and filtering of past departures.

The feed ships its own countdown, but the upstream caches it and it drifts
by several minutes, so the remaining time is always recomputed locally
from the scheduled date and time.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from datetime import datetime, timedelta, tzinfo
from zoneinfo import ZoneInfo

from vrr_departures.domain.errors import DepartureTimeParseError
from vrr_departures.domain.models.departure_view import DepartureView
from vrr_departures.domain.models.raw_departure import RawDeparture
from vrr_departures.domain.models.relative_time_labels import RelativeTimeLabels
from vrr_departures.domain.models.remaining_time import RemainingTime

logger = logging.getLogger(__name__)

FEED_DATETIME_FORMAT = "%d-%m-%Y %H:%M"


def parse_departure_instant(scheduled_date: str, scheduled_time: str, tz: tzinfo) -> datetime:
    """Combine a DD-MM-YYYY date and a HH:mm time into an aware local instant.

    Raises:
        DepartureTimeParseError: If either part is malformed or not a string.
    """
    if not isinstance(scheduled_date, str) or not isinstance(scheduled_time, str):
        raise DepartureTimeParseError(scheduled_date, scheduled_time)
    try:
        naive = datetime.strptime(
            f"{scheduled_date.strip()} {scheduled_time.strip()}", FEED_DATETIME_FORMAT
        )
    except ValueError as e:
        raise DepartureTimeParseError(scheduled_date, scheduled_time) from e
    return naive.replace(tzinfo=tz)


class TimeFilterEngine:
    """Computes remaining time and drops departures that already left.

    Every method takes ``now`` explicitly and keeps no state, so results are
    recomputed on each render.
    """

    def __init__(
        self,
        timezone: str | tzinfo = "Europe/Berlin",
        labels: RelativeTimeLabels | None = None,
    ) -> None:
        """Initialize the engine.

        Args:
            timezone: Timezone the feed's scheduled times are expressed in.
            labels: Default labels for remaining-time tokens.
        """
        self.timezone = ZoneInfo(timezone) if isinstance(timezone, str) else timezone
        self.labels = labels or RelativeTimeLabels()

    def departure_instant(self, scheduled_date: str, scheduled_time: str) -> datetime:
        """Return the scheduled instant in the engine's timezone."""
        return parse_departure_instant(scheduled_date, scheduled_time, self.timezone)

    def _align(self, now: datetime, instant: datetime) -> datetime:
        # Naive "now" is taken as wall clock time in the feed's timezone
        if now.tzinfo is None:
            return instant.replace(tzinfo=None)
        return instant

    def is_past(self, now: datetime, scheduled_date: str, scheduled_time: str) -> bool:
        """Check whether a departure lies before ``now``.

        Raises:
            DepartureTimeParseError: If the date/time pair is malformed.
        """
        instant = self._align(now, self.departure_instant(scheduled_date, scheduled_time))
        return instant - now < timedelta(0)

    def remaining(
        self,
        now: datetime,
        scheduled_date: str,
        scheduled_time: str,
        labels: RelativeTimeLabels | None = None,
    ) -> RemainingTime:
        """Return the coarse time left until a departure.

        Raises:
            DepartureTimeParseError: If the date/time pair is malformed.
        """
        instant = self._align(now, self.departure_instant(scheduled_date, scheduled_time))
        return self.describe(instant - now, labels)

    def describe(self, delta: timedelta, labels: RelativeTimeLabels | None = None) -> RemainingTime:
        """Bucket a time span into a now/minute/hour token."""
        labels = labels or self.labels
        if delta < timedelta(0):
            delta = timedelta(0)

        total_seconds = int(delta.total_seconds())
        if total_seconds < 60:
            return RemainingTime(duration=delta, unit="now", amount=0, text=labels.now)

        # Nearest whole minute, halves round up
        total_minutes = (total_seconds + 30) // 60
        if total_minutes < 60:
            unit_label = labels.minute if total_minutes == 1 else labels.minutes
            return RemainingTime(
                duration=delta,
                unit="minute",
                amount=total_minutes,
                text=f"{total_minutes} {unit_label}",
            )

        hours = total_minutes // 60
        if hours == 1:
            return RemainingTime(duration=delta, unit="hour", amount=1, text=f"+1 {labels.hour}")
        return RemainingTime(
            duration=delta, unit="hour", amount=hours, text=f"{hours} {labels.hours}"
        )

    def filter_future(self, now: datetime, records: Iterable[RawDeparture]) -> list[RawDeparture]:
        """Return the records that have not departed yet, in their original order.

        Records with an unparseable date/time are dropped.
        """
        upcoming: list[RawDeparture] = []
        for record in records:
            try:
                if self.is_past(
                    now,
                    getattr(record, "scheduled_date", None),  # type: ignore[arg-type]
                    getattr(record, "scheduled_time", None),  # type: ignore[arg-type]
                ):
                    continue
            except DepartureTimeParseError as e:
                logger.debug(f"Dropping unparseable departure: {e}")
                continue
            upcoming.append(record)
        return upcoming

    def to_views(
        self,
        now: datetime,
        records: Iterable[RawDeparture],
        labels: RelativeTimeLabels | None = None,
    ) -> list[DepartureView]:
        """Filter past departures and attach the remaining time to the rest."""
        views: list[DepartureView] = []
        for record in self.filter_future(now, records):
            instant = self._align(
                now, self.departure_instant(record.scheduled_date, record.scheduled_time)
            )
            views.append(
                DepartureView(
                    departure=record,
                    departs_at=instant,
                    remaining=self.describe(instant - now, labels),
                )
            )
        return views
