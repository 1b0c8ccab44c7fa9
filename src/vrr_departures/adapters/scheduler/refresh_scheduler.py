"""Refresh scheduler driving the fetch/parse/retry loop."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING, Any

from vrr_departures.domain.contracts.refresh_scheduler import RefreshSchedulerProtocol
from vrr_departures.domain.errors import FeedError, HttpError, NetworkError, ParseError
from vrr_departures.domain.models.error_details import ErrorDetails
from vrr_departures.domain.models.schedule_state import ScheduleState, SchedulerPhase

if TYPE_CHECKING:
    from vrr_departures.adapters.config.app_config import AppConfig
    from vrr_departures.domain.contracts.departure_consumer import DepartureConsumerProtocol
    from vrr_departures.domain.contracts.feed_client import FeedClientProtocol
    from vrr_departures.domain.models.feed_snapshot import FeedSnapshot

logger = logging.getLogger(__name__)

# Delay sentinel: fetch again right away. Distinct from None, which means
# "use the configured update interval".
IMMEDIATE = -1


def describe_error(error: Exception) -> ErrorDetails:
    """Extract HTTP status code and error reason from a fetch error."""
    if isinstance(error, HttpError):
        status_code = error.status
        if status_code == 401:
            reason = "Unauthorized"
        elif status_code == 429:
            reason = "Rate limit exceeded"
        elif status_code == 502:
            reason = "Bad gateway (server error)"
        elif status_code == 503:
            reason = "Service unavailable"
        elif status_code == 504:
            reason = "Gateway timeout"
        else:
            reason = f"HTTP {status_code}"
        return ErrorDetails(status_code=status_code, reason=reason)
    if isinstance(error, NetworkError):
        return ErrorDetails(reason="Network error")
    if isinstance(error, ParseError):
        return ErrorDetails(reason="Invalid feed payload")
    return ErrorDetails(reason="Unknown error")


class RefreshScheduler(RefreshSchedulerProtocol):
    """Fetches the feed in a loop and hands each snapshot to a consumer.

    One cycle moves IDLE -> FETCHING -> SUCCESS / TRANSIENT_FAILURE /
    TERMINAL_FAILURE. Success arms the next fetch immediately, transient
    failures after ``retry_delay``, and a terminal failure (HTTP 401) stops
    the loop for good. At most one fetch is in flight at any time.
    """

    def __init__(
        self,
        feed_client: FeedClientProtocol,
        consumer: DepartureConsumerProtocol,
        config: AppConfig,
    ) -> None:
        """Initialize the scheduler.

        Args:
            feed_client: Client used for every fetch.
            consumer: Receives snapshots and terminal failures.
            config: Feed routing and retry delay.
        """
        self.feed_client = feed_client
        self.consumer = consumer
        self.config = config
        self.state = ScheduleState()
        self.snapshot: FeedSnapshot | None = None
        self.last_error: ErrorDetails | None = None
        self._cycle_task: asyncio.Task | None = None
        self._started = False

    async def start(self) -> None:
        """Arm the first fetch with no delay."""
        if self._started:
            logger.warning("Refresh scheduler already started")
            return
        self._started = True
        logger.info(
            f"Refresh scheduler started for {self.config.city}/{self.config.station} "
            f"(retry delay {self.config.retry_delay}ms)"
        )
        self.schedule_update(IMMEDIATE)

    async def stop(self) -> None:
        """Cancel the pending timer.

        A fetch already in flight is left to finish; its result is discarded.
        """
        self.state.stopped = True
        self._cancel_timer()
        logger.info("Stopped refresh scheduler")

    def resolve_delay(self, delay: int | None) -> int:
        """Translate a requested delay into milliseconds.

        ``None`` selects the configured update interval, ``IMMEDIATE`` zero.
        """
        if delay is None:
            return self.config.update_interval
        if delay == IMMEDIATE:
            return 0
        if delay < 0:
            raise ValueError(f"Invalid delay {delay}ms")
        return delay

    def schedule_update(self, delay: int | None = None) -> None:
        """Arm the timer for the next fetch.

        Args:
            delay: Milliseconds before the next fetch, ``IMMEDIATE``, or None
                for the configured update interval.
        """
        if self.state.stopped:
            logger.debug("Scheduler stopped, not arming another fetch")
            return
        if self.state.phase is SchedulerPhase.TERMINAL_FAILURE:
            logger.warning("Scheduler hit a terminal failure, not arming another fetch")
            return

        next_load = self.resolve_delay(delay)
        self._cancel_timer()
        loop = asyncio.get_running_loop()
        self.state.pending_timer = loop.call_later(next_load / 1000, self._on_timer)
        self.state.next_delay_ms = next_load
        logger.debug(f"Next fetch in {next_load}ms")

    def _cancel_timer(self) -> None:
        if self.state.pending_timer is not None:
            self.state.pending_timer.cancel()
            self.state.pending_timer = None

    def _on_timer(self) -> None:
        self.state.pending_timer = None
        if self.state.stopped:
            return
        self._cycle_task = asyncio.create_task(self.run_cycle())

    async def run_cycle(self) -> SchedulerPhase | None:
        """Run one fetch cycle and arm the next one.

        Returns:
            The phase the cycle resolved to, or None if the cycle was refused
            or its result discarded after ``stop()``.
        """
        if self.state.phase is SchedulerPhase.FETCHING:
            logger.warning("Fetch already in flight, not starting another")
            return None
        if self.state.phase is SchedulerPhase.TERMINAL_FAILURE:
            logger.warning("Scheduler hit a terminal failure, not fetching")
            return None

        self.state.phase = SchedulerPhase.FETCHING
        snapshot: FeedSnapshot | None = None
        error: Exception | None = None
        try:
            snapshot = await self.feed_client.fetch_snapshot(
                self.config.city, self.config.station, self.config.number_of_results
            )
        except FeedError as e:
            error = e
        except Exception as e:
            logger.exception("Unexpected error while fetching departures")
            error = e

        if self.state.stopped:
            logger.debug("Scheduler stopped while fetching, discarding result")
            self.state.phase = SchedulerPhase.IDLE
            return None

        if error is None and snapshot is not None:
            return await self._handle_success(snapshot)
        if isinstance(error, HttpError) and error.is_unauthorized:
            return await self._handle_terminal_failure(error)
        return self._handle_transient_failure(error)

    async def _handle_success(self, snapshot: FeedSnapshot) -> SchedulerPhase:
        self.state.phase = SchedulerPhase.SUCCESS
        self.snapshot = snapshot
        self.last_error = None
        is_first_load = not self.state.has_loaded_once
        self.state.has_loaded_once = True
        if is_first_load:
            logger.info(f"First departures loaded ({len(snapshot)} records)")

        await self._notify(self.consumer.on_snapshot, snapshot, is_first_load)

        self.state.phase = SchedulerPhase.IDLE
        self.schedule_update(IMMEDIATE)
        return SchedulerPhase.SUCCESS

    def _handle_transient_failure(self, error: Exception) -> SchedulerPhase:
        self.state.phase = SchedulerPhase.TRANSIENT_FAILURE
        details = describe_error(error)
        self.last_error = details
        logger.error(
            f"Could not load departures: {details.reason} "
            f"(status: {details.status_code}, error: {error}), "
            f"retrying in {self.config.retry_delay}ms"
        )

        self.state.phase = SchedulerPhase.IDLE
        self.schedule_update(self.config.retry_delay)
        return SchedulerPhase.TRANSIENT_FAILURE

    async def _handle_terminal_failure(self, error: HttpError) -> SchedulerPhase:
        self.state.phase = SchedulerPhase.TERMINAL_FAILURE
        self._cancel_timer()
        details = describe_error(error)
        self.last_error = details
        logger.error(
            f"Feed rejected the request with status {error.status}, "
            "stopping until the configuration is changed"
        )

        await self._notify(self.consumer.on_terminal_failure, details)
        return SchedulerPhase.TERMINAL_FAILURE

    async def _notify(self, callback: Callable[..., Awaitable[None]], *args: Any) -> None:
        """Deliver a notification without letting consumer errors stop the loop."""
        try:
            await callback(*args)
        except Exception:
            logger.exception("Departure consumer failed to handle notification")
