"""In-memory departure board fed by the refresh scheduler."""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING

from vrr_departures.domain.contracts.departure_consumer import DepartureConsumerProtocol

if TYPE_CHECKING:
    from datetime import datetime

    from vrr_departures.application.services.time_filter import TimeFilterEngine
    from vrr_departures.domain.models.departure_view import DepartureView
    from vrr_departures.domain.models.error_details import ErrorDetails
    from vrr_departures.domain.models.feed_snapshot import FeedSnapshot

logger = logging.getLogger(__name__)


class DepartureBoard(DepartureConsumerProtocol):
    """Keeps the latest snapshot and filters it whenever the display asks.

    Views are never cached: each call to ``views`` filters against the
    ``now`` it is given, since a redraw can happen long after the last fetch.
    """

    def __init__(
        self,
        engine: TimeFilterEngine,
        max_departures: int,
        on_change: Callable[[], Awaitable[None]] | None = None,
    ) -> None:
        """Initialize the board.

        Args:
            engine: Engine computing remaining time and dropping past departures.
            max_departures: Maximum number of views returned.
            on_change: Called on the first load and on terminal failures so the
                display can redraw without waiting for its own interval.
        """
        self.engine = engine
        self.max_departures = max_departures
        self.on_change = on_change
        self.snapshot: FeedSnapshot | None = None
        self.error: ErrorDetails | None = None

    @property
    def is_loaded(self) -> bool:
        return self.snapshot is not None

    async def on_snapshot(self, snapshot: FeedSnapshot, is_first_load: bool) -> None:
        """Replace the snapshot; redraw right away only on the first load."""
        self.snapshot = snapshot
        self.error = None
        logger.debug(f"Board received {len(snapshot)} departures (first load: {is_first_load})")
        if is_first_load and self.on_change is not None:
            await self.on_change()

    async def on_terminal_failure(self, error: ErrorDetails) -> None:
        """Keep the current snapshot, remember the error and redraw."""
        self.error = error
        logger.warning(f"Board showing last known departures after: {error.reason}")
        if self.on_change is not None:
            await self.on_change()

    def views(self, now: datetime) -> list[DepartureView]:
        """Return upcoming departures as of ``now``, capped at ``max_departures``."""
        if self.snapshot is None:
            return []
        return self.engine.to_views(now, self.snapshot.departures)[: self.max_departures]
