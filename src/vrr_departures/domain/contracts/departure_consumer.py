"""Protocol for consumers of fetched departures."""

from typing import Protocol

from vrr_departures.domain.models.error_details import ErrorDetails
from vrr_departures.domain.models.feed_snapshot import FeedSnapshot


class DepartureConsumerProtocol(Protocol):
    """Receives the outcome of resolved fetch cycles."""

    async def on_snapshot(self, snapshot: FeedSnapshot, is_first_load: bool) -> None:
        """Handle a freshly fetched snapshot.

        Args:
            snapshot: The new snapshot, replacing any previous one.
            is_first_load: True only for the first successful fetch of a scheduler.
        """
        ...

    async def on_terminal_failure(self, error: ErrorDetails) -> None:
        """Redraw with whatever data exists; no further fetches will follow."""
        ...
