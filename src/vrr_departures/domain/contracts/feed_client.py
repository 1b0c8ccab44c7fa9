"""Protocol for fetching the departure feed."""

from typing import Protocol

from vrr_departures.domain.models.feed_snapshot import FeedSnapshot


class FeedClientProtocol(Protocol):
    """Protocol for fetching one snapshot of a station's departures."""

    async def fetch_snapshot(self, city: str, station: str, number_of_results: int) -> FeedSnapshot:
        """Fetch and parse the feed for a station.

        Args:
            city: City the station belongs to.
            station: Station name.
            number_of_results: Maximum number of departures requested.

        Returns:
            The parsed snapshot.

        Raises:
            NetworkError: The request never completed.
            HttpError: The feed answered with a non-200 status.
            ParseError: The body is not a valid feed payload.
        """
        ...
