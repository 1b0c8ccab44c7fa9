"""HTTP client for the VRR departure feed.

Uses the vrrf JSON frontend:
GET {base}/{city}/{station}.json?frontend=json&no_lines={n}
"""

import asyncio
import logging
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any
from urllib.parse import quote

import aiohttp

from vrr_departures.adapters.api_request_logger import log_api_request
from vrr_departures.adapters.vrr_api.constants import VRRF_BASE_URL, VRRF_FRONTEND
from vrr_departures.adapters.vrr_api.feed_parser import FeedParser
from vrr_departures.domain.contracts.feed_client import FeedClientProtocol
from vrr_departures.domain.errors import HttpError, NetworkError, ParseError
from vrr_departures.domain.models.feed_snapshot import FeedSnapshot

if TYPE_CHECKING:
    from aiohttp import ClientResponse, ClientSession

logger = logging.getLogger(__name__)


class VrrFeedClient(FeedClientProtocol):
    """Fetches departure snapshots from the vrrf feed."""

    def __init__(
        self,
        session: "ClientSession",
        base_url: str = VRRF_BASE_URL,
        timeout_seconds: float = 10,
    ) -> None:
        """Initialize the client.

        Args:
            session: Shared aiohttp session.
            base_url: Feed base URL without trailing slash.
            timeout_seconds: Total timeout for one request.
        """
        self._session = session
        self.base_url = base_url.rstrip("/")
        self.timeout = aiohttp.ClientTimeout(total=timeout_seconds)

    def build_request(
        self, city: str, station: str, number_of_results: int
    ) -> tuple[str, dict[str, str | int]]:
        """Build URL and query parameters for a station."""
        url = f"{self.base_url}/{quote(city, safe='')}/{quote(station, safe='')}.json"
        params: dict[str, str | int] = {
            "frontend": VRRF_FRONTEND,
            "no_lines": number_of_results,
        }
        return url, params

    async def fetch_snapshot(self, city: str, station: str, number_of_results: int) -> FeedSnapshot:
        """Fetch and parse the feed for a station.

        Raises:
            NetworkError: The request never completed.
            HttpError: The feed answered with a non-200 status.
            ParseError: The body is not a valid feed payload.
        """
        url, params = self.build_request(city, station, number_of_results)
        log_api_request("GET", url, params=params)

        try:
            async with self._session.get(url, params=params, timeout=self.timeout) as response:
                data = await self._read_payload(response, url)
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            logger.warning(f"Request to {url} failed: {e!r}")
            raise NetworkError(f"Request to {url} failed: {e!r}") from e

        snapshot = FeedParser.parse_snapshot(data, fetched_at=datetime.now(UTC))
        if snapshot.feed_error:
            logger.warning(f"Feed reported an error for {city}/{station}: {snapshot.feed_error}")
        logger.debug(f"Fetched {len(snapshot)} departures for {city}/{station}")
        return snapshot

    async def _read_payload(self, response: "ClientResponse", url: str) -> Any:
        """Return the decoded JSON body of a 200 response."""
        if response.status != 200:
            error_text = await response.text(errors="replace")
            error_body = error_text[:500] if error_text else "(empty response body)"
            logger.error(f"Feed returned status {response.status} for {url}: {error_body}")
            raise HttpError(response.status, error_body)

        try:
            # The feed does not always label its body as application/json
            return await response.json(content_type=None)
        except ValueError as e:
            raise ParseError(f"Feed body from {url} is not valid JSON: {e}") from e
