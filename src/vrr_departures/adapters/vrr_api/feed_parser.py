"""Parser for VRR feed payloads."""

import logging
from datetime import datetime
from typing import Any

from pydantic import ValidationError

from vrr_departures.adapters.vrr_api.constants import VRRF_RECORDS_FIELD
from vrr_departures.domain.errors import ParseError
from vrr_departures.domain.models.feed_snapshot import FeedSnapshot
from vrr_departures.domain.models.raw_departure import RawDeparture

logger = logging.getLogger(__name__)


class FeedParser:
    """Parses decoded feed JSON into FeedSnapshot objects."""

    @staticmethod
    def parse_snapshot(data: Any, fetched_at: datetime) -> FeedSnapshot:
        """Parse a decoded feed payload.

        Args:
            data: Decoded JSON body.
            fetched_at: When the response was received.

        Returns:
            Snapshot with every record that has the required fields.

        Raises:
            ParseError: If the payload lacks an array-valued records field.
        """
        if not isinstance(data, dict):
            raise ParseError(f"Expected a JSON object, got {type(data).__name__}")

        records = data.get(VRRF_RECORDS_FIELD)
        if not isinstance(records, list):
            raise ParseError(f"Feed payload has no '{VRRF_RECORDS_FIELD}' array")

        departures = []
        for index, record in enumerate(records):
            departure = FeedParser._parse_record(record, index)
            if departure is not None:
                departures.append(departure)

        feed_error = data.get("error")
        version = data.get("version")
        return FeedSnapshot(
            departures=tuple(departures),
            fetched_at=fetched_at,
            version=str(version) if version is not None else None,
            feed_error=str(feed_error) if feed_error else None,
        )

    @staticmethod
    def _parse_record(record: Any, index: int) -> RawDeparture | None:
        """Parse one record, returning None if it cannot be used."""
        if not isinstance(record, dict):
            logger.warning(f"Skipping feed record {index}: not an object")
            return None
        try:
            return RawDeparture.model_validate(record)
        except ValidationError as e:
            logger.warning(f"Skipping feed record {index}: {e.error_count()} invalid field(s)")
            return None
