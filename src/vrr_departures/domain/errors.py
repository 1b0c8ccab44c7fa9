"""Errors raised while fetching and interpreting the departure feed."""


class FeedError(Exception):
    """Base class for all feed errors."""


class NetworkError(FeedError):
    """The request never completed (connection refused, DNS failure, timeout)."""


class HttpError(FeedError):
    """The feed answered with a non-200 status."""

    def __init__(self, status: int, body: str = "") -> None:
        super().__init__(f"Feed returned HTTP {status}")
        self.status = status
        self.body = body

    @property
    def is_unauthorized(self) -> bool:
        """Whether retrying cannot help without a configuration change."""
        return self.status == 401


class ParseError(FeedError):
    """The payload or a part of it could not be interpreted."""


class DepartureTimeParseError(ParseError):
    """A single record's scheduled date/time pair is malformed."""

    def __init__(self, scheduled_date: object, scheduled_time: object) -> None:
        super().__init__(
            f"Cannot parse departure time from date={scheduled_date!r} time={scheduled_time!r}"
        )
        self.scheduled_date = scheduled_date
        self.scheduled_time = scheduled_time
