"""Protocols the layers depend on."""

from vrr_departures.domain.contracts.departure_consumer import DepartureConsumerProtocol
from vrr_departures.domain.contracts.departure_source import DepartureSourceProtocol
from vrr_departures.domain.contracts.display_adapter import DisplayAdapter
from vrr_departures.domain.contracts.feed_client import FeedClientProtocol
from vrr_departures.domain.contracts.refresh_scheduler import RefreshSchedulerProtocol

__all__ = [
    "DepartureConsumerProtocol",
    "DepartureSourceProtocol",
    "DisplayAdapter",
    "FeedClientProtocol",
    "RefreshSchedulerProtocol",
]
