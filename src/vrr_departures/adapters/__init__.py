"""Adapters layer - external system integrations."""

from vrr_departures.adapters.config import AppConfig
from vrr_departures.adapters.scheduler import RefreshScheduler
from vrr_departures.adapters.vrr_api import VrrFeedClient

__all__ = [
    "AppConfig",
    "RefreshScheduler",
    "VrrFeedClient",
]
