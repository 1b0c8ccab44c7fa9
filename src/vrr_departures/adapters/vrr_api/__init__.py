"""VRR departure feed adapter."""

from vrr_departures.adapters.vrr_api.feed_parser import FeedParser
from vrr_departures.adapters.vrr_api.vrr_feed_client import VrrFeedClient

__all__ = [
    "FeedParser",
    "VrrFeedClient",
]
