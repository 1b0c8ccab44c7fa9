"""Fetch scheduling adapters."""

from vrr_departures.adapters.scheduler.refresh_scheduler import (
    IMMEDIATE,
    RefreshScheduler,
    describe_error,
)

__all__ = [
    "IMMEDIATE",
    "RefreshScheduler",
    "describe_error",
]
