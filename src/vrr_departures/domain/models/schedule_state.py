"""Refresh scheduler state."""

import asyncio
from dataclasses import dataclass
from enum import Enum


class SchedulerPhase(Enum):
    """Phases of one fetch cycle."""

    IDLE = "idle"
    FETCHING = "fetching"
    SUCCESS = "success"
    TRANSIENT_FAILURE = "transient_failure"
    TERMINAL_FAILURE = "terminal_failure"


@dataclass
class ScheduleState:
    """State owned by exactly one RefreshScheduler instance."""

    has_loaded_once: bool = False
    pending_timer: asyncio.TimerHandle | None = None
    phase: SchedulerPhase = SchedulerPhase.IDLE
    next_delay_ms: int | None = None  # Delay of the most recently armed timer
    stopped: bool = False
