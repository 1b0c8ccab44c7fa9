"""Remaining time domain model."""

from dataclasses import dataclass
from datetime import timedelta
from typing import Literal

RemainingUnit = Literal["now", "minute", "hour"]


@dataclass(frozen=True)
class RemainingTime:
    """Coarse time left until a departure."""

    duration: timedelta
    unit: RemainingUnit
    amount: int
    text: str

    def __str__(self) -> str:
        return self.text
