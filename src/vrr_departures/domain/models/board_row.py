"""Board row domain model."""

from dataclasses import dataclass


@dataclass(frozen=True)
class BoardRow:
    """One display-ready row of the departure board."""

    line: str
    destination: str
    time_value: str
    icon: str | None
    transport_type: str
