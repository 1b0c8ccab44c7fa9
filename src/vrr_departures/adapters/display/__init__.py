"""Display adapters."""

from vrr_departures.adapters.display.console_display import ConsoleDisplay
from vrr_departures.adapters.display.row_formatter import RowFormatter

__all__ = ["ConsoleDisplay", "RowFormatter"]
