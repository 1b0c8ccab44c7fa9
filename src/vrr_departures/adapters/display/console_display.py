"""Console display redrawing the departure board on its own interval."""

from __future__ import annotations

import asyncio
import logging
import sys
from collections.abc import Callable
from datetime import UTC, datetime
from typing import TYPE_CHECKING, TextIO

from vrr_departures.domain.contracts.display_adapter import DisplayAdapter

if TYPE_CHECKING:
    from vrr_departures.adapters.config.app_config import AppConfig
    from vrr_departures.adapters.display.row_formatter import RowFormatter
    from vrr_departures.domain.contracts.departure_source import DepartureSourceProtocol
    from vrr_departures.domain.models.board_row import BoardRow

logger = logging.getLogger(__name__)

HEADERS = {
    "en": ("Line", "Destination", "Departure"),
    "de": ("Linie", "Ziel", "Abfahrt"),
}


def _utc_now() -> datetime:
    return datetime.now(UTC)


class ConsoleDisplay(DisplayAdapter):
    """Prints the departure board as a plain text table."""

    def __init__(
        self,
        source: DepartureSourceProtocol,
        formatter: RowFormatter,
        config: AppConfig,
        stream: TextIO | None = None,
        clock: Callable[[], datetime] = _utc_now,
    ) -> None:
        """Initialize the display.

        Args:
            source: Board providing render-time departures.
            formatter: Formatter for board rows.
            config: Redraw interval and language.
            stream: Output stream, stdout if not given.
            clock: Returns the current instant for each redraw.
        """
        self.source = source
        self.formatter = formatter
        self.config = config
        self.stream = stream or sys.stdout
        self.clock = clock
        self._task: asyncio.Task | None = None

    def _headers(self) -> tuple[str, str, str]:
        return HEADERS.get(self.config.language.lower()[:2], HEADERS["en"])

    def render_text(self, rows: list[BoardRow]) -> str:
        """Lay out rows as a fixed-width table."""
        line_header, destination_header, departure_header = self._headers()
        table = [(line_header, destination_header, departure_header)]
        for row in rows:
            line = f"{row.icon} {row.line}" if row.icon else row.line
            table.append((line, row.destination, row.time_value))

        widths = [max(len(cells[i]) for cells in table) for i in range(3)]
        lines = [
            "  ".join(cell.ljust(widths[i]) for i, cell in enumerate(cells)).rstrip()
            for cells in table
        ]
        lines.insert(1, "-" * len(lines[0]))

        error = self.source.error
        if error is not None:
            lines.append(f"! {error.reason}")
        return "\n".join(lines)

    async def render(self) -> None:
        """Redraw the board as of now."""
        if not self.source.is_loaded and self.source.error is None:
            logger.debug("No departures loaded yet, skipping redraw")
            return
        rows = self.formatter.format_rows(self.source.views(self.clock()))
        self.stream.write(self.render_text(rows) + "\n\n")
        self.stream.flush()

    async def start(self) -> None:
        """Start the redraw loop."""
        if self._task is not None and not self._task.done():
            logger.warning("Console display already running")
            return
        self._task = asyncio.create_task(self._render_loop())
        logger.info(f"Console display redrawing every {self.config.update_interval}ms")

    async def stop(self) -> None:
        """Stop the redraw loop."""
        if self._task and not self._task.done():
            self._task.cancel()
            try:
                await self._task
            except asyncio.CancelledError:
                logger.info("Console display cancelled")
            logger.info("Stopped console display")

    async def _render_loop(self) -> None:
        while True:
            await asyncio.sleep(self.config.update_interval_seconds)
            try:
                await self.render()
            except Exception:
                logger.exception("Failed to redraw departures")
