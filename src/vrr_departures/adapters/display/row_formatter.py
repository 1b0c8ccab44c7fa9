"""Formatter turning departure views into board rows."""

from vrr_departures.adapters.config.app_config import AppConfig
from vrr_departures.domain.models.board_row import BoardRow
from vrr_departures.domain.models.departure_view import DepartureView

# Icon names keyed by the feed's transport type; anything else is a bus
ICON_MAP = {
    "S-Bahn": "train",
    "U-Bahn": "subway",
    "InterCityExpress": "train",
    "Straßenbahn": "tram",
    "TaxiBus": "taxi",
}
DEFAULT_ICON = "bus"


class RowFormatter:
    """Formats departure views according to the display configuration."""

    def __init__(self, config: AppConfig) -> None:
        """Initialize the formatter.

        Args:
            config: Configuration with time option, icon and line length settings.
        """
        self.config = config

    def icon_for(self, transport_type: str) -> str:
        """Return the icon name for a transport type."""
        return ICON_MAP.get(transport_type, DEFAULT_ICON)

    def shorten_line(self, line: str) -> str:
        """Cut long line names such as 'InterCityExpress'."""
        return line[: self.config.line_max_length]

    def format_time(self, view: DepartureView) -> str:
        """Format the time column."""
        scheduled_time = view.departure.scheduled_time
        if self.config.display_time_option == "time+countdown":
            return f"{scheduled_time} ({view.remaining.text})"
        if self.config.display_time_option == "time":
            return scheduled_time
        return view.remaining.text

    def format_row(self, view: DepartureView) -> BoardRow:
        """Format a single departure view."""
        return BoardRow(
            line=self.shorten_line(view.line),
            destination=view.destination,
            time_value=self.format_time(view),
            icon=self.icon_for(view.departure.transport_type) if self.config.display_icons else None,
            transport_type=view.departure.transport_type,
        )

    def format_rows(self, views: list[DepartureView]) -> list[BoardRow]:
        """Format departure views in order."""
        return [self.format_row(view) for view in views]
