"""Display adapter contract."""

from abc import ABC, abstractmethod


class DisplayAdapter(ABC):
    """Port for showing departures to users."""

    @abstractmethod
    async def render(self) -> None:
        """Redraw the departures now."""
        ...

    @abstractmethod
    async def start(self) -> None:
        """Start the display's own redraw cadence."""
        ...

    @abstractmethod
    async def stop(self) -> None:
        """Stop redrawing."""
        ...
