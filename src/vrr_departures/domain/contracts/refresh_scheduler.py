"""Protocol for the refresh scheduler."""

from typing import Protocol


class RefreshSchedulerProtocol(Protocol):
    """Protocol for driving the fetch/retry loop."""

    async def start(self) -> None:
        """Start fetching."""
        ...

    async def stop(self) -> None:
        """Stop fetching and cancel any pending timer."""
        ...
