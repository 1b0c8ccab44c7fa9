"""Main entry point for the VRR departures application."""

import asyncio
import logging
import sys

import aiohttp
from pydantic import ValidationError

from vrr_departures.adapters.config import AppConfig
from vrr_departures.adapters.display import ConsoleDisplay, RowFormatter
from vrr_departures.adapters.scheduler import RefreshScheduler
from vrr_departures.adapters.vrr_api import VrrFeedClient
from vrr_departures.application.services import DepartureBoard, TimeFilterEngine
from vrr_departures.domain.models import RelativeTimeLabels

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
    stream=sys.stderr,
)

logger = logging.getLogger(__name__)


def load_config() -> AppConfig:
    """Load configuration from the environment and the optional TOML file."""
    config = AppConfig()
    if config.config_file:
        config.load_toml()
    return config


async def main() -> None:
    """Main application entry point."""
    try:
        config = load_config()
    except (ValidationError, ValueError, FileNotFoundError) as e:
        logger.error(f"Invalid configuration: {e}")
        sys.exit(1)

    logger.info(
        f"Showing up to {config.number_of_results} departures for "
        f"{config.city}/{config.station}"
    )

    engine = TimeFilterEngine(config.timezone, RelativeTimeLabels.for_language(config.language))
    board = DepartureBoard(engine, max_departures=config.number_of_results)
    display = ConsoleDisplay(board, RowFormatter(config), config)
    board.on_change = display.render

    # Create aiohttp session for efficient HTTP connections
    async with aiohttp.ClientSession() as session:
        feed_client = VrrFeedClient(
            session,
            base_url=config.feed_base_url,
            timeout_seconds=config.request_timeout_seconds,
        )
        scheduler = RefreshScheduler(feed_client, board, config)

        await scheduler.start()
        await display.start()
        try:
            await asyncio.Event().wait()
        finally:
            logger.info("Shutting down...")
            await scheduler.stop()
            await display.stop()


def run() -> None:
    """Console script entry point."""
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        logger.info("Interrupted")


if __name__ == "__main__":
    run()
