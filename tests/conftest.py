"""Shared fixtures."""

import os
from unittest.mock import patch

import pytest

from vrr_departures.adapters.config import AppConfig


@pytest.fixture
def config() -> AppConfig:
    """Configuration isolated from the environment and any .env file."""
    with patch.dict(os.environ, {}, clear=True):
        return AppConfig(
            _env_file=None,
            city="Essen",
            station="Hbf",
            number_of_results=5,
            retry_delay=30000,
            update_interval=60000,
            timezone="UTC",
        )
