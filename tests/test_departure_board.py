"""Tests for DepartureBoard."""

from datetime import UTC, datetime, timedelta
from unittest.mock import AsyncMock

import pytest

from tests.fakes import make_departure, make_snapshot
from vrr_departures.application.services import DepartureBoard, TimeFilterEngine
from vrr_departures.domain.models import ErrorDetails

NOW = datetime(2024, 1, 15, 12, 0, tzinfo=UTC)


@pytest.fixture
def board() -> DepartureBoard:
    """Board with a UTC engine and room for three departures."""
    return DepartureBoard(TimeFilterEngine("UTC"), max_departures=3)


def test_empty_board_has_no_views(board: DepartureBoard) -> None:
    """Given no snapshot, when rendering, then there are no views."""
    assert board.is_loaded is False
    assert board.views(NOW) == []


@pytest.mark.asyncio
async def test_views_filter_past_and_cap(board: DepartureBoard) -> None:
    """Given a snapshot, when rendering, then past departures are dropped and the list capped."""
    await board.on_snapshot(
        make_snapshot(
            make_departure(line="gone", scheduled_time="11:55"),
            make_departure(line="a", scheduled_time="12:01"),
            make_departure(line="b", scheduled_time="12:02"),
            make_departure(line="c", scheduled_time="12:03"),
            make_departure(line="d", scheduled_time="12:04"),
        ),
        is_first_load=True,
    )

    assert [view.line for view in board.views(NOW)] == ["a", "b", "c"]
    assert [view.line for view in board.views(NOW + timedelta(minutes=2, seconds=30))] == [
        "c",
        "d",
    ]


@pytest.mark.asyncio
async def test_snapshot_is_replaced_not_merged(board: DepartureBoard) -> None:
    """Given a second snapshot, when received, then it replaces the first entirely."""
    await board.on_snapshot(make_snapshot(make_departure(line="old")), is_first_load=True)
    await board.on_snapshot(make_snapshot(make_departure(line="new")), is_first_load=False)

    assert [view.line for view in board.views(NOW)] == ["new"]


@pytest.mark.asyncio
async def test_redraws_only_on_first_load() -> None:
    """Given a change callback, then it fires on the first load but not on later snapshots."""
    on_change = AsyncMock()
    board = DepartureBoard(TimeFilterEngine("UTC"), max_departures=3, on_change=on_change)

    await board.on_snapshot(make_snapshot(), is_first_load=True)
    await board.on_snapshot(make_snapshot(), is_first_load=False)

    on_change.assert_awaited_once()


@pytest.mark.asyncio
async def test_terminal_failure_keeps_data_and_redraws() -> None:
    """Given a terminal failure, then existing data is kept and a redraw is requested."""
    on_change = AsyncMock()
    board = DepartureBoard(TimeFilterEngine("UTC"), max_departures=3, on_change=on_change)
    await board.on_snapshot(make_snapshot(make_departure(line="kept")), is_first_load=False)

    await board.on_terminal_failure(ErrorDetails(status_code=401, reason="Unauthorized"))

    on_change.assert_awaited_once()
    assert board.error is not None
    assert board.error.status_code == 401
    assert [view.line for view in board.views(NOW)] == ["kept"]
