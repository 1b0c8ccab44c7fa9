"""Tests for VrrFeedClient against a local aiohttp server."""

import asyncio
import json
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import aiohttp
import pytest
from aiohttp import test_utils, web

from vrr_departures.adapters.vrr_api import VrrFeedClient
from vrr_departures.domain.errors import HttpError, NetworkError, ParseError

FEED_PAYLOAD = {
    "version": "2.4",
    "error": None,
    "raw": [
        {
            "line": "U79",
            "destination": "Duisburg Meiderich Süd Bf",
            "type": "U-Bahn",
            "sched_date": "15-01-2024",
            "sched_time": "12:05",
            "countdown": "4",
            "platform": "2",
        },
        {
            "line": 835,
            "destination": "Flughafen",
            "type": "Bus",
            "sched_date": "15-01-2024",
            "sched_time": "12:07",
        },
    ],
}


@asynccontextmanager
async def feed_server(handler: object) -> AsyncIterator[str]:
    """Serve ``handler`` on /{city}/{station}.json and yield the base URL."""
    app = web.Application()
    app.router.add_get("/{city}/{station}.json", handler)  # type: ignore[arg-type]
    server = test_utils.TestServer(app)
    await server.start_server()
    try:
        yield str(server.make_url("/")).rstrip("/")
    finally:
        await server.close()


@pytest.mark.asyncio
async def test_fetch_snapshot_parses_records() -> None:
    """Given a 200 JSON response, when fetching, then records are parsed in order."""
    seen: dict[str, str] = {}

    async def handler(request: web.Request) -> web.Response:
        seen.update(request.match_info)
        seen.update(request.query)
        return web.json_response(FEED_PAYLOAD)

    async with feed_server(handler) as base_url, aiohttp.ClientSession() as session:
        client = VrrFeedClient(session, base_url=base_url)
        snapshot = await client.fetch_snapshot("Essen", "Hbf", 7)

    assert seen == {"city": "Essen", "station": "Hbf", "frontend": "json", "no_lines": "7"}
    assert [d.line for d in snapshot.departures] == ["U79", "835"]
    assert snapshot.departures[0].scheduled_date == "15-01-2024"
    assert snapshot.departures[0].scheduled_time == "12:05"
    assert snapshot.departures[0].transport_type == "U-Bahn"
    assert snapshot.departures[0].countdown == 4
    assert snapshot.version == "2.4"
    assert snapshot.feed_error is None


@pytest.mark.asyncio
async def test_fetch_snapshot_encodes_station_names() -> None:
    """Given names with spaces and umlauts, when fetching, then they reach the server intact."""
    seen: dict[str, str] = {}

    async def handler(request: web.Request) -> web.Response:
        seen.update(request.match_info)
        return web.json_response({"raw": []})

    async with feed_server(handler) as base_url, aiohttp.ClientSession() as session:
        client = VrrFeedClient(session, base_url=base_url)
        await client.fetch_snapshot("Düsseldorf", "Heinrich-Heine-Allee U", 3)

    assert seen == {"city": "Düsseldorf", "station": "Heinrich-Heine-Allee U"}


@pytest.mark.asyncio
async def test_fetch_snapshot_accepts_json_without_content_type() -> None:
    """Given a JSON body labelled text/html, when fetching, then it is still parsed."""

    async def handler(request: web.Request) -> web.Response:  # noqa: ARG001
        return web.Response(text=json.dumps({"raw": []}), content_type="text/html")

    async with feed_server(handler) as base_url, aiohttp.ClientSession() as session:
        snapshot = await VrrFeedClient(session, base_url=base_url).fetch_snapshot("a", "b", 1)

    assert snapshot.departures == ()


@pytest.mark.asyncio
@pytest.mark.parametrize("status", [401, 404, 500, 503])
async def test_fetch_snapshot_raises_http_error(status: int) -> None:
    """Given a non-200 response, when fetching, then HttpError carries the status."""

    async def handler(request: web.Request) -> web.Response:  # noqa: ARG001
        return web.Response(status=status, text="nope")

    async with feed_server(handler) as base_url, aiohttp.ClientSession() as session:
        client = VrrFeedClient(session, base_url=base_url)
        with pytest.raises(HttpError) as exc_info:
            await client.fetch_snapshot("Essen", "Hbf", 5)

    assert exc_info.value.status == status
    assert exc_info.value.is_unauthorized is (status == 401)


@pytest.mark.asyncio
async def test_fetch_snapshot_raises_parse_error_for_invalid_json() -> None:
    """Given a body that is not JSON, when fetching, then ParseError is raised."""

    async def handler(request: web.Request) -> web.Response:  # noqa: ARG001
        return web.Response(text="<html>maintenance</html>", content_type="text/html")

    async with feed_server(handler) as base_url, aiohttp.ClientSession() as session:
        client = VrrFeedClient(session, base_url=base_url)
        with pytest.raises(ParseError):
            await client.fetch_snapshot("Essen", "Hbf", 5)


@pytest.mark.asyncio
async def test_fetch_snapshot_raises_parse_error_without_records() -> None:
    """Given JSON without a raw array, when fetching, then ParseError is raised."""

    async def handler(request: web.Request) -> web.Response:  # noqa: ARG001
        return web.json_response({"error": "station not found"})

    async with feed_server(handler) as base_url, aiohttp.ClientSession() as session:
        client = VrrFeedClient(session, base_url=base_url)
        with pytest.raises(ParseError):
            await client.fetch_snapshot("Essen", "Hbf", 5)


@pytest.mark.asyncio
async def test_fetch_snapshot_raises_network_error_when_unreachable() -> None:
    """Given no server listening, when fetching, then NetworkError is raised."""

    async def handler(request: web.Request) -> web.Response:  # noqa: ARG001
        return web.json_response({"raw": []})

    async with feed_server(handler) as base_url:
        pass

    async with aiohttp.ClientSession() as session:
        client = VrrFeedClient(session, base_url=base_url)
        with pytest.raises(NetworkError):
            await client.fetch_snapshot("Essen", "Hbf", 5)


@pytest.mark.asyncio
async def test_fetch_snapshot_raises_network_error_on_timeout() -> None:
    """Given a server slower than the timeout, when fetching, then NetworkError is raised."""

    async def handler(request: web.Request) -> web.Response:  # noqa: ARG001
        await asyncio.sleep(1)
        return web.json_response({"raw": []})

    async with feed_server(handler) as base_url, aiohttp.ClientSession() as session:
        client = VrrFeedClient(session, base_url=base_url, timeout_seconds=0.05)
        with pytest.raises(NetworkError):
            await client.fetch_snapshot("Essen", "Hbf", 5)


def test_build_request() -> None:
    """Given routing values, when building the request, then URL and params match the feed."""
    client = VrrFeedClient(
        session=None,  # type: ignore[arg-type]
        base_url="https://vrrf.finalrewind.org/",
    )

    url, params = client.build_request("Düsseldorf", "Hauptbahnhof", 10)

    assert url == "https://vrrf.finalrewind.org/D%C3%BCsseldorf/Hauptbahnhof.json"
    assert params == {"frontend": "json", "no_lines": 10}
