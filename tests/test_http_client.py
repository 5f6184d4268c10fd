"""Tests for the timetable HTTP client."""

from datetime import datetime
from unittest.mock import AsyncMock, MagicMock

import aiohttp
import pytest

from bahn_route.adapters.timetable_api.http_client import TimetableHttpClient
from bahn_route.domain.errors import TransportError

BASE_URL = "https://api.example.org/timetables/v1"


def _session_returning(status: int, body: bytes) -> MagicMock:
    """Build a session whose get() yields a response with `status` and `body`."""
    response = MagicMock()
    response.status = status
    response.headers = {"Content-Type": "application/xml"}
    response.read = AsyncMock(return_value=body)

    session = MagicMock()
    session.get.return_value.__aenter__.return_value = response
    session.get.return_value.__aexit__.return_value = False
    return session


class TestPaths:
    """Tests for request path construction."""

    def test_station_path_quotes_query(self) -> None:
        """Given a query with spaces and slashes, when building the path, then it is percent-encoded."""
        assert TimetableHttpClient.station_path("Berlin Hbf") == "/station/Berlin%20Hbf"
        assert TimetableHttpClient.station_path("a/b") == "/station/a%2Fb"

    def test_plan_path_uses_date_and_hour(self) -> None:
        """Given a station and an hour, when building the path, then YYMMDD and HH are used."""
        path = TimetableHttpClient.plan_path(8000105, datetime(2026, 10, 18, 9, 45))

        assert path == "/plan/8000105/261018/09"


@pytest.mark.asyncio
async def test_get_sends_bearer_token_and_returns_body() -> None:
    """Given a successful response, when fetching, then the body is returned and auth is sent."""
    session = _session_returning(200, b"<timetable/>")
    client = TimetableHttpClient(session, BASE_URL + "/", "tok")

    body = await client.fetch_plan(8000105, datetime(2026, 10, 18, 14))

    assert body == b"<timetable/>"
    url = session.get.call_args.args[0]
    headers = session.get.call_args.kwargs["headers"]
    assert url == f"{BASE_URL}/plan/8000105/261018/14"
    assert headers["Authorization"] == "Bearer tok"
    assert headers["Accept"] == "application/xml"


@pytest.mark.asyncio
async def test_successful_response_is_written_to_cache() -> None:
    """Given a cache miss, when fetching, then the body is stored under the request path."""
    session = _session_returning(200, b"<stations/>")
    cache = MagicMock()
    cache.read.return_value = None
    client = TimetableHttpClient(session, BASE_URL, "tok", cache)

    await client.fetch_station("Mainz")

    cache.read.assert_called_once_with("/station/Mainz")
    cache.write.assert_called_once_with("/station/Mainz", b"<stations/>")


@pytest.mark.asyncio
async def test_cache_hit_skips_request() -> None:
    """Given a cached body, when fetching, then no request is made."""
    session = _session_returning(200, b"fresh")
    cache = MagicMock()
    cache.read.return_value = b"cached"
    client = TimetableHttpClient(session, BASE_URL, "tok", cache)

    body = await client.fetch_station("Mainz")

    assert body == b"cached"
    session.get.assert_not_called()
    cache.write.assert_not_called()


@pytest.mark.asyncio
async def test_error_status_raises_transport_error_and_is_not_cached() -> None:
    """Given a 401 response, when fetching, then TransportError is raised and nothing is cached."""
    session = _session_returning(401, b"Unauthorized")
    cache = MagicMock()
    cache.read.return_value = None
    client = TimetableHttpClient(session, BASE_URL, "tok", cache)

    with pytest.raises(TransportError) as exc_info:
        await client.fetch_station("Mainz")

    assert exc_info.value.status_code == 401
    cache.write.assert_not_called()


@pytest.mark.asyncio
async def test_client_error_raises_transport_error() -> None:
    """Given a connection failure, when fetching, then TransportError is raised."""
    session = MagicMock()
    session.get.side_effect = aiohttp.ClientConnectionError("connection refused")
    client = TimetableHttpClient(session, BASE_URL, "tok")

    with pytest.raises(TransportError, match="connection refused"):
        await client.fetch_station("Mainz")


@pytest.mark.asyncio
async def test_timeout_raises_transport_error() -> None:
    """Given a timeout, when fetching, then TransportError is raised."""
    session = MagicMock()
    session.get.side_effect = TimeoutError()
    client = TimetableHttpClient(session, BASE_URL, "tok")

    with pytest.raises(TransportError, match="Timed out"):
        await client.fetch_station("Mainz")
