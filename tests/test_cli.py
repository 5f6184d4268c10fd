"""Tests for the command line entry point."""

import argparse
import json
import os
from datetime import time
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from bahn_route.cli import USAGE_EXAMPLE, build_start_datetime, main, parse_start_time
from bahn_route.domain.errors import RouteNotFound
from bahn_route.domain.models import Station, Stop
from tests.fakes import BERLIN, berlin


@pytest.fixture
def config_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point the configuration at a temporary directory with a token file."""
    for key in list(os.environ):
        if key.upper().startswith("BAHN_"):
            monkeypatch.delenv(key)
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("BAHN_CONFIG_DIR", str(tmp_path))
    monkeypatch.setenv("BAHN_TIMEZONE", "Europe/Berlin")
    (tmp_path / "config").write_text("secret-token\n")
    return tmp_path


class TestParseStartTime:
    """Tests for HHMM argument parsing."""

    def test_valid_time(self) -> None:
        """Given 0730, when parsing, then 07:30 is returned."""
        assert parse_start_time("0730") == time(7, 30)

    @pytest.mark.parametrize("value", ["730", "07:30", "2561", "abcd", "07300"])
    def test_invalid_time(self, value: str) -> None:
        """Given a malformed or impossible time, when parsing, then an argparse error is raised."""
        with pytest.raises(argparse.ArgumentTypeError):
            parse_start_time(value)


class TestBuildStartDatetime:
    """Tests for combining the start time with today's date."""

    def test_start_time_replaces_clock_time(self) -> None:
        """Given 07:30, when building the start, then today's date at 07:30 local is returned."""
        start = build_start_datetime(time(7, 30), BERLIN)

        assert (start.hour, start.minute, start.second) == (7, 30, 0)
        assert start.tzinfo is BERLIN

    def test_no_start_time_means_now(self) -> None:
        """Given no start time, when building the start, then an aware current time is returned."""
        start = build_start_datetime(None, None)

        assert start.tzinfo is not None


@pytest.mark.asyncio
async def test_no_route_prints_usage(capsys: pytest.CaptureFixture[str]) -> None:
    """Given no arguments, when running, then the usage example is printed."""
    await main([])

    assert capsys.readouterr().out.strip() == USAGE_EXAMPLE


@pytest.mark.asyncio
async def test_invalid_start_time_is_usage_error() -> None:
    """Given a malformed start time, when running, then argparse exits with status 2."""
    with pytest.raises(SystemExit) as exc_info:
        await main(["hw", "7:30"])

    assert exc_info.value.code == 2


@pytest.mark.asyncio
async def test_route_is_resolved_and_printed(
    config_env: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    """Given a route, when running, then the resolved stops are printed as a table."""
    stops = [
        Stop(Station("Berlin Hbf", 1), berlin(2026, 10, 18, 7, 30), berlin(2026, 10, 18, 7, 35), "RE1"),
        Stop(Station("Potsdam Hbf", 2), berlin(2026, 10, 18, 8, 0), None),
    ]
    resolve = AsyncMock(return_value=stops)

    with (
        patch("bahn_route.cli.resolve_route", resolve),
        patch("bahn_route.cli.CacheJanitor", MagicMock()),
    ):
        await main(["hw", "0730"])

    config, api_token, route, start_time, _cache = resolve.await_args.args
    assert api_token == "secret-token"
    assert route == "hw"
    assert (start_time.hour, start_time.minute) == (7, 30)
    assert config.routes_dir == config_env / "routes"
    out = capsys.readouterr().out
    assert "Berlin Hbf" in out
    assert "07:35" in out


@pytest.mark.asyncio
async def test_json_output(config_env: Path, capsys: pytest.CaptureFixture[str]) -> None:
    """Given --json, when running, then stops are printed as JSON."""
    stops = [Stop(Station("Berlin Hbf", 1), berlin(2026, 10, 18, 7, 30), None)]

    with (
        patch("bahn_route.cli.resolve_route", AsyncMock(return_value=stops)),
        patch("bahn_route.cli.CacheJanitor", MagicMock()),
    ):
        await main(["--json", "hw"])

    data = json.loads(capsys.readouterr().out)
    assert data[0]["station"] == "Berlin Hbf"


@pytest.mark.asyncio
async def test_route_failure_exits_with_error(config_env: Path) -> None:
    """Given no connection can be found, when running, then the CLI exits with status 1."""
    resolve = AsyncMock(side_effect=RouteNotFound("Berlin Hbf", "Potsdam Hbf"))

    with (
        patch("bahn_route.cli.resolve_route", resolve),
        patch("bahn_route.cli.CacheJanitor", MagicMock()),
        pytest.raises(SystemExit) as exc_info,
    ):
        await main(["hw"])

    assert exc_info.value.code == 1


@pytest.mark.asyncio
async def test_missing_route_file_exits_with_error(config_env: Path) -> None:
    """Given an unknown route name, when running, then the CLI exits with status 1."""
    with (
        patch("bahn_route.cli.CacheJanitor", MagicMock()),
        pytest.raises(SystemExit) as exc_info,
    ):
        await main(["does-not-exist"])

    assert exc_info.value.code == 1


@pytest.mark.asyncio
async def test_missing_token_exits_with_error(config_env: Path) -> None:
    """Given no token file, when running, then the CLI exits with status 1 before any request."""
    (config_env / "config").unlink()
    resolve = AsyncMock()

    with patch("bahn_route.cli.resolve_route", resolve), pytest.raises(SystemExit) as exc_info:
        await main(["hw"])

    assert exc_info.value.code == 1
    resolve.assert_not_awaited()


@pytest.mark.asyncio
async def test_undecodable_route_file_exits_with_error(config_env: Path) -> None:
    """Given a route file that is not UTF-8, when running, then the CLI exits with status 1."""
    routes_dir = config_env / "routes"
    routes_dir.mkdir()
    (routes_dir / "hw").write_bytes(b"Mainz Hbf\n\xff\xfe\x00Wiesbaden\n")

    with (
        patch("bahn_route.cli.CacheJanitor", MagicMock()),
        pytest.raises(SystemExit) as exc_info,
    ):
        await main(["hw"])

    assert exc_info.value.code == 1
