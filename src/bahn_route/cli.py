"""Command line entry point: resolve the next trip along a route file."""

import argparse
import asyncio
import logging
import sys
from datetime import datetime, time, tzinfo

import aiohttp
from pydantic import ValidationError

from bahn_route.adapters.cache import CacheJanitor, FileResponseCache
from bahn_route.adapters.config import AppConfig, RouteFileLoader
from bahn_route.adapters.formatters import ItineraryFormatter
from bahn_route.adapters.timetable_api import DbTimetableGateway
from bahn_route.application import ItineraryPlanner, LegResolver
from bahn_route.domain.errors import BahnRouteError
from bahn_route.domain.models import Stop

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

USAGE_EXAMPLE = """\
No route given
USAGE: bahn-route [route] [starttime]
Example:
bahn-route hw 0730
Means look for the next trip of route hw after 07:30"""


def parse_start_time(value: str) -> time:
    """Parse an HHMM command line argument."""
    if len(value) != 4 or not value.isdigit():
        raise argparse.ArgumentTypeError(f"could not parse {value} as time (expected HHMM)")
    try:
        return time(hour=int(value[:2]), minute=int(value[2:]))
    except ValueError as e:
        raise argparse.ArgumentTypeError(f"could not parse {value} as time: {e}") from e


def build_start_datetime(start: time | None, timezone: tzinfo | None) -> datetime:
    """Combine an optional HHMM start with today's date, or return the current time."""
    now = datetime.now(timezone) if timezone else datetime.now().astimezone()
    if start is None:
        return now
    return now.replace(hour=start.hour, minute=start.minute, second=0, microsecond=0)


def _setup_argparse() -> argparse.ArgumentParser:
    """Set up and configure argument parser."""
    parser = argparse.ArgumentParser(
        prog="bahn-route",
        description="Find the next trip along a route of DB stations",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Route files list one station name per line. A line such as "90m" or "1h30m"
adds a wait before the next leg. Route names are looked up in
~/.config/bahn/routes unless a path to an existing file is given.

Examples:
  # Next trip of route "hw" from now on
  bahn-route hw

  # Next trip of route "hw" after 07:30
  bahn-route hw 0730
        """,
    )
    parser.add_argument("route", nargs="?", help="Route file name or path")
    parser.add_argument(
        "start", nargs="?", type=parse_start_time, help="Start time as HHMM (default: now)"
    )
    parser.add_argument("--json", action="store_true", help="Output as JSON")
    return parser


def _configure_logging(config: AppConfig) -> None:
    logging.basicConfig(
        level=config.logging_level,
        format=LOG_FORMAT,
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stderr,
    )


async def resolve_route(
    config: AppConfig, api_token: str, route: str, start_time: datetime, cache: FileResponseCache
) -> list[Stop]:
    """Load a route file and resolve all of its legs."""
    directives = RouteFileLoader(config.routes_dir).load(route)

    timeout = aiohttp.ClientTimeout(total=config.request_timeout)
    async with aiohttp.ClientSession(timeout=timeout) as session:
        gateway = DbTimetableGateway.create(
            session, config.base_url, api_token, cache=cache, timezone=config.tzinfo
        )
        planner = ItineraryPlanner(gateway, LegResolver(gateway, timezone=config.tzinfo))
        return await planner.plan(directives, start_time)


async def main(argv: list[str] | None = None) -> None:
    """Main CLI entry point."""
    parser = _setup_argparse()
    args = parser.parse_args(argv)

    if not args.route:
        print(USAGE_EXAMPLE)
        return

    try:
        config = AppConfig()
    except ValidationError as e:
        print(f"Invalid configuration: {e}", file=sys.stderr)
        sys.exit(1)

    _configure_logging(config)

    try:
        api_token = config.load_api_token()
    except (FileNotFoundError, ValueError) as e:
        logger.error(f"Could not read API token: {e}")
        sys.exit(1)

    cache = FileResponseCache(config.cache_dir, config.cache_max_age)
    CacheJanitor(cache).start()

    start_time = build_start_datetime(args.start, config.tzinfo)
    try:
        stops = await resolve_route(config, api_token, args.route, start_time, cache)
    except (BahnRouteError, OSError, UnicodeDecodeError) as e:
        logger.error(str(e))
        sys.exit(1)

    formatter = ItineraryFormatter(config.tzinfo)
    if args.json:
        print(formatter.format_json(stops))
    else:
        print(formatter.format_table(stops))


def cli_main() -> None:
    """Synchronous entry point for the CLI command."""
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        print("\nInterrupted by user", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    cli_main()
