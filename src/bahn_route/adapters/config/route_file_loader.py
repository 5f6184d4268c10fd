"""Route file loader.

A route file lists one directive per line: either a station name fragment or
a duration literal such as ``90m`` or ``1h30m`` for an explicit wait before
the next leg.
"""

import logging
import re
from datetime import timedelta
from pathlib import Path

from bahn_route.domain.models import RouteDirective, Wait, Waypoint

logger = logging.getLogger(__name__)

_UNIT_SECONDS = {
    "ns": 1e-9,
    "us": 1e-6,
    "µs": 1e-6,
    "μs": 1e-6,
    "ms": 1e-3,
    "s": 1.0,
    "m": 60.0,
    "h": 3600.0,
}
_DURATION_PATTERN = re.compile(r"([+-]?)((?:(?:\d+\.?\d*|\.\d+)(?:ns|us|µs|μs|ms|s|m|h))+)")
_COMPONENT_PATTERN = re.compile(r"(\d+\.?\d*|\.\d+)(ns|us|µs|μs|ms|s|m|h)")


def parse_duration(text: str) -> timedelta | None:
    """Parse a duration literal like ``90m``, ``1h30m`` or ``1.5h``.

    Returns:
        The duration, or None if `text` is not a duration literal or is out of
        range.
    """
    if text in ("0", "+0", "-0"):
        return timedelta(0)

    match = _DURATION_PATTERN.fullmatch(text)
    if not match:
        return None

    sign, body = match.groups()
    seconds = sum(
        float(value) * _UNIT_SECONDS[unit] for value, unit in _COMPONENT_PATTERN.findall(body)
    )
    try:
        duration = timedelta(seconds=seconds)
    except (OverflowError, ValueError):
        logger.debug(f"Duration literal out of range, treating as station name: {text}")
        return None
    return -duration if sign == "-" else duration


def parse_route_lines(lines: list[str]) -> list[RouteDirective]:
    """Turn route file lines into directives, skipping blank lines."""
    directives: list[RouteDirective] = []
    for raw_line in lines:
        line = raw_line.strip()
        if not line:
            continue

        duration = parse_duration(line)
        if duration is not None:
            directives.append(Wait(duration=duration))
        else:
            directives.append(Waypoint(name=line))
    return directives


class RouteFileLoader:
    """Loads route directives from route files."""

    def __init__(self, routes_dir: Path) -> None:
        """Initialize with the directory route names are looked up in."""
        self._routes_dir = routes_dir

    def resolve_route_path(self, route: str) -> Path:
        """Resolve a route argument to a file.

        An existing file path is used as is; anything else is taken as the
        name of a route file in the routes directory.

        Raises:
            FileNotFoundError: If neither exists.
        """
        candidate = Path(route).expanduser()
        if candidate.is_file():
            return candidate

        named = self._routes_dir / route
        if named.is_file():
            return named

        raise FileNotFoundError(f"Route file not found: {route} (looked in {self._routes_dir})")

    def load(self, route: str) -> list[RouteDirective]:
        """Load and parse a route file by path or name."""
        path = self.resolve_route_path(route)
        directives = parse_route_lines(path.read_text(encoding="utf-8").splitlines())
        logger.debug(f"Loaded {len(directives)} directive(s) from {path}")
        return directives
