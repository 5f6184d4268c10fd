"""Route directives parsed from route files."""

from dataclasses import dataclass
from datetime import timedelta


@dataclass(frozen=True)
class Waypoint:
    """A station name fragment that starts or ends a leg."""

    name: str


@dataclass(frozen=True)
class Wait:
    """An explicit wait before the next leg."""

    duration: timedelta


RouteDirective = Waypoint | Wait
