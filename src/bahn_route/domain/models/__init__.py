"""Domain models for route resolution."""

from bahn_route.domain.models.route_directive import RouteDirective, Wait, Waypoint
from bahn_route.domain.models.station import Station
from bahn_route.domain.models.stop import Leg, Stop
from bahn_route.domain.models.trip import (
    EventDirection,
    LineInfo,
    Trip,
    TripEvent,
    extract_correlation_id,
)

__all__ = [
    "EventDirection",
    "Leg",
    "LineInfo",
    "RouteDirective",
    "Station",
    "Stop",
    "Trip",
    "TripEvent",
    "Wait",
    "Waypoint",
    "extract_correlation_id",
]
