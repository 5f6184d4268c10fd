"""Domain layer - core models, errors and ports."""

from bahn_route.domain.errors import (
    BahnRouteError,
    FormatError,
    RouteNotFound,
    StationNotFound,
    TransportError,
)
from bahn_route.domain.models import Leg, Station, Stop, Trip
from bahn_route.domain.ports import ResponseCache, TimetableGateway

__all__ = [
    "BahnRouteError",
    "FormatError",
    "Leg",
    "ResponseCache",
    "RouteNotFound",
    "Station",
    "StationNotFound",
    "Stop",
    "TimetableGateway",
    "TransportError",
    "Trip",
]
