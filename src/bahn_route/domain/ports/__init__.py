"""Ports (interfaces) for the ports-and-adapters architecture."""

from bahn_route.domain.ports.response_cache import ResponseCache
from bahn_route.domain.ports.timetable_gateway import TimetableGateway

__all__ = [
    "ResponseCache",
    "TimetableGateway",
]
