"""Adapters layer - external system integrations."""

from bahn_route.adapters.cache import CacheJanitor, FileResponseCache
from bahn_route.adapters.config import AppConfig, RouteFileLoader
from bahn_route.adapters.formatters import ItineraryFormatter
from bahn_route.adapters.timetable_api import DbTimetableGateway

__all__ = [
    "AppConfig",
    "CacheJanitor",
    "DbTimetableGateway",
    "FileResponseCache",
    "ItineraryFormatter",
    "RouteFileLoader",
]
