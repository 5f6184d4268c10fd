"""Application services (use cases) for route resolution."""

from bahn_route.application.itinerary_planner import ItineraryPlanner
from bahn_route.application.leg_resolver import LegResolver, parse_scheduled_time
from bahn_route.application.trip_filter import filter_trips

__all__ = [
    "ItineraryPlanner",
    "LegResolver",
    "filter_trips",
    "parse_scheduled_time",
]
