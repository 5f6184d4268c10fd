"""Chaining of legs into a full itinerary."""

import logging
from datetime import datetime
from typing import TYPE_CHECKING

from bahn_route.domain.models import RouteDirective, Station, Stop, Wait

logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from bahn_route.application.leg_resolver import LegResolver
    from bahn_route.domain.ports import TimetableGateway


class ItineraryPlanner:
    """Turns an ordered list of route directives into stops."""

    def __init__(self, gateway: "TimetableGateway", leg_resolver: "LegResolver") -> None:
        """Initialize with a gateway for station lookups and a leg resolver."""
        self._gateway = gateway
        self._leg_resolver = leg_resolver

    async def plan(self, directives: list[RouteDirective], start_time: datetime) -> list[Stop]:
        """Resolve every leg of a route.

        The first waypoint, and every waypoint right after a wait, only anchors
        the next leg. Any other waypoint ends a leg that starts at the previous
        waypoint at the current time. Each leg moves the current time to its
        arrival; a wait moves it forward by the wait's duration.

        Args:
            directives: Parsed route file lines in order.
            start_time: Earliest departure of the first leg.

        Returns:
            Departure and arrival stop of every leg, in route order.
        """
        stops: list[Stop] = []
        current_time = start_time
        previous_station: Station | None = None
        anchor_next = True

        for directive in directives:
            if isinstance(directive, Wait):
                current_time += directive.duration
                anchor_next = True
                logger.debug(f"Waiting {directive.duration}, continuing at {current_time}")
                continue

            station = await self._gateway.find_station(directive.name)
            if anchor_next or previous_station is None:
                previous_station = station
                anchor_next = False
                continue

            leg = await self._leg_resolver.resolve_leg(previous_station, station, current_time)
            stops.extend(leg.stops())
            if leg.end_time is not None:
                current_time = leg.end_time
            previous_station = station

        return stops
