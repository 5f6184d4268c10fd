"""Timetable gateway port."""

from datetime import datetime
from typing import Protocol

from bahn_route.domain.models.station import Station
from bahn_route.domain.models.trip import Trip


class TimetableGateway(Protocol):
    """Port for station lookups and hourly timetable slices."""

    async def find_station(self, name: str) -> Station:
        """Find the best matching station for a name fragment."""
        ...

    async def get_timetable(self, station: Station, hour: datetime) -> list[Trip]:
        """Get all trips scheduled at a station within the hour containing `hour`."""
        ...
