"""Timetable gateway adapter for the DB Timetables API."""

import logging
from datetime import datetime, tzinfo
from typing import TYPE_CHECKING

from bahn_route.adapters.timetable_api.http_client import TimetableHttpClient
from bahn_route.adapters.timetable_api.xml_parser import TimetableXmlParser
from bahn_route.domain.models import Station, Trip
from bahn_route.domain.ports.timetable_gateway import TimetableGateway

logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    import aiohttp

    from bahn_route.domain.ports import ResponseCache


class DbTimetableGateway(TimetableGateway):
    """Adapter for station lookups and hourly timetables of the DB Timetables API."""

    def __init__(self, http_client: TimetableHttpClient, timezone: tzinfo | None = None) -> None:
        """Initialize with an HTTP client.

        Args:
            http_client: Client for raw API responses.
            timezone: Zone the API's hour slices are expressed in. System zone if None.
        """
        self._http_client = http_client
        self._timezone = timezone
        self._stations: dict[str, Station] = {}

    @classmethod
    def create(
        cls,
        session: "aiohttp.ClientSession",
        base_url: str,
        api_token: str,
        cache: "ResponseCache | None" = None,
        timezone: tzinfo | None = None,
    ) -> "DbTimetableGateway":
        """Build a gateway with its HTTP client."""
        http_client = TimetableHttpClient(session, base_url, api_token, cache)
        return cls(http_client, timezone=timezone)

    async def find_station(self, name: str) -> Station:
        """Find the first station the API returns for `name`.

        Lookups are memoised per name for the lifetime of the gateway.

        Raises:
            StationNotFound: If the API knows no such station.
            TransportError: If the request fails.
            FormatError: If the response is malformed.
        """
        if name in self._stations:
            return self._stations[name]

        body = await self._http_client.fetch_station(name)
        station = TimetableXmlParser.parse_station(body, name)
        logger.debug(f"Resolved station '{name}' to {station.name} ({station.id})")
        self._stations[name] = station
        return station

    async def get_timetable(self, station: Station, hour: datetime) -> list[Trip]:
        """Get the planned trips of `station` in the hour containing `hour`.

        Raises:
            TransportError: If the request fails.
            FormatError: If the response is malformed.
        """
        local_hour = self._to_local(hour)
        body = await self._http_client.fetch_plan(station.id, local_hour)
        return TimetableXmlParser.parse_timetable(body)

    def _to_local(self, value: datetime) -> datetime:
        if value.tzinfo is None:
            return value
        if self._timezone is None:
            return value.astimezone()
        return value.astimezone(self._timezone)
