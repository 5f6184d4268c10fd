"""Resolution of a single leg between two stations."""

import logging
from datetime import UTC, datetime, timedelta, tzinfo
from typing import TYPE_CHECKING

from bahn_route.application.trip_filter import filter_trips
from bahn_route.domain.errors import FormatError, RouteNotFound
from bahn_route.domain.models import EventDirection, Leg, Station, Stop, Trip

logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from bahn_route.domain.ports import TimetableGateway

SCHEDULED_TIME_FORMAT = "%y%m%d%H%M"
MAX_HOUR_PROBES = 4
HOUR = timedelta(hours=1)


def parse_scheduled_time(value: str, timezone: tzinfo | None = None) -> datetime:
    """Parse a compact YYMMDDHHmm timestamp.

    Args:
        value: Timestamp as sent by the timetable service, e.g. "2610181405".
        timezone: Zone the timestamp is expressed in. System local time if None.

    Returns:
        Timezone-aware datetime.

    Raises:
        FormatError: If the value is not a valid YYMMDDHHmm timestamp.
    """
    if len(value) != 10 or not value.isdigit():
        raise FormatError(f"Invalid scheduled time '{value}', expected YYMMDDHHmm")
    try:
        parsed = datetime.strptime(value, SCHEDULED_TIME_FORMAT)
    except ValueError as e:
        raise FormatError(f"Invalid scheduled time '{value}': {e}") from e
    return localize(parsed, timezone)


def localize(value: datetime, timezone: tzinfo | None) -> datetime:
    """Attach `timezone` (or the system zone) to a naive datetime."""
    if value.tzinfo is not None:
        return value
    if timezone is None:
        return value.astimezone()
    return value.replace(tzinfo=timezone)


def step_hours(value: datetime, hours: int) -> datetime:
    """Move an aware datetime by elapsed hours, skipping or repeating wall-clock hours at DST changes."""
    return (value.astimezone(UTC) + hours * HOUR).astimezone(value.tzinfo)


def _require_correlation_id(trip: Trip) -> str:
    if trip.correlation_id is None:
        raise FormatError(f"Trip id '{trip.id}' carries no correlation suffix")
    return trip.correlation_id


class LegResolver:
    """Finds the train connecting two stations at or after a target time."""

    def __init__(self, gateway: "TimetableGateway", timezone: tzinfo | None = None) -> None:
        """Initialize with a timetable gateway.

        Args:
            gateway: Source of hourly timetable slices.
            timezone: Zone of the scheduled times. System local time if None.
        """
        self._gateway = gateway
        self._timezone = timezone

    async def resolve_leg(self, origin: Station, destination: Station, target_time: datetime) -> Leg:
        """Resolve the departure at `origin` and the arrival at `destination`.

        The departure is searched in up to four consecutive hour slices starting
        with the one containing `target_time`. The arrival is then searched at
        the destination from the slice the departure was found in, again in up
        to four slices, by matching the train's correlation id.

        Raises:
            RouteNotFound: If no qualifying departure is found.
            FormatError: If a scheduled time or trip id is malformed.
        """
        target_time = localize(target_time, self._timezone)
        departure, correlation_id, cursor = await self._find_departure(
            origin, destination, target_time
        )
        arrival_time = await self._find_arrival(origin, destination, correlation_id, cursor)

        arrival = Stop(station=destination, arrival_time=arrival_time, departure_time=None)
        return Leg(departure=departure, arrival=arrival)

    async def _find_departure(
        self, origin: Station, destination: Station, target_time: datetime
    ) -> tuple[Stop, str, datetime]:
        """Phase A. Returns the departure stop, its correlation id and the hour cursor."""
        cursor = step_hours(target_time, -1)
        for attempt in range(1, MAX_HOUR_PROBES + 1):
            cursor = step_hours(cursor, 1)
            trips = await self._gateway.get_timetable(origin, cursor)
            candidates = filter_trips(trips, destination.name, EventDirection.DEPARTURE)
            logger.debug(
                f"Departure probe {attempt}/{MAX_HOUR_PROBES} at {origin.name} "
                f"for {cursor:%Y-%m-%d %H}h: {len(candidates)} candidate(s)"
            )

            for trip in candidates:
                departure_time = parse_scheduled_time(trip.departure.scheduled_time, self._timezone)
                if departure_time < target_time:
                    continue
                stop = Stop(
                    station=origin,
                    arrival_time=target_time,
                    departure_time=departure_time,
                    line=trip.line_info.category + trip.departure.line,
                )
                return stop, _require_correlation_id(trip), cursor

        raise RouteNotFound(origin.name, destination.name)

    async def _find_arrival(
        self, origin: Station, destination: Station, correlation_id: str, cursor: datetime
    ) -> datetime | None:
        """Phase B. Returns None when the train is not found at the destination."""
        for attempt in range(1, MAX_HOUR_PROBES + 1):
            trips = await self._gateway.get_timetable(destination, cursor)
            candidates = filter_trips(trips, origin.name, EventDirection.ARRIVAL)
            logger.debug(
                f"Arrival probe {attempt}/{MAX_HOUR_PROBES} at {destination.name} "
                f"for {cursor:%Y-%m-%d %H}h: {len(candidates)} candidate(s)"
            )
            cursor = step_hours(cursor, 1)

            for trip in candidates:
                if _require_correlation_id(trip) == correlation_id:
                    return parse_scheduled_time(trip.arrival.scheduled_time, self._timezone)

        logger.warning(
            f"Train {correlation_id} from {origin.name} not found arriving at "
            f"{destination.name}, leaving arrival time unset"
        )
        return None
