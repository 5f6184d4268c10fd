"""Stop and leg domain models."""

from dataclasses import dataclass
from datetime import datetime

from bahn_route.domain.models.station import Station


@dataclass(frozen=True)
class Stop:
    """A station visit in a resolved itinerary."""

    station: Station
    arrival_time: datetime | None
    departure_time: datetime | None
    line: str = ""

    @property
    def display_departure_time(self) -> datetime | None:
        """Departure time for display, falling back to the arrival time."""
        return self.departure_time or self.arrival_time


@dataclass(frozen=True)
class Leg:
    """Departure and arrival of the same physical train between two waypoints."""

    departure: Stop
    arrival: Stop

    @property
    def is_arrival_resolved(self) -> bool:
        """Whether the arrival time could be found at the destination."""
        return self.arrival.arrival_time is not None

    @property
    def end_time(self) -> datetime | None:
        """Time the rider is at the destination, or the departure time if unknown."""
        if self.is_arrival_resolved:
            return self.arrival.arrival_time
        return self.departure.departure_time

    def stops(self) -> list[Stop]:
        """Return the two stops in itinerary order."""
        return [self.departure, self.arrival]
