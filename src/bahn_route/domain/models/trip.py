"""Trip domain models parsed from hourly timetable slices."""

import re
from dataclasses import dataclass, field
from enum import Enum

# Shared by both timetables a physical train appears in, e.g. "-7874571842864554321-1"
CORRELATION_PATTERN = re.compile(r"-?\d+-\d")


def extract_correlation_id(trip_id: str) -> str | None:
    """Return the first correlation suffix embedded in a trip id, if any."""
    match = CORRELATION_PATTERN.search(trip_id)
    return match.group(0) if match else None


class EventDirection(Enum):
    """Which half of a trip a timetable entry refers to."""

    DEPARTURE = "departure"
    ARRIVAL = "arrival"


@dataclass(frozen=True)
class TripEvent:
    """Scheduled departure or arrival of a trip at one station."""

    scheduled_time: str  # YYMMDDHHmm
    path: str  # Pipe-separated station names before/after this stop
    line: str


@dataclass(frozen=True)
class LineInfo:
    """Trip label attributes (the <tl> element)."""

    category: str  # Operator code shown in line labels, e.g. "ICE", "S"
    trip_type: str = ""
    owner: str = ""
    number: str = ""
    filter_flags: str = ""


@dataclass(frozen=True)
class Trip:
    """One scheduled stop of a train at the station a timetable was fetched for."""

    id: str
    line_info: LineInfo
    departure: TripEvent
    arrival: TripEvent
    correlation_id: str | None = field(default=None)

    def __post_init__(self) -> None:
        if self.correlation_id is None:
            object.__setattr__(self, "correlation_id", extract_correlation_id(self.id))

    def event(self, direction: EventDirection) -> TripEvent:
        """Return the departure or arrival half of this trip."""
        if direction is EventDirection.DEPARTURE:
            return self.departure
        return self.arrival
