"""Selection of candidate trips from one hourly timetable slice."""

from bahn_route.domain.models.trip import EventDirection, Trip


def filter_trips(trips: list[Trip], path_fragment: str, direction: EventDirection) -> list[Trip]:
    """Keep trips whose path in `direction` passes `path_fragment`.

    The match is a case-sensitive substring test against the raw path. The
    result is ordered by scheduled arrival time whatever the direction, so
    that later matching is deterministic.

    Args:
        trips: All trips of one station for one hour.
        path_fragment: Station name (fragment) the trip has to pass.
        direction: Whether to test the departure or the arrival path.

    Returns:
        Matching trips sorted by arrival time. Empty if none passes.
    """
    matching = [trip for trip in trips if path_fragment in trip.event(direction).path]
    # YYMMDDHHmm strings order chronologically
    return sorted(matching, key=lambda trip: trip.arrival.scheduled_time)
