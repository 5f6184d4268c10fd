"""Errors raised while resolving an itinerary.

Every error is fatal for the current resolution and propagates unchanged to
the outermost caller.
"""


class BahnRouteError(Exception):
    """Base class for route resolution failures."""


class TransportError(BahnRouteError):
    """The timetable service could not be reached or answered with an error status."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class FormatError(BahnRouteError):
    """A response or a value inside it could not be parsed."""


class StationNotFound(BahnRouteError):
    """The station lookup returned no usable station."""

    def __init__(self, query: str) -> None:
        super().__init__(f"Did not find station for {query}")
        self.query = query


class RouteNotFound(BahnRouteError):
    """No train from origin towards destination departs within the search window."""

    def __init__(self, origin: str, destination: str) -> None:
        super().__init__(f"Could not find route from {origin} to {destination}")
        self.origin = origin
        self.destination = destination
