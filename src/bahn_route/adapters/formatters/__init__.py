"""Output formatters."""

from bahn_route.adapters.formatters.itinerary_formatter import ItineraryFormatter

__all__ = ["ItineraryFormatter"]
