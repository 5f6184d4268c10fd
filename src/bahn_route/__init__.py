"""Resolve multi-leg Deutsche Bahn journeys from the DB Timetables API."""

__version__ = "0.1.0"
