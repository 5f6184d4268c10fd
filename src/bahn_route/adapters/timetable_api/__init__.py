"""Adapters for the DB Timetables API."""

from bahn_route.adapters.timetable_api.http_client import TimetableHttpClient
from bahn_route.adapters.timetable_api.timetable_gateway import DbTimetableGateway
from bahn_route.adapters.timetable_api.xml_parser import TimetableXmlParser

__all__ = ["DbTimetableGateway", "TimetableHttpClient", "TimetableXmlParser"]
