"""Parser for DB Timetables XML documents."""

import logging
import xml.etree.ElementTree as ET

from bahn_route.domain.errors import FormatError, StationNotFound
from bahn_route.domain.models import LineInfo, Station, Trip, TripEvent

logger = logging.getLogger(__name__)


class TimetableXmlParser:
    """Parses station and timetable responses into domain objects."""

    @staticmethod
    def _parse_root(body: bytes, expected_tag: str) -> ET.Element:
        """Parse an XML document and check its root element.

        Raises:
            FormatError: If the body is not XML or has an unexpected root.
        """
        try:
            root = ET.fromstring(body)
        except ET.ParseError as e:
            snippet = body[:200].decode("utf-8", errors="replace")
            raise FormatError(f"Invalid XML in <{expected_tag}> response: {e}: {snippet}") from e

        if root.tag != expected_tag:
            raise FormatError(f"Expected <{expected_tag}> document, got <{root.tag}>")
        return root

    @staticmethod
    def parse_station(body: bytes, query: str) -> Station:
        """Parse a station lookup response, taking the first station.

        Args:
            body: Raw <stations> document.
            query: The name that was looked up (for error messages).

        Returns:
            The first matching station.

        Raises:
            StationNotFound: If there is no station or its EVA number is 0.
            FormatError: If the document or the EVA number is malformed.
        """
        root = TimetableXmlParser._parse_root(body, "stations")
        element = root.find("station")
        if element is None:
            raise StationNotFound(query)

        eva = element.get("eva", "0") or "0"
        try:
            station_id = int(eva)
        except ValueError as e:
            raise FormatError(f"Invalid EVA number '{eva}' for station {query}") from e

        if station_id == 0:
            raise StationNotFound(query)

        return Station(name=element.get("name", ""), id=station_id)

    @staticmethod
    def parse_timetable(body: bytes) -> list[Trip]:
        """Parse an hourly timetable into trips, in document order.

        Raises:
            FormatError: If the document is malformed.
        """
        root = TimetableXmlParser._parse_root(body, "timetable")
        trips = [TimetableXmlParser._parse_trip(element) for element in root.findall("s")]
        logger.debug(f"Parsed {len(trips)} trip(s) for station {root.get('station', '?')}")
        return trips

    @staticmethod
    def _parse_trip(element: ET.Element) -> Trip:
        return Trip(
            id=element.get("id", ""),
            line_info=TimetableXmlParser._parse_line_info(element.find("tl")),
            departure=TimetableXmlParser._parse_event(element.find("dp")),
            arrival=TimetableXmlParser._parse_event(element.find("ar")),
        )

    @staticmethod
    def _parse_line_info(element: ET.Element | None) -> LineInfo:
        if element is None:
            return LineInfo(category="")
        return LineInfo(
            category=element.get("c", ""),
            trip_type=element.get("t", ""),
            owner=element.get("o", ""),
            number=element.get("n", ""),
            filter_flags=element.get("f", ""),
        )

    @staticmethod
    def _parse_event(element: ET.Element | None) -> TripEvent:
        """Parse a <dp> or <ar> element; a missing element gives an empty event."""
        if element is None:
            return TripEvent(scheduled_time="", path="", line="")
        return TripEvent(
            scheduled_time=element.get("pt", ""),
            path=element.get("ppth", ""),
            line=element.get("l", ""),
        )
