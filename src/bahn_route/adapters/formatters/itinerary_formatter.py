"""Formatter for resolved itineraries."""

import json
from datetime import datetime, tzinfo

from bahn_route.domain.models import Stop

TABLE_HEADER = ("#", "station", "arrival", "departure", "line")
MIN_COLUMN_WIDTH = 5
COLUMN_PADDING = 3
UNKNOWN_TIME = "--:--"


class ItineraryFormatter:
    """Renders stops as an aligned text table or as JSON."""

    def __init__(self, timezone: tzinfo | None = None) -> None:
        """Initialize the formatter.

        Args:
            timezone: Zone to display times in. Times are shown as stored if None.
        """
        self.timezone = timezone

    def format_time(self, value: datetime | None) -> str:
        """Format a stop time as HH:MM."""
        if value is None:
            return UNKNOWN_TIME
        if self.timezone is not None and value.tzinfo is not None:
            value = value.astimezone(self.timezone)
        return value.strftime("%H:%M")

    def format_row(self, index: int, stop: Stop) -> tuple[str, str, str, str, str]:
        """Cells of one table row. A missing departure shows the arrival time."""
        return (
            str(index),
            stop.station.name,
            self.format_time(stop.arrival_time),
            self.format_time(stop.display_departure_time),
            stop.line,
        )

    def format_table(self, stops: list[Stop]) -> str:
        """Render stops as a table with space-padded columns."""
        rows = [TABLE_HEADER, *(self.format_row(i, stop) for i, stop in enumerate(stops))]
        widths = [
            max(MIN_COLUMN_WIDTH, *(len(row[col]) for row in rows)) + COLUMN_PADDING
            for col in range(len(TABLE_HEADER) - 1)
        ]

        lines = []
        for row in rows:
            cells = [cell.ljust(width) for cell, width in zip(row, widths, strict=False)]
            lines.append(("".join(cells) + row[-1]).rstrip())
        return "\n".join(lines)

    def format_json(self, stops: list[Stop]) -> str:
        """Render stops as a JSON list."""
        return json.dumps(
            [
                {
                    "index": index,
                    "station": stop.station.name,
                    "station_id": stop.station.id,
                    "arrival": stop.arrival_time.isoformat() if stop.arrival_time else None,
                    "departure": stop.departure_time.isoformat() if stop.departure_time else None,
                    "line": stop.line,
                }
                for index, stop in enumerate(stops)
            ],
            indent=2,
            ensure_ascii=False,
        )
