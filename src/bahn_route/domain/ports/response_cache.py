"""Response cache port."""

from typing import Protocol


class ResponseCache(Protocol):
    """Port for caching raw timetable responses by request path."""

    def read(self, key: str) -> bytes | None:
        """Return the cached body for a request path, or None on a miss."""
        ...

    def write(self, key: str, body: bytes) -> None:
        """Store a response body. Failures must not propagate."""
        ...
