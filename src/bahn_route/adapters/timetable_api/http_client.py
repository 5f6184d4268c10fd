"""HTTP client for DB Timetables API requests."""

import logging
from datetime import datetime
from typing import TYPE_CHECKING
from urllib.parse import quote

import aiohttp

from bahn_route.adapters.api_request_logger import log_api_request, log_api_response
from bahn_route.adapters.timetable_api.constants import (
    DEFAULT_HEADERS,
    PLAN_DATE_FORMAT,
    PLAN_HOUR_FORMAT,
    PLAN_PATH,
    STATION_PATH,
)
from bahn_route.domain.errors import TransportError

logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from bahn_route.domain.ports import ResponseCache


class TimetableHttpClient:
    """Fetches raw XML from the timetable API, going through the response cache."""

    def __init__(
        self,
        session: aiohttp.ClientSession,
        base_url: str,
        api_token: str,
        cache: "ResponseCache | None" = None,
    ) -> None:
        """Initialize the client.

        Args:
            session: Shared aiohttp session.
            base_url: Root URL of the timetable API.
            api_token: Bearer token attached to every request.
            cache: Optional cache for response bodies keyed by request path.
        """
        self._session = session
        self._base_url = base_url.rstrip("/")
        self._headers = {**DEFAULT_HEADERS, "Authorization": f"Bearer {api_token}"}
        self._cache = cache

    @staticmethod
    def station_path(query: str) -> str:
        """Request path of a station lookup."""
        return STATION_PATH.format(query=quote(query, safe=""))

    @staticmethod
    def plan_path(eva: int, hour: datetime) -> str:
        """Request path of the planned timetable for the hour containing `hour`."""
        return PLAN_PATH.format(
            eva=eva,
            date=hour.strftime(PLAN_DATE_FORMAT),
            hour=hour.strftime(PLAN_HOUR_FORMAT),
        )

    async def fetch_station(self, query: str) -> bytes:
        """Fetch the station lookup document for `query`."""
        return await self.get(self.station_path(query))

    async def fetch_plan(self, eva: int, hour: datetime) -> bytes:
        """Fetch the planned timetable document of a station for one hour."""
        return await self.get(self.plan_path(eva, hour))

    async def get(self, path: str) -> bytes:
        """Return the body for a request path, from cache or from the API.

        Raises:
            TransportError: If the request fails or returns a non-2xx status.
        """
        url = f"{self._base_url}{path}"

        if self._cache is not None:
            cached = self._cache.read(path)
            if cached is not None:
                log_api_response(url, 200, cached, from_cache=True)
                return cached

        body = await self._request(url)

        if self._cache is not None:
            self._cache.write(path, body)
        return body

    async def _request(self, url: str) -> bytes:
        log_api_request("GET", url, self._headers)
        try:
            async with self._session.get(url, headers=self._headers) as response:
                body = await response.read()
                log_api_response(url, response.status, body)
                if response.status >= 300:
                    await self._raise_for_status(response, url, body)
                return body
        except aiohttp.ClientError as e:
            raise TransportError(f"Error requesting {url}: {e}") from e
        except TimeoutError as e:
            raise TransportError(f"Timed out requesting {url}") from e

    @staticmethod
    async def _raise_for_status(response: aiohttp.ClientResponse, url: str, body: bytes) -> None:
        snippet = body[:200].decode("utf-8", errors="replace") or "(empty response body)"
        content_type = response.headers.get("Content-Type", "unknown")
        logger.error(
            f"Timetable API returned status {response.status} for {url}: "
            f"{snippet} (Content-Type: {content_type})"
        )
        raise TransportError(
            f"Timetable API returned status {response.status} for {url}",
            status_code=response.status,
        )
