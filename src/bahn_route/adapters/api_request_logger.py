"""Logging of timetable API traffic when BAHN_LOG_REQUESTS is enabled."""

import logging
import os
from collections.abc import Mapping

logger = logging.getLogger(__name__)

SENSITIVE_HEADERS = frozenset({"authorization", "cookie", "db-api-key", "db-client-id"})


def should_log_requests() -> bool:
    """Check if request logging is enabled via the BAHN_LOG_REQUESTS environment variable."""
    return os.getenv("BAHN_LOG_REQUESTS", "").lower() == "true"


def redact_headers(headers: Mapping[str, str]) -> dict[str, str]:
    """Return a copy of `headers` with credentials masked."""
    return {k: "***REDACTED***" if k.lower() in SENSITIVE_HEADERS else v for k, v in headers.items()}


def log_api_request(method: str, url: str, headers: Mapping[str, str] | None = None) -> None:
    """Log an outgoing request if BAHN_LOG_REQUESTS is enabled.

    Args:
        method: HTTP method.
        url: Full request URL.
        headers: Request headers; credentials are redacted.
    """
    if not should_log_requests():
        return

    parts = [f"{method} {url}"]
    if headers:
        header_lines = (f"  {k}: {v}" for k, v in sorted(redact_headers(headers).items()))
        parts.append("Headers:\n" + "\n".join(header_lines))
    logger.info("API Request:\n" + "\n".join(parts))


def log_api_response(url: str, status: int, body: bytes, *, from_cache: bool = False) -> None:
    """Log the outcome of a request if BAHN_LOG_REQUESTS is enabled."""
    if not should_log_requests():
        return

    source = "cache" if from_cache else f"status {status}"
    logger.info(f"API Response for {url} ({source}): {len(body)} bytes")
