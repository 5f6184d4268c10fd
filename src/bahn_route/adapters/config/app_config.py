"""12-factor configuration adapter using environment variables and an optional .env file."""

import logging
from datetime import timedelta, tzinfo
from pathlib import Path
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_BASE_URL = "https://api.deutschebahn.com/timetables/v1"
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class AppConfig(BaseSettings):
    """Application configuration following 12-factor principles."""

    model_config = SettingsConfigDict(
        env_prefix="BAHN_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Timetable API configuration
    base_url: str = Field(default=DEFAULT_BASE_URL, description="Root URL of the timetable API")
    api_token: str | None = Field(
        default=None,
        description="Bearer token for the timetable API (read from token_file if not set)",
    )
    request_timeout: int = Field(
        default=30, description="Total timeout for timetable API requests in seconds"
    )

    # Local files
    config_dir: Path = Field(
        default=Path.home() / ".config" / "bahn",
        description="Directory holding the token file, route files and the response cache",
    )
    token_file: Path | None = Field(
        default=None, description="File containing the API token (default: <config_dir>/config)"
    )
    routes_dir: Path | None = Field(
        default=None, description="Directory route names are looked up in (default: <config_dir>/routes)"
    )
    cache_dir: Path | None = Field(
        default=None, description="Response cache directory (default: <config_dir>/cache)"
    )
    cache_max_age_hours: int = Field(
        default=24, description="Cached responses older than this are evicted"
    )

    # Time and logging
    timezone: str | None = Field(
        default=None,
        description="IANA timezone of timetable times (e.g. 'Europe/Berlin'); system zone if unset",
    )
    log_level: str = Field(default="WARNING", description="Log level for stderr logging")

    @field_validator("request_timeout", "cache_max_age_hours")
    @classmethod
    def validate_positive(cls, v: int) -> int:
        """Validate durations are positive."""
        if v <= 0:
            raise ValueError("value must be greater than 0")
        return v

    @field_validator("timezone")
    @classmethod
    def validate_timezone(cls, v: str | None) -> str | None:
        """Validate timezone is a known IANA zone."""
        if v is None or v == "":
            return None
        try:
            ZoneInfo(v)
        except (ZoneInfoNotFoundError, ValueError) as e:
            raise ValueError(f"Unknown timezone '{v}'") from e
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level is a standard logging level name."""
        if v.upper() not in LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(LOG_LEVELS)}")
        return v.upper()

    @model_validator(mode="after")
    def fill_paths_from_config_dir(self) -> "AppConfig":
        """Derive unset file locations from config_dir."""
        if self.token_file is None:
            self.token_file = self.config_dir / "config"
        if self.routes_dir is None:
            self.routes_dir = self.config_dir / "routes"
        if self.cache_dir is None:
            self.cache_dir = self.config_dir / "cache"
        return self

    @property
    def tzinfo(self) -> tzinfo | None:
        """Timezone of timetable times, None for the system zone."""
        return ZoneInfo(self.timezone) if self.timezone else None

    @property
    def cache_max_age(self) -> timedelta:
        """Maximum age of cached responses."""
        return timedelta(hours=self.cache_max_age_hours)

    @property
    def logging_level(self) -> int:
        """Numeric logging level."""
        return logging.getLevelName(self.log_level)

    def load_api_token(self) -> str:
        """Return the API token, reading the token file if it is not set directly.

        Raises:
            FileNotFoundError: If no token is configured and the token file is missing.
            ValueError: If the token is empty.
        """
        token = self.api_token
        if not token:
            token_path = Path(self.token_file or self.config_dir / "config")
            if not token_path.exists():
                raise FileNotFoundError(f"Token file not found: {token_path}")
            token = token_path.read_text(encoding="utf-8")

        token = token.strip()
        if not token:
            raise ValueError("API token is empty")
        return token
