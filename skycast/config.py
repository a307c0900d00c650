# ABOUTME: Runtime settings read from environment variables, with .env support via python-dotenv.
# ABOUTME: Covers endpoint URLs, HTTP timeout, search debounce window, and history file location.

import os

from dotenv import load_dotenv
from pydantic import BaseModel

FORECAST_URL = "https://api.open-meteo.com/v1/forecast"
GEOCODING_URL = "https://geocoding-api.open-meteo.com/v1/search"
SEARCH_DEBOUNCE_SECONDS = 0.5


class Settings(BaseModel):
    """Configuration for the HTTP client, search pipeline, and history store."""

    forecast_url: str = FORECAST_URL
    geocoding_url: str = GEOCODING_URL
    http_timeout: float = 10.0
    search_debounce_seconds: float = SEARCH_DEBOUNCE_SECONDS
    # None keeps history in memory for the lifetime of the process
    history_path: str | None = None


def load_settings(environ: dict[str, str] | None = None) -> Settings:
    """Build Settings from SKYCAST_* variables, loading a .env file first when reading os.environ."""
    if environ is None:
        load_dotenv()
        environ = dict(os.environ)

    return Settings(
        forecast_url=environ.get("SKYCAST_FORECAST_URL", FORECAST_URL),
        geocoding_url=environ.get("SKYCAST_GEOCODING_URL", GEOCODING_URL),
        http_timeout=environ.get("SKYCAST_HTTP_TIMEOUT", 10.0),
        search_debounce_seconds=environ.get("SKYCAST_SEARCH_DEBOUNCE", SEARCH_DEBOUNCE_SECONDS),
        history_path=environ.get("SKYCAST_HISTORY_PATH") or None,
    )
