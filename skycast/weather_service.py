# ABOUTME: Service layer for Open-Meteo API calls and response parsing.
# ABOUTME: Fetches current conditions and geocodes city names, mapping failures onto NetworkError.

import math

import httpx
from pydantic import ValidationError

from skycast.config import FORECAST_URL, GEOCODING_URL
from skycast.errors import DecodingError, InvalidInputError, NoDataError, ServerError, TransportError
from skycast.models import CityCandidate, GeocodingResponse, WeatherResponse, WeatherSnapshot

CURRENT_PARAMS = "temperature_2m,relative_humidity_2m,weather_code,wind_speed_10m"

SEARCH_RESULT_COUNT = 10


async def fetch_current_weather(
    client: httpx.AsyncClient,
    latitude: float,
    longitude: float,
    url: str = FORECAST_URL,
) -> WeatherSnapshot:
    """Fetch current conditions for a position from the Open-Meteo forecast API."""
    _check_coordinates(latitude, longitude)
    data = await _get_json(
        client,
        url,
        params={
            "latitude": latitude,
            "longitude": longitude,
            "current": CURRENT_PARAMS,
            "timezone": "auto",
        },
    )
    try:
        return WeatherResponse.model_validate(data).to_snapshot()
    except ValidationError as e:
        raise DecodingError(e) from e


async def search_cities(client: httpx.AsyncClient, query: str, url: str = GEOCODING_URL) -> list[CityCandidate]:
    """Geocode a free-text city name into candidates using the Open-Meteo geocoding API."""
    if not query:
        return []

    data = await _get_json(
        client,
        url,
        params={"name": query, "count": SEARCH_RESULT_COUNT, "language": "en", "format": "json"},
    )
    try:
        response = GeocodingResponse.model_validate(data)
    except ValidationError as e:
        raise DecodingError(e) from e
    return [r.to_candidate() for r in response.results or []]


async def _get_json(client: httpx.AsyncClient, url: str, params: dict):
    """GET `url` and decode the JSON body, translating httpx failures into NetworkError."""
    try:
        resp = await client.get(url, params=params)
    except (httpx.InvalidURL, httpx.UnsupportedProtocol) as e:
        raise InvalidInputError(str(e)) from e
    except httpx.HTTPError as e:
        raise TransportError(e) from e

    if resp.status_code >= 400:
        raise ServerError(resp.status_code)
    if not resp.content:
        raise NoDataError()

    try:
        return resp.json()
    except ValueError as e:
        raise DecodingError(e) from e


def _check_coordinates(latitude: float, longitude: float) -> None:
    if not (math.isfinite(latitude) and math.isfinite(longitude)):
        raise InvalidInputError(f"non-finite coordinates ({latitude}, {longitude})")
    if not (-90.0 <= latitude <= 90.0 and -180.0 <= longitude <= 180.0):
        raise InvalidInputError(f"coordinates out of range ({latitude}, {longitude})")


class OpenMeteoWeatherClient:
    """WeatherClient backed by a shared httpx.AsyncClient."""

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        forecast_url: str = FORECAST_URL,
        geocoding_url: str = GEOCODING_URL,
    ):
        self.http_client = http_client
        self.forecast_url = forecast_url
        self.geocoding_url = geocoding_url

    async def fetch_weather(self, latitude: float, longitude: float) -> WeatherSnapshot:
        return await fetch_current_weather(self.http_client, latitude, longitude, self.forecast_url)

    async def search_cities(self, query: str) -> list[CityCandidate]:
        return await search_cities(self.http_client, query, self.geocoding_url)
