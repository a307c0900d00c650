# ABOUTME: Dependency container wiring the adapters into orchestrators, using Pydantic BaseModel.
# ABOUTME: Builds the httpx.AsyncClient and the history store from Settings.

import httpx
from pydantic import BaseModel, ConfigDict

from skycast.config import SEARCH_DEBOUNCE_SECONDS, Settings
from skycast.current_location import CurrentLocationOrchestrator
from skycast.history import HistoryOrchestrator
from skycast.history_store import InMemoryKeyValueStore, JsonFileKeyValueStore, JsonHistoryStore
from skycast.ports import HistoryStore, LocationSource, WeatherClient
from skycast.search import SearchOrchestrator
from skycast.weather_service import OpenMeteoWeatherClient


class SkycastDeps(BaseModel):
    """Adapters shared by every orchestrator, plus the HTTP client that needs closing."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    weather_client: WeatherClient
    history_store: HistoryStore
    location_source: LocationSource
    search_debounce_seconds: float = SEARCH_DEBOUNCE_SECONDS
    http_client: httpx.AsyncClient | None = None

    def current_location(self) -> CurrentLocationOrchestrator:
        return CurrentLocationOrchestrator(self.weather_client, self.location_source)

    def search(self) -> SearchOrchestrator:
        return SearchOrchestrator(self.weather_client, self.history_store, self.search_debounce_seconds)

    def history(self) -> HistoryOrchestrator:
        return HistoryOrchestrator(self.weather_client, self.history_store)

    async def aclose(self) -> None:
        if self.http_client is not None:
            await self.http_client.aclose()


def create_http_client(settings: Settings) -> httpx.AsyncClient:
    """Create the httpx client for Open-Meteo. No retrying transport: callers retry by re-invoking."""
    return httpx.AsyncClient(timeout=settings.http_timeout)


def build_deps(settings: Settings, location_source: LocationSource) -> SkycastDeps:
    """Wire the Open-Meteo client and JSON history store described by `settings`."""
    http_client = create_http_client(settings)
    if settings.history_path:
        kv_store = JsonFileKeyValueStore(settings.history_path)
    else:
        kv_store = InMemoryKeyValueStore()

    return SkycastDeps(
        weather_client=OpenMeteoWeatherClient(http_client, settings.forecast_url, settings.geocoding_url),
        history_store=JsonHistoryStore(kv_store),
        location_source=location_source,
        search_debounce_seconds=settings.search_debounce_seconds,
        http_client=http_client,
    )
