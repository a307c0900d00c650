# ABOUTME: Shared test fixtures for the skycast test suite.
# ABOUTME: Provides recording fakes for the location, weather, and history adapter contracts.

import asyncio
from datetime import datetime

import pytest

from skycast.errors import LocationUnavailableError, NoDataError
from skycast.models import CityCandidate, Coordinates, HistoryEntry, WeatherSnapshot


class FakeWeatherClient:
    """WeatherClient that records calls and returns canned results.

    A query listed in `search_gates` blocks until its event is set.
    """

    def __init__(self):
        self.snapshot: WeatherSnapshot | None = None
        self.fetch_error: Exception | None = None
        self.search_results: dict[str, list[CityCandidate]] = {}
        self.search_error: Exception | None = None
        self.search_gates: dict[str, asyncio.Event] = {}
        self.fetch_calls: list[tuple[float, float]] = []
        self.search_calls: list[str] = []

    async def fetch_weather(self, latitude: float, longitude: float) -> WeatherSnapshot:
        self.fetch_calls.append((latitude, longitude))
        if self.fetch_error is not None:
            raise self.fetch_error
        if self.snapshot is None:
            raise NoDataError()
        return self.snapshot

    async def search_cities(self, query: str) -> list[CityCandidate]:
        self.search_calls.append(query)
        gate = self.search_gates.get(query)
        if gate is not None:
            await gate.wait()
        if self.search_error is not None:
            raise self.search_error
        return self.search_results.get(query, [])


class FakeLocationSource:
    def __init__(self):
        self.coordinates: Coordinates | None = None
        self.error: Exception | None = None
        self.calls = 0

    async def get_current_location(self) -> Coordinates:
        self.calls += 1
        if self.error is not None:
            raise self.error
        if self.coordinates is None:
            raise LocationUnavailableError()
        return self.coordinates


class FakeHistoryStore:
    """HistoryStore that keeps entries in a list and counts calls. `error` makes every call raise."""

    def __init__(self, entries: list[HistoryEntry] | None = None):
        self.entries: list[HistoryEntry] = list(entries or [])
        self.error: Exception | None = None
        self.save_calls = 0
        self.load_calls = 0
        self.clear_calls = 0
        self.saved: list[list[HistoryEntry]] = []

    def save(self, entries: list[HistoryEntry]) -> None:
        self.save_calls += 1
        if self.error is not None:
            raise self.error
        self.entries = list(entries)
        self.saved.append(list(entries))

    def load(self) -> list[HistoryEntry]:
        self.load_calls += 1
        if self.error is not None:
            raise self.error
        return list(self.entries)

    def clear(self) -> None:
        self.clear_calls += 1
        if self.error is not None:
            raise self.error
        self.entries = []


class StateRecorder:
    """Listener that records (field, value) pairs published by an orchestrator."""

    def __init__(self):
        self.events: list[tuple[str, object]] = []

    def __call__(self, field: str, value: object) -> None:
        self.events.append((field, value))

    def values(self, field: str) -> list:
        return [value for name, value in self.events if name == field]


@pytest.fixture
def snapshot() -> WeatherSnapshot:
    return WeatherSnapshot(
        temperature=22.5,
        condition_code=0,
        wind_speed_kmh=15.3,
        humidity_pct=65,
        observed_at=datetime(2024, 1, 1, 12, 0),
    )


@pytest.fixture
def weather_client(snapshot) -> FakeWeatherClient:
    client = FakeWeatherClient()
    client.snapshot = snapshot
    return client


@pytest.fixture
def location_source() -> FakeLocationSource:
    source = FakeLocationSource()
    source.coordinates = Coordinates(latitude=40.7128, longitude=-74.0060)
    return source


@pytest.fixture
def history_store() -> FakeHistoryStore:
    return FakeHistoryStore()


@pytest.fixture
def recorder() -> StateRecorder:
    return StateRecorder()


@pytest.fixture
def london() -> CityCandidate:
    return CityCandidate(
        name="London",
        coordinates=Coordinates(latitude=51.5074, longitude=-0.1278),
        country="United Kingdom",
    )


@pytest.fixture
def new_york() -> CityCandidate:
    return CityCandidate(
        name="New York",
        coordinates=Coordinates(latitude=40.7128, longitude=-74.0060),
        country="United States",
        region="New York",
    )
