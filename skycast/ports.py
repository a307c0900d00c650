# ABOUTME: Adapter contracts the orchestrators depend on: location, weather, and history storage.
# ABOUTME: Any object with matching methods satisfies a contract; tests swap in recording fakes.

from typing import Protocol, runtime_checkable

from skycast.models import CityCandidate, Coordinates, HistoryEntry, WeatherSnapshot


@runtime_checkable
class LocationSource(Protocol):
    async def get_current_location(self) -> Coordinates:
        """Resolve the device position.

        Raises PermissionDeniedError, LocationUnavailableError, or UnknownLocationError.
        """
        ...


@runtime_checkable
class WeatherClient(Protocol):
    async def fetch_weather(self, latitude: float, longitude: float) -> WeatherSnapshot:
        """Fetch current conditions for a position. Raises a NetworkError subclass on failure."""
        ...

    async def search_cities(self, query: str) -> list[CityCandidate]:
        """Return geocoding matches for `query`; an empty query returns [] without a request."""
        ...


@runtime_checkable
class HistoryStore(Protocol):
    def save(self, entries: list[HistoryEntry]) -> None:
        """Persist at most the first MAX_HISTORY_ENTRIES entries. Raises StorageError."""
        ...

    def load(self) -> list[HistoryEntry]:
        """Return persisted entries, most recent first, or [] when nothing is stored."""
        ...

    def clear(self) -> None: ...


@runtime_checkable
class KeyValueStore(Protocol):
    def get(self, key: str) -> str | None: ...

    def set(self, key: str, value: str) -> None: ...

    def delete(self, key: str) -> None: ...
