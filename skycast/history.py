# ABOUTME: Orchestrator for the search history screen: list, delete, clear, and replay past lookups.
# ABOUTME: Storage failures are logged and the in-memory list stays authoritative for the session.

import logging
from uuid import UUID

from skycast.errors import StorageError
from skycast.models import HistoryEntry
from skycast.ports import HistoryStore, WeatherClient
from skycast.state import LOADING, WeatherOrchestrator

logger = logging.getLogger(__name__)


class HistoryOrchestrator(WeatherOrchestrator):
    """Publishes `entries` and the weather `state`. History is loaded on construction."""

    def __init__(self, weather_client: WeatherClient, history_store: HistoryStore):
        super().__init__(weather_client)
        self.history_store = history_store
        self._entries: list[HistoryEntry] = []
        self.load_history()

    @property
    def entries(self) -> list[HistoryEntry]:
        return list(self._entries)

    def load_history(self) -> None:
        try:
            entries = self.history_store.load()
        except StorageError:
            logger.exception("Failed to load search history")
            entries = []
        self._set_entries(entries)

    def delete_item(self, entry_id: UUID) -> None:
        self._set_entries([entry for entry in self._entries if entry.id != entry_id])
        try:
            self.history_store.save(self.entries)
        except StorageError:
            logger.exception("Failed to save search history")

    def clear_all_history(self) -> None:
        self._set_entries([])
        try:
            self.history_store.clear()
        except StorageError:
            logger.exception("Failed to clear search history")

    async def fetch_weather(self, entry: HistoryEntry) -> None:
        """Replay a past lookup. Never writes back to history."""
        self._set_state(LOADING)
        await self._load_weather(entry.coordinates, entry.city_name)

    def _set_entries(self, entries: list[HistoryEntry]) -> None:
        self._entries = list(entries)
        self._publish("entries", self.entries)
