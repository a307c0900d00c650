# ABOUTME: Orchestrator for search-as-you-type city lookup and weather for a chosen city.
# ABOUTME: Debounces queries, drops stale results by generation token, and records successful lookups.

import asyncio
import logging

from skycast.config import SEARCH_DEBOUNCE_SECONDS
from skycast.errors import NetworkError, StorageError
from skycast.models import MAX_HISTORY_ENTRIES, CityCandidate, HistoryEntry
from skycast.ports import HistoryStore, WeatherClient
from skycast.state import LOADING, WeatherOrchestrator

logger = logging.getLogger(__name__)


class SearchOrchestrator(WeatherOrchestrator):
    """Publishes `candidates`, `is_searching`, and the weather `state` for the search screen.

    Assigning `query` drives the pipeline:

    - an empty query cancels everything and clears candidates immediately;
    - any other query waits out the debounce window, is skipped if it equals the last
      debounced query, and otherwise supersedes whatever search is still running.

    Every search takes a fresh generation number and only applies its results while that
    number is still current. Non-empty queries must be set from the owning event loop.
    """

    def __init__(
        self,
        weather_client: WeatherClient,
        history_store: HistoryStore,
        debounce_seconds: float = SEARCH_DEBOUNCE_SECONDS,
    ):
        super().__init__(weather_client)
        self.history_store = history_store
        self.debounce_seconds = debounce_seconds
        self._query = ""
        self._candidates: list[CityCandidate] = []
        self._is_searching = False
        self._generation = 0
        self._last_debounced_query: str | None = None
        self._debounce_task: asyncio.Task | None = None
        self._search_task: asyncio.Task | None = None

    @property
    def query(self) -> str:
        return self._query

    @query.setter
    def query(self, value: str) -> None:
        self._query = value
        self._cancel_debounce()

        if not value:
            self._cancel_search()
            self._last_debounced_query = ""
            self._set_results([], searching=False)
            return

        self._debounce_task = asyncio.get_running_loop().create_task(self._debounce(value))

    @property
    def candidates(self) -> list[CityCandidate]:
        return list(self._candidates)

    @property
    def is_searching(self) -> bool:
        return self._is_searching

    async def wait_until_settled(self) -> None:
        """Wait until no debounce is pending and no search is in flight."""
        while True:
            task = self._debounce_task or self._search_task
            if task is None:
                return
            await asyncio.wait({task})
            # a finished task that never cleared itself was superseded or failed outright
            if task is self._debounce_task:
                self._debounce_task = None
            elif task is self._search_task:
                self._search_task = None

    def close(self) -> None:
        """Cancel pending work without touching published state."""
        self._cancel_debounce()
        self._cancel_search()

    async def fetch_weather(self, candidate: CityCandidate) -> None:
        self._set_state(LOADING)
        if await self._load_weather(candidate.coordinates, candidate.display_name):
            self._save_to_history(candidate)

    async def _debounce(self, query: str) -> None:
        await asyncio.sleep(self.debounce_seconds)
        self._debounce_task = None
        if query == self._last_debounced_query:
            logger.debug("Skipping duplicate query %r", query)
            return
        self._last_debounced_query = query
        self._start_search(query)

    def _start_search(self, query: str) -> None:
        self._cancel_search()
        generation = self._generation
        self._set_searching(True)
        self._search_task = asyncio.get_running_loop().create_task(self._run_search(query, generation))

    async def _run_search(self, query: str, generation: int) -> None:
        try:
            results = await self.weather_client.search_cities(query)
        except NetworkError as e:
            logger.warning("City search for %r failed: %s", query, e)
            results = []
        except Exception:
            logger.exception("Unexpected error searching for %r", query)
            results = []

        if generation != self._generation:
            logger.debug("Discarding stale results for %r", query)
            return

        self._search_task = None
        self._set_results(results, searching=False)

    def _cancel_debounce(self) -> None:
        if self._debounce_task is not None:
            self._debounce_task.cancel()
            self._debounce_task = None

    def _cancel_search(self) -> None:
        # bumping the generation is what keeps a cancelled search from landing
        self._generation += 1
        if self._search_task is not None:
            self._search_task.cancel()
            self._search_task = None

    def _set_results(self, results: list[CityCandidate], searching: bool) -> None:
        self._candidates = list(results)
        self._publish("candidates", self.candidates)
        self._set_searching(searching)

    def _set_searching(self, value: bool) -> None:
        self._is_searching = value
        self._publish("is_searching", value)

    def _save_to_history(self, candidate: CityCandidate) -> None:
        city_name = candidate.display_name
        try:
            history = self.history_store.load()
            history = [entry for entry in history if entry.city_name != city_name]
            history.insert(0, HistoryEntry(city_name=city_name, coordinates=candidate.coordinates))
            self.history_store.save(history[:MAX_HISTORY_ENTRIES])
        except StorageError:
            logger.exception("Failed to save %s to search history", city_name)
