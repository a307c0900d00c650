# ABOUTME: View states shared by every orchestrator, plus the listener plumbing that publishes them.
# ABOUTME: ViewState is a tagged union of Idle, Loading, Loaded, and Failed; fetch failures map to Failed.

import logging
from collections.abc import Callable
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict

from skycast.errors import NetworkError
from skycast.models import Coordinates, WeatherSnapshot
from skycast.ports import WeatherClient

logger = logging.getLogger(__name__)

UNEXPECTED_ERROR_MESSAGE = "An unexpected error occurred."


class Idle(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["idle"] = "idle"


class Loading(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["loading"] = "loading"


class Loaded(BaseModel):
    """Weather is available for `city_name`.

    Two Loaded states are equal when their city names match, whatever the snapshot holds.
    """

    model_config = ConfigDict(frozen=True)

    kind: Literal["loaded"] = "loaded"
    city_name: str
    snapshot: WeatherSnapshot

    def __eq__(self, other):
        if not isinstance(other, Loaded):
            return NotImplemented
        return self.city_name == other.city_name

    def __hash__(self):
        return hash((self.kind, self.city_name))


class Failed(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["failed"] = "failed"
    message: str


ViewState = Idle | Loading | Loaded | Failed

IDLE = Idle()
LOADING = Loading()

Listener = Callable[[str, Any], None]


class StatePublisher:
    """Holds published attributes and notifies listeners on every assignment.

    Listeners run synchronously on the owning event loop, in registration order.
    """

    def __init__(self):
        self._listeners: list[Listener] = []
        self._state: ViewState = IDLE

    @property
    def state(self) -> ViewState:
        return self._state

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register `listener(field, value)` and return a callable that removes it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _set_state(self, state: ViewState) -> None:
        self._state = state
        self._publish("state", state)

    def _publish(self, field: str, value: Any) -> None:
        for listener in list(self._listeners):
            listener(field, value)


class WeatherOrchestrator(StatePublisher):
    """StatePublisher that drives the shared Loading -> Loaded/Failed weather flow."""

    def __init__(self, weather_client: WeatherClient):
        super().__init__()
        self.weather_client = weather_client

    def clear_weather(self) -> None:
        self._set_state(IDLE)

    async def _load_weather(self, coordinates: Coordinates, city_name: str) -> bool:
        """Fetch weather for `coordinates` and publish exactly one terminal state.

        The caller must already have published Loading. Returns True when the state is Loaded.
        """
        try:
            snapshot = await self.weather_client.fetch_weather(coordinates.latitude, coordinates.longitude)
        except NetworkError as e:
            logger.warning("Weather fetch for %s failed: %s", city_name, e)
            self._set_state(Failed(message=str(e)))
            return False
        except Exception:
            logger.exception("Unexpected error fetching weather for %s", city_name)
            self._set_state(Failed(message=UNEXPECTED_ERROR_MESSAGE))
            return False

        self._set_state(Loaded(city_name=city_name, snapshot=snapshot))
        return True
