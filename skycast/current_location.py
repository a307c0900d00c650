# ABOUTME: Orchestrator for weather at the device's GPS position.
# ABOUTME: Resolves location, fetches weather, and raises a permission-prompt flag when access is denied.

import logging

from skycast.errors import LocationError, PermissionDeniedError
from skycast.ports import LocationSource, WeatherClient
from skycast.state import LOADING, UNEXPECTED_ERROR_MESSAGE, Failed, WeatherOrchestrator

logger = logging.getLogger(__name__)

CURRENT_LOCATION_NAME = "Current Location"


class CurrentLocationOrchestrator(WeatherOrchestrator):
    """Publishes `state` and `show_permission_prompt` for the current-location screen."""

    def __init__(self, weather_client: WeatherClient, location_source: LocationSource):
        super().__init__(weather_client)
        self.location_source = location_source
        self._show_permission_prompt = False

    @property
    def show_permission_prompt(self) -> bool:
        return self._show_permission_prompt

    def dismiss_permission_prompt(self) -> None:
        self._set_permission_prompt(False)

    async def fetch_current_location_weather(self) -> None:
        self._set_state(LOADING)

        try:
            coordinates = await self.location_source.get_current_location()
        except LocationError as e:
            logger.warning("Could not resolve current location: %s", e)
            if isinstance(e, PermissionDeniedError):
                self._set_permission_prompt(True)
            self._set_state(Failed(message=str(e)))
            return
        except Exception:
            logger.exception("Unexpected error resolving current location")
            self._set_state(Failed(message=UNEXPECTED_ERROR_MESSAGE))
            return

        await self._load_weather(coordinates, CURRENT_LOCATION_NAME)

    async def refresh(self) -> None:
        await self.fetch_current_location_weather()

    def _set_permission_prompt(self, value: bool) -> None:
        self._show_permission_prompt = value
        self._publish("show_permission_prompt", value)
