# ABOUTME: Bridges a callback-driven location sensor into an awaitable LocationSource.
# ABOUTME: Each request resolves exactly once on the owning event loop; extra sensor callbacks are dropped.

import asyncio
import enum
import logging
from collections.abc import Sequence
from typing import Protocol

from skycast.errors import (
    LocationError,
    LocationUnavailableError,
    PermissionDeniedError,
    UnknownLocationError,
)
from skycast.models import Coordinates

logger = logging.getLogger(__name__)


class AuthorizationStatus(enum.Enum):
    NOT_DETERMINED = "not_determined"
    RESTRICTED = "restricted"
    DENIED = "denied"
    AUTHORIZED_ALWAYS = "authorized_always"
    AUTHORIZED_WHEN_IN_USE = "authorized_when_in_use"


AUTHORIZED = frozenset({AuthorizationStatus.AUTHORIZED_ALWAYS, AuthorizationStatus.AUTHORIZED_WHEN_IN_USE})


def _consume_exception(future: asyncio.Future) -> None:
    if not future.cancelled():
        future.exception()


class LocationSensor(Protocol):
    """Platform positioning service. Results come back through CallbackLocationSource callbacks."""

    @property
    def authorization_status(self) -> AuthorizationStatus: ...

    def request_authorization(self) -> None: ...

    def request_location(self) -> None: ...


class CallbackLocationSource:
    """LocationSource that turns sensor callbacks into an awaited result.

    The sensor may call did_update_locations / did_fail from any thread. Concurrent
    callers of get_current_location share the pending request.
    """

    def __init__(self, sensor: LocationSensor):
        self.sensor = sensor
        self._pending: asyncio.Future | None = None
        self._loop: asyncio.AbstractEventLoop | None = None

    @property
    def authorization_status(self) -> AuthorizationStatus:
        return self.sensor.authorization_status

    def request_permission(self) -> None:
        self.sensor.request_authorization()

    async def get_current_location(self) -> Coordinates:
        status = self.sensor.authorization_status
        if status is AuthorizationStatus.NOT_DETERMINED:
            self.sensor.request_authorization()
            raise PermissionDeniedError()
        if status not in AUTHORIZED:
            raise PermissionDeniedError()

        if self._pending is None or self._pending.done():
            self._loop = asyncio.get_running_loop()
            self._pending = self._loop.create_future()
            # marks a late failure as retrieved when every waiter was cancelled
            self._pending.add_done_callback(_consume_exception)
            self.sensor.request_location()
        # shield so one cancelled caller does not cancel the fix for the others
        return await asyncio.shield(self._pending)

    def did_update_locations(self, locations: Sequence[Coordinates]) -> None:
        if locations:
            self._call_on_loop(self._resolve, locations[0], None)
        else:
            self._call_on_loop(self._resolve, None, LocationUnavailableError())

    def did_fail(self, error: BaseException) -> None:
        if isinstance(error, LocationError):
            mapped = error
        elif isinstance(error, PermissionError):
            mapped = PermissionDeniedError()
        else:
            mapped = UnknownLocationError(error)
        self._call_on_loop(self._resolve, None, mapped)

    def _call_on_loop(self, callback, *args) -> None:
        if self._loop is None or self._loop.is_closed():
            logger.debug("Dropping location callback with no pending request")
            return
        self._loop.call_soon_threadsafe(callback, *args)

    def _resolve(self, coordinates: Coordinates | None, error: LocationError | None) -> None:
        future = self._pending
        if future is None or future.done():
            logger.debug("Ignoring extra location callback")
            return
        if error is not None:
            future.set_exception(error)
        else:
            future.set_result(coordinates)
