"""Data update coordinator for OpenWebIf set-top boxes."""

from __future__ import annotations

from datetime import timedelta
import logging
from typing import Any

from homeassistant.core import HomeAssistant
from homeassistant.exceptions import HomeAssistantError
from homeassistant.helpers.update_coordinator import (
    DataUpdateCoordinator,
    UpdateFailed,
)

from .api import CachedState, OpenWebIfError
from .const import DEFAULT_POLL_INTERVAL, DOMAIN, Capability
from .session import DeviceSession

_LOGGER = logging.getLogger(__name__)


class OpenWebIfCoordinator(DataUpdateCoordinator[CachedState]):
    """Coordinator that polls one box through its session.

    Listeners only run when the cached state actually changed, so a
    failed poll (which keeps the previous state) writes nothing.
    """

    def __init__(self, hass: HomeAssistant, session: DeviceSession) -> None:
        super().__init__(
            hass,
            logger=_LOGGER,
            name=f"{DOMAIN}_{session.host}",
            update_interval=timedelta(seconds=DEFAULT_POLL_INTERVAL),
            always_update=False,
        )
        self.session = session
        self.last_changes: dict[Capability, Any] = {}
        self._remove_listener = session.add_listener(self._capability_changed)

    def _capability_changed(self, capability: Capability, value: Any) -> None:
        _LOGGER.debug(
            "%s (%s): %s changed to %s",
            self.session.name,
            self.session.host,
            capability,
            value,
        )
        self.last_changes[capability] = value

    async def _async_update_data(self) -> CachedState:
        """Run one session poll and return the cached state.

        Availability follows the session's tracking flag, which can flip
        without any change to the cached state, so listeners are told
        directly when it does.
        """
        was_tracking = self.session.tracking
        try:
            await self.session.async_poll()
        except Exception as err:  # noqa: BLE001
            raise UpdateFailed(str(err)) from err

        if self.session.tracking != was_tracking:
            self.async_update_listeners()

        return self.session.state

    async def async_set(self, capability: Capability, value: Any) -> None:
        """Dispatch a set handler and refresh when a command was sent."""
        try:
            sent = await self.session.async_set(capability, value)
        except OpenWebIfError as err:
            raise HomeAssistantError(
                f"{self.session.name}: can not set {capability}: {err}"
            ) from err

        if sent:
            await self.async_request_refresh()

    async def async_shutdown(self) -> None:
        """Detach from the session and stop polling."""
        self._remove_listener()
        await super().async_shutdown()
