"""Per-device state synchronization and command dispatch."""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable, Iterable
from dataclasses import dataclass
import logging
from typing import Any

from .api import (
    CachedState,
    DeviceInfo,
    DeviceStatus,
    OpenWebIfApi,
    OpenWebIfApiError,
)
from .const import (
    KEY_EXIT,
    KEY_INFO,
    KEY_MENU,
    KEY_VOLUME_DOWN,
    KEY_VOLUME_UP,
    POWER_OFF_CODE,
    POWER_ON_CODE,
    REMOTE_KEY_CODES,
    Capability,
    RemoteKey,
)
from .registry import ChannelRegistry
from .storage import PersistenceStore, StoreResult

_LOGGER = logging.getLogger(__name__)

CapabilityListener = Callable[[Capability, Any], None]

_TRACKED_FIELDS: tuple[tuple[Capability, str], ...] = (
    (Capability.POWER, "powered"),
    (Capability.ACTIVE_INPUT, "channel_identifier"),
    (Capability.VOLUME, "volume"),
    (Capability.MUTE, "muted"),
)


@dataclass(frozen=True)
class CapabilityHandler:
    """Get and set handlers for one capability."""

    get: Callable[[], Any] | None
    set: Callable[[Any], Awaitable[bool]] | None


class DeviceSession:
    """State and commands for one configured set-top box.

    The session starts offline. Each poll first tries to fetch the device
    metadata and service list; once that succeeds it tracks statusinfo on
    every poll and reports changed capabilities to its listeners.
    """

    def __init__(
        self,
        name: str,
        api: OpenWebIfApi,
        registry: ChannelRegistry,
        channel_cache: PersistenceStore,
        switch_info_menu: bool = False,
    ) -> None:
        self.name = name
        self.api = api
        self.registry = registry
        self._channel_cache = channel_cache
        self._switch_info_menu = switch_info_menu
        self._listeners: list[CapabilityListener] = []
        self._state = CachedState()
        self._device_info: DeviceInfo | None = None
        self._service_count = 0
        self._tracking = False
        self._polling = False
        self._info_menu_shown = False
        self.capabilities: dict[Capability, CapabilityHandler] = {
            Capability.POWER: CapabilityHandler(
                lambda: self._state.powered, self.async_set_power
            ),
            Capability.ACTIVE_INPUT: CapabilityHandler(
                lambda: self._state.channel_identifier, self.async_set_channel
            ),
            Capability.VOLUME: CapabilityHandler(
                lambda: self._state.volume, self.async_set_volume
            ),
            Capability.MUTE: CapabilityHandler(
                lambda: self._state.muted, self.async_set_mute
            ),
            Capability.VOLUME_SELECTOR: CapabilityHandler(
                None, self.async_volume_step
            ),
            Capability.REMOTE_KEY: CapabilityHandler(
                None, self.async_send_remote_key
            ),
            Capability.INFO_MENU: CapabilityHandler(
                lambda: self._info_menu_shown, self.async_set_info_menu
            ),
        }

    @classmethod
    async def async_create(
        cls,
        name: str,
        api: OpenWebIfApi,
        channels: Iterable[tuple[str, str]],
        names_store: PersistenceStore,
        channel_cache: PersistenceStore,
        switch_info_menu: bool = False,
    ) -> DeviceSession:
        """Load the channel registry off the event loop and build a session."""
        registry = await asyncio.to_thread(
            ChannelRegistry.load, names_store, list(channels)
        )

        return cls(name, api, registry, channel_cache, switch_info_menu)

    @property
    def host(self) -> str:
        return self.api.endpoint.host

    @property
    def state(self) -> CachedState:
        return self._state

    @property
    def device_info(self) -> DeviceInfo | None:
        return self._device_info

    @property
    def tracking(self) -> bool:
        """Return True once device info was fetched successfully."""

        return self._tracking

    @property
    def service_count(self) -> int:
        return self._service_count

    @property
    def info_menu_shown(self) -> bool:
        return self._info_menu_shown

    def add_listener(self, listener: CapabilityListener) -> Callable[[], None]:
        """Register a change listener; returns a callable that removes it."""
        self._listeners.append(listener)

        def _remove() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _remove

    def get(self, capability: Capability | str) -> Any:
        handler = self.capabilities[Capability(capability)]
        if handler.get is None:
            raise ValueError(f"Capability {capability} has no getter")

        return handler.get()

    async def async_set(self, capability: Capability | str, value: Any) -> bool:
        handler = self.capabilities[Capability(capability)]
        if handler.set is None:
            raise ValueError(f"Capability {capability} has no setter")

        return await handler.set(value)

    # Synchronizer

    async def async_poll(self) -> bool:
        """Run one polling tick; return True when state was refreshed.

        Never raises for device errors. A tick that starts while another
        is still running returns immediately.
        """
        if self._polling:
            _LOGGER.debug(
                "%s (%s): previous poll still running, skipping",
                self.name,
                self.host,
            )
            return False

        self._polling = True
        try:
            if not self._tracking and not await self._async_fetch_device_info():
                return False

            return await self._async_update_state()
        finally:
            self._polling = False

    async def _async_fetch_device_info(self) -> bool:
        _LOGGER.debug("%s (%s): requesting device information", self.name, self.host)
        try:
            services, raw_services = await self.api.async_get_services()
            info = await self.api.async_get_device_info()
        except OpenWebIfApiError as err:
            _LOGGER.error(
                "%s (%s): device info error: %s, state: Offline",
                self.name,
                self.host,
                err,
            )
            return False

        self._device_info = info
        self._service_count = len(services)
        self._tracking = True
        _LOGGER.info("%s (%s): state: Online", self.name, self.host)
        _LOGGER.info(
            "%s: manufacturer %s, model %s, kernel %s, chipset %s, "
            "webif %s, firmware %s, %s services",
            self.name,
            info.manufacturer,
            info.model,
            info.kernel,
            info.chipset,
            info.webif_version,
            info.firmware,
            self._service_count,
        )
        await self._async_cache_services(raw_services)

        return True

    async def _async_cache_services(self, raw_services: list[Any]) -> None:
        self._channel_cache.replace({"services": raw_services})
        result = await asyncio.to_thread(self._channel_cache.flush)
        if not result.ok:
            _LOGGER.error(
                "%s (%s): could not cache channel list: %s",
                self.name,
                self.host,
                result.error,
            )

    async def _async_update_state(self) -> bool:
        try:
            status = await self.api.async_get_status()
        except OpenWebIfApiError as err:
            _LOGGER.error(
                "%s (%s): update state error: %s, state: Offline",
                self.name,
                self.host,
                err,
            )
            return False

        previous = self._state
        self._state = self._reconcile(status)
        _LOGGER.debug(
            "%s (%s): power %s, channel %s (%s) %s, volume %s, mute %s",
            self.name,
            self.host,
            "ON" if self._state.powered else "OFF",
            status.channel_name,
            status.event_name,
            status.channel_reference,
            self._state.volume,
            "ON" if self._state.muted else "OFF",
        )
        for capability, field_name in _TRACKED_FIELDS:
            value = getattr(self._state, field_name)
            if value != getattr(previous, field_name):
                self._notify(capability, value)

        return True

    def _reconcile(self, status: DeviceStatus) -> CachedState:
        # A box in standby always reports as muted.
        muted = status.muted if status.powered else True

        return CachedState(
            powered=status.powered,
            muted=muted,
            volume=status.volume,
            channel_identifier=self.registry.index_of(status.channel_reference),
            channel_reference=status.channel_reference,
            channel_name=status.channel_name,
            event_name=status.event_name,
        )

    def _notify(self, capability: Capability, value: Any) -> None:
        for listener in list(self._listeners):
            listener(capability, value)

    # Dispatcher

    async def async_set_power(self, on: bool) -> bool:
        """Switch power when the requested state differs from the cached one."""
        on = bool(on)
        if on == self._state.powered:
            return False

        code = POWER_ON_CODE if on else POWER_OFF_CODE
        try:
            await self.api.async_set_power_state(code)
        except OpenWebIfApiError as err:
            _LOGGER.error(
                "%s (%s): can not set power state: %s",
                self.name,
                self.host,
                err,
            )
            raise

        _LOGGER.info(
            "%s (%s): set power state: %s", self.name, self.host, "ON" if on else "OFF"
        )

        return True

    async def async_set_mute(self, mute: bool) -> bool:
        """Toggle mute when powered and the requested state differs."""
        mute = bool(mute)
        if not self._state.powered or mute == self._state.muted:
            return False

        try:
            await self.api.async_toggle_mute()
        except OpenWebIfApiError as err:
            _LOGGER.error(
                "%s (%s): can not set mute: %s", self.name, self.host, err
            )
            raise

        _LOGGER.info(
            "%s (%s): set mute: %s", self.name, self.host, "ON" if mute else "OFF"
        )

        return True

    async def async_set_volume(self, level: int) -> bool:
        """Set an absolute volume; 0 and 100 fall back to the cached level."""
        if not self._state.powered:
            return False

        level = int(level)
        if level in (0, 100):
            level = self._state.volume

        try:
            await self.api.async_set_volume(level)
        except OpenWebIfApiError as err:
            _LOGGER.error(
                "%s (%s): can not set volume: %s", self.name, self.host, err
            )
            raise

        _LOGGER.info("%s (%s): set volume: %s", self.name, self.host, level)

        return True

    async def async_set_channel(self, identifier: int) -> bool:
        """Zap to a configured channel; invalid identifiers always raise."""
        entry = self.registry.get(int(identifier))
        if not self._state.powered:
            return False

        try:
            await self.api.async_zap(entry.reference)
        except OpenWebIfApiError as err:
            _LOGGER.error(
                "%s (%s): can not set channel: %s", self.name, self.host, err
            )
            raise

        _LOGGER.info(
            "%s (%s): set channel: %s %s",
            self.name,
            self.host,
            entry.display_name,
            entry.reference,
        )

        return True

    async def async_send_remote_key(self, key: RemoteKey | str) -> bool:
        key = RemoteKey(key)
        if key is RemoteKey.INFORMATION:
            code = KEY_INFO if self._switch_info_menu else KEY_MENU
        else:
            code = REMOTE_KEY_CODES[key]

        return await self._async_send_code(code, f"remote key {key}")

    async def async_volume_step(self, up: bool) -> bool:
        code = KEY_VOLUME_UP if up else KEY_VOLUME_DOWN

        return await self._async_send_code(code, "volume selector")

    async def async_set_info_menu(self, show: bool) -> bool:
        """Show or hide the info menu.

        Showing while the menu is already up sends exit instead, so repeated
        show requests alternate between opening and closing it.
        """
        if not self._state.powered:
            return False

        if show:
            if self._info_menu_shown:
                code = KEY_EXIT
            else:
                code = KEY_MENU if self._switch_info_menu else KEY_INFO
            self._info_menu_shown = not self._info_menu_shown
        else:
            code = KEY_EXIT

        return await self._async_send_code(code, "info menu")

    async def _async_send_code(self, code: str, what: str) -> bool:
        if not self._state.powered:
            return False

        try:
            await self.api.async_send_remote(code)
        except OpenWebIfApiError as err:
            _LOGGER.error(
                "%s (%s): can not send %s, command %s: %s",
                self.name,
                self.host,
                what,
                code,
                err,
            )
            return False

        _LOGGER.info(
            "%s (%s): sent %s, command %s", self.name, self.host, what, code
        )

        return True

    async def async_rename_channel(self, reference: str, name: str) -> StoreResult:
        """Rename a channel and persist the full name map."""
        result = await asyncio.to_thread(self.registry.rename, reference, name)
        if result.ok:
            _LOGGER.info(
                "%s (%s): saved channel name %s for %s",
                self.name,
                self.host,
                name,
                reference,
            )
        else:
            _LOGGER.error(
                "%s (%s): can not write channel name: %s",
                self.name,
                self.host,
                result.error,
            )

        return result
