"""Remote entity sending key presses to OpenWebIf set-top boxes."""

from __future__ import annotations

from collections.abc import Iterable
import logging
from typing import Any

from homeassistant.components.remote import (
    ATTR_NUM_REPEATS,
    DEFAULT_NUM_REPEATS,
    RemoteEntity,
)
from homeassistant.config_entries import ConfigEntry
from homeassistant.core import HomeAssistant
from homeassistant.exceptions import HomeAssistantError
from homeassistant.helpers.entity_platform import AddEntitiesCallback

from .const import (
    COMMAND_INFO_MENU_HIDE,
    COMMAND_INFO_MENU_SHOW,
    COMMAND_VOLUME_DOWN,
    COMMAND_VOLUME_UP,
    DOMAIN,
    REMOTE_COMMANDS,
    REMOTE_KEYS,
    Capability,
)
from .coordinator import OpenWebIfCoordinator
from .device_config import DeviceConfig
from .entity import OpenWebIfEntity

_LOGGER = logging.getLogger(__name__)

_SPECIAL_COMMANDS: dict[str, tuple[Capability, bool]] = {
    COMMAND_INFO_MENU_SHOW: (Capability.INFO_MENU, True),
    COMMAND_INFO_MENU_HIDE: (Capability.INFO_MENU, False),
    COMMAND_VOLUME_UP: (Capability.VOLUME_SELECTOR, True),
    COMMAND_VOLUME_DOWN: (Capability.VOLUME_SELECTOR, False),
}


def resolve_command(command: str) -> tuple[Capability, Any]:
    """Map a remote command name to a capability and value."""
    name = str(command).strip().lower()
    if name in REMOTE_KEYS:
        return Capability.REMOTE_KEY, name

    if name in _SPECIAL_COMMANDS:
        return _SPECIAL_COMMANDS[name]

    raise HomeAssistantError(f"Unsupported command: {command}")


async def async_setup_entry(
    hass: HomeAssistant,
    entry: ConfigEntry,
    async_add_entities: AddEntitiesCallback,
) -> None:
    """Set up the remote entity for the config entry."""
    data = hass.data[DOMAIN][entry.entry_id]
    async_add_entities([OpenWebIfRemote(data["coordinator"], data["device"])])


class OpenWebIfRemote(OpenWebIfEntity, RemoteEntity):
    """Remote control for the box's keys and info menu."""

    _attr_translation_key = "remote"
    _attr_icon = "mdi:remote"

    def __init__(
        self, coordinator: OpenWebIfCoordinator, device: DeviceConfig
    ) -> None:
        super().__init__(coordinator, device, "remote")

    @property
    def is_on(self) -> bool:
        return self.session.get(Capability.POWER)

    @property
    def extra_state_attributes(self) -> dict[str, Any]:
        """Expose the commands and the info menu state."""

        return {
            "remote_commands": REMOTE_COMMANDS,
            "info_menu_shown": self.session.get(Capability.INFO_MENU),
        }

    async def async_turn_on(self, **kwargs: Any) -> None:
        await self.coordinator.async_set(Capability.POWER, True)

    async def async_turn_off(self, **kwargs: Any) -> None:
        await self.coordinator.async_set(Capability.POWER, False)

    async def async_send_command(self, command: Iterable[str], **kwargs: Any) -> None:
        """Send each command, repeated num_repeats times."""
        resolved = [resolve_command(item) for item in command]
        repeats = int(kwargs.get(ATTR_NUM_REPEATS, DEFAULT_NUM_REPEATS))
        for _ in range(repeats):
            for capability, value in resolved:
                sent = await self.session.async_set(capability, value)
                if not sent:
                    _LOGGER.debug(
                        "%s: %s %s not sent", self.session.name, capability, value
                    )

        self.async_write_ha_state()
