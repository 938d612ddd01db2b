"""Text entities holding user-chosen channel names."""

from __future__ import annotations

from homeassistant.components.text import TextEntity
from homeassistant.config_entries import ConfigEntry
from homeassistant.const import EntityCategory
from homeassistant.core import HomeAssistant
from homeassistant.exceptions import HomeAssistantError
from homeassistant.helpers.entity_platform import AddEntitiesCallback

from .api import ChannelEntry
from .const import DOMAIN
from .coordinator import OpenWebIfCoordinator
from .device_config import DeviceConfig
from .entity import OpenWebIfEntity


async def async_setup_entry(
    hass: HomeAssistant,
    entry: ConfigEntry,
    async_add_entities: AddEntitiesCallback,
) -> None:
    """Set up one name entity per configured channel."""
    data = hass.data[DOMAIN][entry.entry_id]
    coordinator: OpenWebIfCoordinator = data["coordinator"]
    async_add_entities(
        OpenWebIfChannelName(coordinator, data["device"], channel)
        for channel in coordinator.session.registry
    )


class OpenWebIfChannelName(OpenWebIfEntity, TextEntity):
    """Configured name of one channel; renames persist to the name store."""

    _attr_entity_category = EntityCategory.CONFIG
    _attr_icon = "mdi:rename"
    _attr_native_min = 1

    def __init__(
        self,
        coordinator: OpenWebIfCoordinator,
        device: DeviceConfig,
        channel: ChannelEntry,
    ) -> None:
        super().__init__(coordinator, device, f"channel_{channel.reference}")
        self._channel = channel
        self._attr_name = f"{channel.default_name} name"

    @property
    def available(self) -> bool:
        # Renames only touch local storage.
        return True

    @property
    def native_value(self) -> str:
        return self._channel.display_name

    async def async_set_value(self, value: str) -> None:
        name = value.strip()
        if not name:
            raise HomeAssistantError("Channel name can not be empty")

        if name == self._channel.display_name:
            return

        # A failed write is logged by the session; the new name still applies.
        await self.session.async_rename_channel(self._channel.reference, name)
        self.coordinator.async_update_listeners()
