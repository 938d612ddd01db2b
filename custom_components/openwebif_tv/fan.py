"""Fan entity exposing the box volume as speed."""

from __future__ import annotations

from typing import Any

from homeassistant.components.fan import FanEntity, FanEntityFeature
from homeassistant.config_entries import ConfigEntry
from homeassistant.core import HomeAssistant
from homeassistant.helpers.entity_platform import AddEntitiesCallback

from .const import DOMAIN, Capability, VolumeControl
from .coordinator import OpenWebIfCoordinator
from .device_config import DeviceConfig
from .entity import OpenWebIfEntity


async def async_setup_entry(
    hass: HomeAssistant,
    entry: ConfigEntry,
    async_add_entities: AddEntitiesCallback,
) -> None:
    data = hass.data[DOMAIN][entry.entry_id]
    device: DeviceConfig = data["device"]
    if device.volume_control is not VolumeControl.FAN:
        return

    async_add_entities([OpenWebIfVolumeFan(data["coordinator"], device)])


class OpenWebIfVolumeFan(OpenWebIfEntity, FanEntity):
    """Volume as fan speed; on means not muted."""

    _attr_translation_key = "volume"
    _attr_icon = "mdi:volume-high"
    _attr_supported_features = (
        FanEntityFeature.SET_SPEED
        | FanEntityFeature.TURN_ON
        | FanEntityFeature.TURN_OFF
    )

    def __init__(
        self, coordinator: OpenWebIfCoordinator, device: DeviceConfig
    ) -> None:
        super().__init__(coordinator, device, "volume_fan")

    @property
    def is_on(self) -> bool:
        return not self.session.get(Capability.MUTE)

    @property
    def percentage(self) -> int:
        return self.session.get(Capability.VOLUME)

    async def async_set_percentage(self, percentage: int) -> None:
        if percentage == 0:
            await self.async_turn_off()
            return

        await self.coordinator.async_set(Capability.VOLUME, percentage)

    async def async_turn_on(
        self,
        percentage: int | None = None,
        preset_mode: str | None = None,
        **kwargs: Any,
    ) -> None:
        if percentage:
            await self.coordinator.async_set(Capability.VOLUME, percentage)
        await self.coordinator.async_set(Capability.MUTE, False)

    async def async_turn_off(self, **kwargs: Any) -> None:
        await self.coordinator.async_set(Capability.MUTE, True)
