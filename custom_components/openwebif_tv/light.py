"""Light entity exposing the box volume as brightness."""

from __future__ import annotations

from typing import Any

from homeassistant.components.light import ATTR_BRIGHTNESS, ColorMode, LightEntity
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
    if device.volume_control is not VolumeControl.LIGHT:
        return

    async_add_entities([OpenWebIfVolumeLight(data["coordinator"], device)])


def volume_to_brightness(volume: int) -> int:
    return round(volume * 255 / 100)


def brightness_to_volume(brightness: int) -> int:
    return round(brightness * 100 / 255)


class OpenWebIfVolumeLight(OpenWebIfEntity, LightEntity):
    """Volume as a dimmable light; on means not muted."""

    _attr_translation_key = "volume"
    _attr_icon = "mdi:volume-high"
    _attr_color_mode = ColorMode.BRIGHTNESS
    _attr_supported_color_modes = {ColorMode.BRIGHTNESS}

    def __init__(
        self, coordinator: OpenWebIfCoordinator, device: DeviceConfig
    ) -> None:
        super().__init__(coordinator, device, "volume_light")

    @property
    def is_on(self) -> bool:
        return not self.session.get(Capability.MUTE)

    @property
    def brightness(self) -> int:
        return volume_to_brightness(self.session.get(Capability.VOLUME))

    async def async_turn_on(self, **kwargs: Any) -> None:
        if ATTR_BRIGHTNESS in kwargs:
            await self.coordinator.async_set(
                Capability.VOLUME, brightness_to_volume(kwargs[ATTR_BRIGHTNESS])
            )
        await self.coordinator.async_set(Capability.MUTE, False)

    async def async_turn_off(self, **kwargs: Any) -> None:
        await self.coordinator.async_set(Capability.MUTE, True)
