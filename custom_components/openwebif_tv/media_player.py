"""Media player entity for OpenWebIf set-top boxes."""

from __future__ import annotations

import logging

from homeassistant.components.media_player import (
    MediaPlayerDeviceClass,
    MediaPlayerEntity,
    MediaPlayerEntityFeature,
    MediaPlayerState,
    MediaType,
)
from homeassistant.config_entries import ConfigEntry
from homeassistant.core import HomeAssistant
from homeassistant.exceptions import HomeAssistantError
from homeassistant.helpers.entity_platform import AddEntitiesCallback

from .const import DOMAIN, Capability
from .coordinator import OpenWebIfCoordinator
from .device_config import DeviceConfig
from .entity import OpenWebIfEntity

_LOGGER = logging.getLogger(__name__)

SUPPORTED_FEATURES = (
    MediaPlayerEntityFeature.TURN_ON
    | MediaPlayerEntityFeature.TURN_OFF
    | MediaPlayerEntityFeature.VOLUME_SET
    | MediaPlayerEntityFeature.VOLUME_STEP
    | MediaPlayerEntityFeature.VOLUME_MUTE
    | MediaPlayerEntityFeature.SELECT_SOURCE
)


async def async_setup_entry(
    hass: HomeAssistant,
    entry: ConfigEntry,
    async_add_entities: AddEntitiesCallback,
) -> None:
    """Set up the media player entity for the config entry."""
    data = hass.data[DOMAIN][entry.entry_id]
    async_add_entities(
        [OpenWebIfMediaPlayer(data["coordinator"], data["device"])]
    )


class OpenWebIfMediaPlayer(OpenWebIfEntity, MediaPlayerEntity):
    """Media player entity representing the set-top box."""

    _attr_name = None
    _attr_icon = "mdi:television-box"
    _attr_device_class = MediaPlayerDeviceClass.TV
    _attr_media_content_type = MediaType.CHANNEL
    _attr_supported_features = SUPPORTED_FEATURES

    def __init__(
        self, coordinator: OpenWebIfCoordinator, device: DeviceConfig
    ) -> None:
        super().__init__(coordinator, device, "media_player")

    @property
    def state(self) -> MediaPlayerState:
        """Return on or off from the cached power state."""
        if self.session.get(Capability.POWER):
            return MediaPlayerState.ON

        return MediaPlayerState.OFF

    @property
    def volume_level(self) -> float:
        return self.session.get(Capability.VOLUME) / 100

    @property
    def is_volume_muted(self) -> bool:
        return self.session.get(Capability.MUTE)

    @property
    def source(self) -> str:
        """Return the display name of the current channel."""
        identifier = self.session.get(Capability.ACTIVE_INPUT)

        return self.session.registry.get(identifier).display_name

    @property
    def source_list(self) -> list[str]:
        return self.session.registry.names

    @property
    def media_channel(self) -> str | None:
        return self.session.state.channel_name or None

    @property
    def media_title(self) -> str | None:
        """Return the event currently airing on the channel."""

        return self.session.state.event_name or None

    @property
    def extra_state_attributes(self) -> dict[str, str]:
        return {"channel_reference": self.session.state.channel_reference}

    async def async_turn_on(self) -> None:
        await self.coordinator.async_set(Capability.POWER, True)

    async def async_turn_off(self) -> None:
        await self.coordinator.async_set(Capability.POWER, False)

    async def async_set_volume_level(self, volume: float) -> None:
        """Set the volume from Home Assistant's 0..1 scale."""
        await self.coordinator.async_set(Capability.VOLUME, round(volume * 100))

    async def async_volume_up(self) -> None:
        await self.coordinator.async_set(Capability.VOLUME_SELECTOR, True)

    async def async_volume_down(self) -> None:
        await self.coordinator.async_set(Capability.VOLUME_SELECTOR, False)

    async def async_mute_volume(self, mute: bool) -> None:
        await self.coordinator.async_set(Capability.MUTE, mute)

    async def async_select_source(self, source: str) -> None:
        """Tune to a channel by its display name."""
        entry = self.session.registry.by_name(source)
        if entry is None:
            _LOGGER.warning("Unknown source requested: %s", source)
            raise HomeAssistantError(f"Unknown channel: {source}")

        await self.coordinator.async_set(Capability.ACTIVE_INPUT, entry.index)
