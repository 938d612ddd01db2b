"""Home Assistant integration bootstrap for OpenWebIf set-top boxes."""

from __future__ import annotations

import logging

import voluptuous as vol
from homeassistant.config_entries import SOURCE_IMPORT, ConfigEntry
from homeassistant.const import Platform
from homeassistant.core import HomeAssistant
from homeassistant.helpers import config_validation as cv
from homeassistant.helpers.aiohttp_client import async_get_clientsession
from homeassistant.helpers.typing import ConfigType

from .api import OpenWebIfApi, OpenWebIfConfigError
from .const import CONF_DEVICES, DOMAIN, PLATFORMS, VolumeControl
from .coordinator import OpenWebIfCoordinator
from .device_config import DeviceConfig, parse_device_config, parse_devices
from .helpers import device_stores
from .session import DeviceSession

_LOGGER = logging.getLogger(__name__)

# Devices are validated one by one in async_setup so a broken entry
# does not take the others down with it.
CONFIG_SCHEMA = vol.Schema(
    {
        DOMAIN: vol.Schema(
            {vol.Optional(CONF_DEVICES, default=list): cv.ensure_list},
            extra=vol.ALLOW_EXTRA,
        )
    },
    extra=vol.ALLOW_EXTRA,
)


def _platforms_for(device: DeviceConfig) -> list[Platform]:
    """Return the platforms needed for the configured volume control."""
    skipped = {Platform.LIGHT, Platform.FAN}
    if device.volume_control is VolumeControl.LIGHT:
        skipped.discard(Platform.LIGHT)
    elif device.volume_control is VolumeControl.FAN:
        skipped.discard(Platform.FAN)

    return [platform for platform in PLATFORMS if platform not in skipped]


async def async_setup(hass: HomeAssistant, config: ConfigType) -> bool:
    """Import devices listed in configuration.yaml."""
    conf = config.get(DOMAIN)
    if not conf:
        return True

    for device in parse_devices(conf.get(CONF_DEVICES) or []):
        hass.async_create_task(
            hass.config_entries.flow.async_init(
                DOMAIN,
                context={"source": SOURCE_IMPORT},
                data=device.as_entry_data(),
            )
        )

    return True


async def async_setup_entry(hass: HomeAssistant, entry: ConfigEntry) -> bool:
    """Set up one box from a config entry."""
    try:
        device = parse_device_config(entry.data)
    except OpenWebIfConfigError as err:
        _LOGGER.error("Not setting up %s: %s", entry.title, err)
        return False

    api = OpenWebIfApi(device.endpoint, async_get_clientsession(hass))
    names_store, channel_cache = device_stores(hass, device.host)
    session = await DeviceSession.async_create(
        device.name,
        api,
        device.channels,
        names_store,
        channel_cache,
        switch_info_menu=device.switch_info_menu,
    )
    coordinator = OpenWebIfCoordinator(hass, session)
    await coordinator.async_config_entry_first_refresh()

    hass.data.setdefault(DOMAIN, {})
    hass.data[DOMAIN][entry.entry_id] = {
        "device": device,
        "session": session,
        "coordinator": coordinator,
    }

    await hass.config_entries.async_forward_entry_setups(
        entry, _platforms_for(device)
    )

    return True


async def async_unload_entry(hass: HomeAssistant, entry: ConfigEntry) -> bool:
    """Unload the integration and clean up stored data."""
    data = hass.data.get(DOMAIN, {}).get(entry.entry_id)
    if data is None:
        return True

    unloaded = await hass.config_entries.async_unload_platforms(
        entry, _platforms_for(data["device"])
    )
    if unloaded:
        await data["coordinator"].async_shutdown()
        hass.data[DOMAIN].pop(entry.entry_id, None)

    return unloaded
