"""Validation of configured set-top boxes."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
import logging
from typing import Any

import voluptuous as vol

from .api import DeviceEndpoint, OpenWebIfConfigError
from .const import (
    CONF_AUTH,
    CONF_CHANNELS,
    CONF_FIRMWARE_REVISION,
    CONF_HOST,
    CONF_MANUFACTURER,
    CONF_MODEL,
    CONF_NAME,
    CONF_PASSWORD,
    CONF_PORT,
    CONF_REFERENCE,
    CONF_SERIAL_NUMBER,
    CONF_SWITCH_INFO_MENU,
    CONF_USERNAME,
    CONF_VOLUME_CONTROL,
    DEFAULT_FIRMWARE_REVISION,
    DEFAULT_MANUFACTURER,
    DEFAULT_MODEL,
    DEFAULT_PORT,
    DEFAULT_SERIAL_NUMBER,
    VolumeControl,
)

_LOGGER = logging.getLogger(__name__)

# Older configs use 0/1/2 for the volume control style.
_LEGACY_VOLUME_CONTROL = {
    0: VolumeControl.NONE,
    1: VolumeControl.LIGHT,
    2: VolumeControl.FAN,
}


def _volume_control(value: Any) -> VolumeControl:
    if isinstance(value, VolumeControl):
        return value

    if isinstance(value, int) and not isinstance(value, bool):
        if value in _LEGACY_VOLUME_CONTROL:
            return _LEGACY_VOLUME_CONTROL[value]
        raise vol.Invalid(f"Unknown volume control style: {value}")

    try:
        return VolumeControl(str(value).strip().lower())
    except ValueError as err:
        raise vol.Invalid(f"Unknown volume control style: {value}") from err


_TEXT = vol.All(vol.Coerce(str), vol.Strip, vol.Length(min=1))

CHANNEL_SCHEMA = vol.Schema(
    {
        vol.Required(CONF_NAME): _TEXT,
        vol.Required(CONF_REFERENCE): _TEXT,
    },
    extra=vol.REMOVE_EXTRA,
)

DEVICE_SCHEMA = vol.Schema(
    {
        vol.Required(CONF_NAME): _TEXT,
        vol.Required(CONF_HOST): _TEXT,
        vol.Optional(CONF_PORT, default=DEFAULT_PORT): vol.All(
            vol.Coerce(int), vol.Range(min=1, max=65535)
        ),
        vol.Optional(CONF_AUTH, default=False): vol.Boolean(),
        vol.Optional(CONF_USERNAME, default=""): vol.Coerce(str),
        vol.Optional(CONF_PASSWORD, default=""): vol.Coerce(str),
        vol.Optional(CONF_MANUFACTURER, default=DEFAULT_MANUFACTURER): _TEXT,
        vol.Optional(CONF_MODEL, default=DEFAULT_MODEL): _TEXT,
        vol.Optional(CONF_SERIAL_NUMBER, default=DEFAULT_SERIAL_NUMBER): _TEXT,
        vol.Optional(
            CONF_FIRMWARE_REVISION, default=DEFAULT_FIRMWARE_REVISION
        ): _TEXT,
        vol.Optional(
            CONF_VOLUME_CONTROL, default=VolumeControl.NONE
        ): _volume_control,
        vol.Optional(CONF_SWITCH_INFO_MENU, default=False): vol.Boolean(),
        vol.Optional(CONF_CHANNELS, default=list): vol.Any(
            None, [CHANNEL_SCHEMA]
        ),
    },
    extra=vol.REMOVE_EXTRA,
)


@dataclass(frozen=True)
class DeviceConfig:
    """A validated device descriptor."""

    name: str
    endpoint: DeviceEndpoint
    manufacturer: str = DEFAULT_MANUFACTURER
    model: str = DEFAULT_MODEL
    serial_number: str = DEFAULT_SERIAL_NUMBER
    firmware_revision: str = DEFAULT_FIRMWARE_REVISION
    volume_control: VolumeControl = VolumeControl.NONE
    switch_info_menu: bool = False
    channels: list[tuple[str, str]] = field(default_factory=list)

    @property
    def host(self) -> str:
        return self.endpoint.host

    @property
    def unique_id(self) -> str:
        return f"{self.endpoint.host}:{self.endpoint.port}"

    def as_entry_data(self) -> dict[str, Any]:
        """Return plain data suitable for a config entry."""

        return {
            CONF_NAME: self.name,
            CONF_HOST: self.endpoint.host,
            CONF_PORT: self.endpoint.port,
            CONF_AUTH: self.endpoint.use_auth,
            CONF_USERNAME: self.endpoint.username,
            CONF_PASSWORD: self.endpoint.password,
            CONF_MANUFACTURER: self.manufacturer,
            CONF_MODEL: self.model,
            CONF_SERIAL_NUMBER: self.serial_number,
            CONF_FIRMWARE_REVISION: self.firmware_revision,
            CONF_VOLUME_CONTROL: self.volume_control.value,
            CONF_SWITCH_INFO_MENU: self.switch_info_menu,
            CONF_CHANNELS: [
                {CONF_NAME: name, CONF_REFERENCE: reference}
                for reference, name in self.channels
            ],
        }


def parse_device_config(raw: Mapping[str, Any]) -> DeviceConfig:
    """Validate one device descriptor or raise OpenWebIfConfigError."""
    if not isinstance(raw, Mapping):
        raise OpenWebIfConfigError(f"Device entry is not a mapping: {raw!r}")

    try:
        data = DEVICE_SCHEMA(dict(raw))
    except vol.Invalid as err:
        name = raw.get(CONF_NAME) or raw.get(CONF_HOST) or "<unnamed>"
        raise OpenWebIfConfigError(f"Invalid device {name}: {err}") from err

    channels: list[tuple[str, str]] = []
    seen: set[str] = set()
    for channel in data[CONF_CHANNELS] or []:
        reference = channel[CONF_REFERENCE]
        if reference in seen:
            raise OpenWebIfConfigError(
                f"Invalid device {data[CONF_NAME]}: duplicate channel reference {reference}"
            )
        seen.add(reference)
        channels.append((reference, channel[CONF_NAME]))

    if data[CONF_AUTH] and not data[CONF_USERNAME]:
        raise OpenWebIfConfigError(
            f"Invalid device {data[CONF_NAME]}: auth enabled without a username"
        )

    return DeviceConfig(
        name=data[CONF_NAME],
        endpoint=DeviceEndpoint(
            host=data[CONF_HOST],
            port=data[CONF_PORT],
            use_auth=data[CONF_AUTH],
            username=data[CONF_USERNAME],
            password=data[CONF_PASSWORD],
        ),
        manufacturer=data[CONF_MANUFACTURER],
        model=data[CONF_MODEL],
        serial_number=data[CONF_SERIAL_NUMBER],
        firmware_revision=data[CONF_FIRMWARE_REVISION],
        volume_control=data[CONF_VOLUME_CONTROL],
        switch_info_menu=data[CONF_SWITCH_INFO_MENU],
        channels=channels,
    )


def parse_devices(raw_devices: Iterable[Any]) -> list[DeviceConfig]:
    """Validate a device list, skipping and logging invalid entries."""
    devices: list[DeviceConfig] = []
    for raw in raw_devices:
        try:
            devices.append(parse_device_config(raw))
        except OpenWebIfConfigError as err:
            _LOGGER.warning("Skipping device: %s", err)

    return devices
