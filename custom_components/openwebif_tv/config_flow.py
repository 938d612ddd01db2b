"""Config flow for the OpenWebIf TV integration."""

from __future__ import annotations

import logging
from typing import Any

import voluptuous as vol
from homeassistant import config_entries
from homeassistant.data_entry_flow import FlowResult
from homeassistant.helpers.aiohttp_client import async_get_clientsession

from .api import (
    OpenWebIfApi,
    OpenWebIfApiError,
    OpenWebIfAuthError,
    OpenWebIfConfigError,
    OpenWebIfConnectionError,
)
from .const import (
    CONF_AUTH,
    CONF_HOST,
    CONF_NAME,
    CONF_PASSWORD,
    CONF_PORT,
    CONF_SWITCH_INFO_MENU,
    CONF_USERNAME,
    CONF_VOLUME_CONTROL,
    DEFAULT_PORT,
    DOMAIN,
    VolumeControl,
)
from .device_config import DeviceConfig, parse_device_config
from .helpers import async_get_default_name

_LOGGER = logging.getLogger(__name__)


async def _validate_input(api: OpenWebIfApi, device: DeviceConfig) -> dict:
    """Check that the box answers and return the entry title."""
    await api.async_get_device_info()

    return {"title": device.name}


class ConfigFlow(config_entries.ConfigFlow, domain=DOMAIN):
    """Handle the initial configuration flow."""

    VERSION = 1

    async def async_step_user(
        self, user_input: dict | None = None
    ) -> FlowResult:
        """Handle the initial step from the UI."""
        errors: dict[str, str] = {}
        default_name = await async_get_default_name(
            self.hass, self.context.get("language")
        )

        if user_input is not None:
            try:
                device = parse_device_config(user_input)
            except OpenWebIfConfigError as err:
                _LOGGER.debug("Rejected device input: %s", err)
                errors["base"] = "invalid_config"
            else:
                await self.async_set_unique_id(device.unique_id)
                self._abort_if_unique_id_configured()

                api = OpenWebIfApi(
                    device.endpoint, async_get_clientsession(self.hass)
                )
                try:
                    info = await _validate_input(api, device)
                except OpenWebIfAuthError:
                    errors["base"] = "invalid_auth"
                except OpenWebIfConnectionError:
                    errors["base"] = "cannot_connect"
                except OpenWebIfApiError:
                    errors["base"] = "unknown"
                else:
                    return self.async_create_entry(
                        title=info["title"], data=device.as_entry_data()
                    )

        schema = vol.Schema(
            {
                vol.Required(CONF_HOST): str,
                vol.Optional(CONF_PORT, default=DEFAULT_PORT): int,
                vol.Optional(CONF_NAME, default=default_name): str,
                vol.Optional(CONF_AUTH, default=False): bool,
                vol.Optional(CONF_USERNAME, default=""): str,
                vol.Optional(CONF_PASSWORD, default=""): str,
                vol.Optional(
                    CONF_VOLUME_CONTROL, default=VolumeControl.NONE.value
                ): vol.In([style.value for style in VolumeControl]),
                vol.Optional(CONF_SWITCH_INFO_MENU, default=False): bool,
            }
        )

        return self.async_show_form(
            step_id="user", data_schema=schema, errors=errors
        )

    async def async_step_import(self, import_data: dict[str, Any]) -> FlowResult:
        """Create or update an entry from configuration.yaml.

        The box may be off at startup, so no connection check is made here.
        """
        try:
            device = parse_device_config(import_data)
        except OpenWebIfConfigError as err:
            _LOGGER.warning("Skipping imported device: %s", err)
            return self.async_abort(reason="invalid_config")

        data = device.as_entry_data()
        await self.async_set_unique_id(device.unique_id)
        self._abort_if_unique_id_configured(updates=data)

        return self.async_create_entry(title=device.name, data=data)
