"""Diagnostics support for the OpenWebIf TV integration."""

from __future__ import annotations

from dataclasses import asdict
from datetime import datetime
from typing import Any

from homeassistant.components.diagnostics import async_redact_data
from homeassistant.config_entries import ConfigEntry
from homeassistant.core import HomeAssistant

from .const import CONF_PASSWORD, CONF_USERNAME, DOMAIN

REDACT_KEYS = {
    CONF_USERNAME,
    CONF_PASSWORD,
}


def _serialize_datetime(value: datetime | None) -> str | None:
    if value is None:
        return None

    return value.isoformat()


def _session_to_dict(session: Any) -> dict[str, Any]:
    if session is None:
        return {}

    info = session.device_info

    return {
        "name": session.name,
        "host": session.host,
        "tracking": session.tracking,
        "state": asdict(session.state),
        "device_info": asdict(info) if info is not None else None,
        "service_count": session.service_count,
        "info_menu_shown": session.info_menu_shown,
        "channels": [asdict(channel) for channel in session.registry],
    }


async def async_get_config_entry_diagnostics(
    hass: HomeAssistant, entry: ConfigEntry
) -> dict[str, Any]:
    """Return diagnostics for a config entry."""
    data = hass.data.get(DOMAIN, {}).get(entry.entry_id, {})
    coordinator = data.get("coordinator")
    session = data.get("session")

    diagnostics: dict[str, Any] = {
        "entry": {
            "data": dict(entry.data),
            "options": dict(entry.options),
        },
        "coordinator": {
            "last_update_success": getattr(
                coordinator, "last_update_success", None
            ),
            "last_update_success_time": _serialize_datetime(
                getattr(coordinator, "last_update_success_time", None)
            ),
            "update_interval_seconds": getattr(
                getattr(coordinator, "update_interval", None),
                "total_seconds",
                lambda: None,
            )(),
            "last_changes": {
                str(capability): value
                for capability, value in (
                    getattr(coordinator, "last_changes", None) or {}
                ).items()
            },
        },
        "session": _session_to_dict(session),
    }

    return async_redact_data(diagnostics, REDACT_KEYS)
