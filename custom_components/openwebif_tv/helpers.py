"""Shared helper utilities for the OpenWebIf TV integration."""

from __future__ import annotations

from pathlib import Path

from homeassistant.core import HomeAssistant
from homeassistant.helpers.storage import STORAGE_DIR
from homeassistant.helpers.translation import async_get_translations

from .const import (
    CHANNELS_FILE_PREFIX,
    CUSTOM_CHANNELS_FILE_PREFIX,
    DEFAULT_NAME,
    DOMAIN,
)
from .storage import JsonFileStore


async def async_get_default_name(
    hass: HomeAssistant, language: str | None = None
) -> str:
    """Return the localized default name for this integration."""
    translations = await async_get_translations(
        hass,
        language or hass.config.language,
        "common",
        [DOMAIN],
    )
    return translations.get(
        f"component.{DOMAIN}.common.default_name", DEFAULT_NAME
    )


def storage_file_key(host: str) -> str:
    """Return the per-device file suffix, the host without dots."""

    return "".join(host.split("."))


def device_store_paths(storage_dir: Path, host: str) -> tuple[Path, Path]:
    """Return (rename map, channel cache) file paths for a host."""
    key = storage_file_key(host)

    return (
        storage_dir / f"{CUSTOM_CHANNELS_FILE_PREFIX}{key}.json",
        storage_dir / f"{CHANNELS_FILE_PREFIX}{key}.json",
    )


def device_stores(
    hass: HomeAssistant, host: str
) -> tuple[JsonFileStore, JsonFileStore]:
    """Return the rename map and channel cache stores for a host."""
    storage_dir = Path(hass.config.path(STORAGE_DIR))
    names_path, cache_path = device_store_paths(storage_dir, host)

    return JsonFileStore(names_path), JsonFileStore(cache_path)
