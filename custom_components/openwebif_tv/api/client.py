"""API client for the OpenWebIf web interface."""

from __future__ import annotations

import asyncio
import logging
from typing import Any

import aiohttp

from ..const import (
    DEFAULT_TIMEOUT,
    ENDPOINT_DEVICE_INFO,
    ENDPOINT_POWER_STATE,
    ENDPOINT_REMOTE_CONTROL,
    ENDPOINT_SERVICES,
    ENDPOINT_STATUS,
    ENDPOINT_VOLUME,
    ENDPOINT_ZAP,
)
from .errors import (
    OpenWebIfApiError,
    OpenWebIfAuthError,
    OpenWebIfConnectionError,
)
from .models import DeviceEndpoint, DeviceInfo, DeviceStatus, ServiceEntry
from .parsers import extract_services, parse_device_info, parse_services, parse_status

_LOGGER = logging.getLogger(__name__)


class OpenWebIfApi:
    """Async wrapper for the OpenWebIf HTTP JSON API."""

    def __init__(
        self,
        endpoint: DeviceEndpoint,
        session: aiohttp.ClientSession,
        timeout_s: float = DEFAULT_TIMEOUT,
    ) -> None:
        self._endpoint = endpoint
        self._session = session
        self._timeout_s = timeout_s
        self._timeout = aiohttp.ClientTimeout(total=timeout_s)

    @property
    def endpoint(self) -> DeviceEndpoint:
        """Return the endpoint this client talks to."""

        return self._endpoint

    async def async_get(
        self, path: str, params: dict[str, str] | None = None
    ) -> Any:
        """Issue one GET request and return the decoded JSON body."""
        url = f"{self._endpoint.base_url}{path}"
        _LOGGER.debug(
            "GET %s:%s%s %s",
            self._endpoint.host,
            self._endpoint.port,
            path,
            params or {},
        )
        try:
            async with self._session.get(
                url, params=params, timeout=self._timeout
            ) as response:
                response.raise_for_status()
                return await response.json(content_type=None)
        except asyncio.TimeoutError as err:
            raise OpenWebIfConnectionError(
                f"Timeout after {self._timeout_s}s requesting {path}"
            ) from err
        except aiohttp.ClientResponseError as err:
            if err.status == 401:
                raise OpenWebIfAuthError(
                    f"Unauthorized requesting {path}"
                ) from err
            raise OpenWebIfConnectionError(
                f"HTTP {err.status} requesting {path}"
            ) from err
        except aiohttp.ClientError as err:
            raise OpenWebIfConnectionError(str(err)) from err
        except ValueError as err:
            raise OpenWebIfApiError(
                f"Invalid JSON body from {path}: {err}"
            ) from err

    async def async_get_services(self) -> tuple[list[ServiceEntry], list[Any]]:
        """Return parsed services and the raw payload for caching."""
        raw = extract_services(await self.async_get(ENDPOINT_SERVICES))

        return parse_services(raw), raw

    async def async_get_device_info(self) -> DeviceInfo:
        return parse_device_info(await self.async_get(ENDPOINT_DEVICE_INFO))

    async def async_get_status(self) -> DeviceStatus:
        return parse_status(await self.async_get(ENDPOINT_STATUS))

    async def async_set_power_state(self, code: str) -> None:
        await self.async_get(ENDPOINT_POWER_STATE, {"newstate": code})

    async def async_zap(self, reference: str) -> None:
        await self.async_get(ENDPOINT_ZAP, {"sRef": reference})

    async def async_toggle_mute(self) -> None:
        """Toggle mute; the API has no absolute mute setter."""
        await self.async_get(ENDPOINT_VOLUME, {"set": "mute"})

    async def async_set_volume(self, level: int) -> None:
        await self.async_get(ENDPOINT_VOLUME, {"set": f"set{int(level)}"})

    async def async_send_remote(self, code: str) -> None:
        await self.async_get(ENDPOINT_REMOTE_CONTROL, {"command": code})
