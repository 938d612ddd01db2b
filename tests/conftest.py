from __future__ import annotations

import asyncio
from typing import Any

import aiohttp
import pytest

from custom_components.openwebif_tv.api import (
    DeviceEndpoint,
    DeviceInfo,
    DeviceStatus,
    OpenWebIfConnectionError,
    ServiceEntry,
)
from custom_components.openwebif_tv.registry import ChannelRegistry
from custom_components.openwebif_tv.session import DeviceSession
from custom_components.openwebif_tv.storage import MemoryStore


class FakeResponse:
    def __init__(self, body: Any = None, status: int = 200) -> None:
        self.body = body
        self.status = status

    def raise_for_status(self) -> None:
        if self.status >= 400:
            raise aiohttp.ClientResponseError(
                None, (), status=self.status, message="error"
            )

    async def json(self, content_type: str | None = "application/json") -> Any:
        if isinstance(self.body, Exception):
            raise self.body
        return self.body


class _RequestContext:
    def __init__(self, outcome: Any) -> None:
        self._outcome = outcome

    async def __aenter__(self) -> FakeResponse:
        if isinstance(self._outcome, BaseException):
            raise self._outcome
        return self._outcome

    async def __aexit__(self, *exc_info: Any) -> None:
        return None


class FakeClientSession:
    """Stand-in for aiohttp.ClientSession.get with canned outcomes per path."""

    def __init__(self) -> None:
        self.outcomes: dict[str, Any] = {}
        self.calls: list[tuple[str, dict[str, str] | None]] = []

    def get(self, url: str, params=None, timeout=None) -> _RequestContext:
        self.calls.append((url, params))
        path = "/" + url.split("/", 3)[3]
        return _RequestContext(self.outcomes.get(path, FakeResponse({})))


class FakeApi:
    """Records commands and returns canned device responses."""

    def __init__(self) -> None:
        self.endpoint = DeviceEndpoint(host="192.168.1.10")
        self.calls: list[tuple[str, Any]] = []
        self.services: list[dict[str, Any]] = [
            {"servicereference": "ref1", "servicename": "One"},
        ]
        self.info = DeviceInfo(
            manufacturer="Vu+",
            model="Uno 4K",
            webif_version="1.4.9",
            firmware="2024-01-01",
            kernel="4.1.20",
            chipset="bcm7252s",
        )
        self.info_error: Exception | None = None
        self.status: DeviceStatus | Exception = make_status()
        self.command_error: Exception | None = None

    async def async_get_services(self):
        self.calls.append(("services", None))
        if self.info_error is not None:
            raise self.info_error
        entries = [
            ServiceEntry(item["servicereference"], item["servicename"])
            for item in self.services
        ]
        return entries, self.services

    async def async_get_device_info(self) -> DeviceInfo:
        self.calls.append(("deviceinfo", None))
        if self.info_error is not None:
            raise self.info_error
        return self.info

    async def async_get_status(self) -> DeviceStatus:
        self.calls.append(("statusinfo", None))
        if isinstance(self.status, Exception):
            raise self.status
        return self.status

    async def _command(self, name: str, value: Any = None) -> None:
        self.calls.append((name, value))
        if self.command_error is not None:
            raise self.command_error

    async def async_set_power_state(self, code: str) -> None:
        await self._command("powerstate", code)

    async def async_zap(self, reference: str) -> None:
        await self._command("zap", reference)

    async def async_toggle_mute(self) -> None:
        await self._command("mute")

    async def async_set_volume(self, level: int) -> None:
        await self._command("volume", level)

    async def async_send_remote(self, code: str) -> None:
        await self._command("remote", code)

    def commands(self) -> list[tuple[str, Any]]:
        polls = {"services", "deviceinfo", "statusinfo"}
        return [call for call in self.calls if call[0] not in polls]


def make_status(
    powered: bool = True,
    reference: str = "ref1",
    muted: bool = False,
    volume: int = 30,
) -> DeviceStatus:
    return DeviceStatus(
        powered=powered,
        channel_name="Channel",
        event_name="News",
        channel_reference=reference,
        muted=muted,
        volume=volume,
    )


CHANNELS = [
    ("ref1", "One"),
    ("ref2", "Two"),
    ("ref3", "Three"),
    ("ref4", "Four"),
    ("ref5", "Five"),
]


def run(coro):
    loop = asyncio.new_event_loop()
    try:
        return loop.run_until_complete(coro)
    finally:
        loop.close()


def build_session(
    api: FakeApi | None = None,
    channels=CHANNELS,
    switch_info_menu: bool = False,
) -> DeviceSession:
    api = api or FakeApi()
    registry = ChannelRegistry.load(MemoryStore(), channels)
    return DeviceSession(
        "Living Room",
        api,
        registry,
        MemoryStore(),
        switch_info_menu=switch_info_menu,
    )


def tracking_session(**kwargs: Any) -> DeviceSession:
    """Return a session that completed one successful poll."""
    session = build_session(**kwargs)
    assert run(session.async_poll()) is True
    session.api.calls.clear()
    return session


@pytest.fixture
def fake_api() -> FakeApi:
    return FakeApi()


@pytest.fixture
def client_session() -> FakeClientSession:
    return FakeClientSession()


@pytest.fixture
def connection_error() -> OpenWebIfConnectionError:
    return OpenWebIfConnectionError("connection refused")
