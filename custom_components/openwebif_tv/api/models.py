"""Data models for the OpenWebIf API client."""

from __future__ import annotations

from dataclasses import dataclass
from urllib.parse import quote


@dataclass(frozen=True)
class DeviceEndpoint:
    """Connection details for one set-top box."""

    host: str
    port: int = 80
    use_auth: bool = False
    username: str = ""
    password: str = ""

    @property
    def base_url(self) -> str:
        """Return the base URL, with credentials embedded when auth is on."""
        if self.use_auth:
            credentials = f"{quote(self.username, safe='')}:{quote(self.password, safe='')}"
            return f"http://{credentials}@{self.host}:{self.port}"

        return f"http://{self.host}:{self.port}"


@dataclass(frozen=True)
class DeviceStatus:
    """Snapshot of the box state returned by statusinfo."""

    powered: bool
    channel_name: str
    event_name: str
    channel_reference: str
    muted: bool
    volume: int


@dataclass(frozen=True)
class DeviceInfo:
    """Static device metadata returned by deviceinfo."""

    manufacturer: str | None
    model: str | None
    webif_version: str | None
    firmware: str | None
    kernel: str | None
    chipset: str | None


@dataclass(frozen=True)
class ServiceEntry:
    """A tunable service from the device's full service list."""

    reference: str
    name: str


@dataclass
class ChannelEntry:
    """A configured channel and its display name."""

    reference: str
    default_name: str
    display_name: str
    index: int


@dataclass(frozen=True)
class CachedState:
    """Last confirmed device state, replaced as a whole after each poll."""

    powered: bool = False
    muted: bool = False
    volume: int = 0
    channel_identifier: int = 0
    channel_reference: str = ""
    channel_name: str = ""
    event_name: str = ""
