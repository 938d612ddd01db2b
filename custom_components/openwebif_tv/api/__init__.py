"""Public API surface for the OpenWebIf client."""

from .client import OpenWebIfApi
from .errors import (
    InvalidChannelError,
    OpenWebIfApiError,
    OpenWebIfAuthError,
    OpenWebIfConfigError,
    OpenWebIfConnectionError,
    OpenWebIfError,
    OpenWebIfPersistenceError,
)
from .models import (
    CachedState,
    ChannelEntry,
    DeviceEndpoint,
    DeviceInfo,
    DeviceStatus,
    ServiceEntry,
)

__all__ = [
    "OpenWebIfApi",
    "InvalidChannelError",
    "OpenWebIfApiError",
    "OpenWebIfAuthError",
    "OpenWebIfConfigError",
    "OpenWebIfConnectionError",
    "OpenWebIfError",
    "OpenWebIfPersistenceError",
    "CachedState",
    "ChannelEntry",
    "DeviceEndpoint",
    "DeviceInfo",
    "DeviceStatus",
    "ServiceEntry",
]
