"""Response parsing helpers for the OpenWebIf API client."""

from __future__ import annotations

from typing import Any

from .errors import OpenWebIfApiError
from .models import DeviceInfo, DeviceStatus, ServiceEntry

_TRUE_VALUES = {"true", "1", "yes", "on"}


def _as_bool(value: Any, default: bool = False) -> bool:
    """Convert the bool-ish values the web interface returns."""
    if value is None:
        return default

    if isinstance(value, bool):
        return value

    if isinstance(value, (int, float)):
        return value != 0

    return str(value).strip().lower() in _TRUE_VALUES


def _safe_int(value: Any) -> int:
    """Convert to int or return 0."""
    try:
        return int(value)
    except (TypeError, ValueError):
        return 0


def _as_text(value: Any) -> str:
    if value is None:
        return ""

    return str(value)


def _optional_text(value: Any) -> str | None:
    if value is None:
        return None

    text = str(value).strip()

    return text or None


def _require_mapping(res: Any, what: str) -> dict[str, Any]:
    if not isinstance(res, dict):
        raise OpenWebIfApiError(f"Unexpected {what} response: {res!r}")

    return res


def parse_status(res: Any) -> DeviceStatus:
    """Parse a statusinfo body into a DeviceStatus."""
    data = _require_mapping(res, "statusinfo")

    # A box that does not report the flag is treated as in standby.
    powered = not _as_bool(data.get("inStandby"), default=True)
    volume = min(max(_safe_int(data.get("volume")), 0), 100)

    return DeviceStatus(
        powered=powered,
        channel_name=_as_text(data.get("currservice_station")),
        event_name=_as_text(data.get("currservice_name")),
        channel_reference=_as_text(data.get("currservice_serviceref")),
        muted=_as_bool(data.get("muted")),
        volume=volume,
    )


def parse_device_info(res: Any) -> DeviceInfo:
    """Parse a deviceinfo body into a DeviceInfo."""
    data = _require_mapping(res, "deviceinfo")
    model = data.get("mname")
    if model is None:
        model = data.get("model")

    return DeviceInfo(
        manufacturer=_optional_text(data.get("brand")),
        model=_optional_text(model),
        webif_version=_optional_text(data.get("webifver")),
        firmware=_optional_text(data.get("enigmaver")),
        kernel=_optional_text(data.get("kernelver")),
        chipset=_optional_text(data.get("chipset")),
    )


def extract_services(res: Any) -> list[Any]:
    """Return the raw services payload from a getallservices body."""
    data = _require_mapping(res, "getallservices")
    services = data.get("services")
    if services is None:
        return []

    if not isinstance(services, list):
        raise OpenWebIfApiError(f"Unexpected services payload: {services!r}")

    return services


def parse_services(services: list[Any]) -> list[ServiceEntry]:
    """Flatten bouquets and services into ServiceEntry records."""
    out: list[ServiceEntry] = []
    for item in services:
        if not isinstance(item, dict):
            continue

        reference = item.get("servicereference")
        if reference:
            out.append(
                ServiceEntry(
                    reference=str(reference),
                    name=_as_text(item.get("servicename")),
                )
            )

        nested = item.get("subservices")
        if isinstance(nested, list):
            out.extend(parse_services(nested))

    return out
