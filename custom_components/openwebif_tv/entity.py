"""Base entity shared by the OpenWebIf TV platforms."""

from __future__ import annotations

from homeassistant.helpers.device_registry import DeviceInfo
from homeassistant.helpers.update_coordinator import CoordinatorEntity

from .const import DOMAIN
from .coordinator import OpenWebIfCoordinator
from .device_config import DeviceConfig


class OpenWebIfEntity(CoordinatorEntity[OpenWebIfCoordinator]):
    """Entity bound to one box's coordinator and session."""

    _attr_has_entity_name = True

    def __init__(
        self,
        coordinator: OpenWebIfCoordinator,
        device: DeviceConfig,
        key: str,
    ) -> None:
        super().__init__(coordinator)
        self._device = device
        self.session = coordinator.session
        self._attr_unique_id = f"{DOMAIN}_{device.unique_id}_{key}"

    @property
    def available(self) -> bool:
        """Return True once the box answered the device info request."""

        return self.session.tracking

    @property
    def device_info(self) -> DeviceInfo:
        info = self.session.device_info
        manufacturer = (info.manufacturer if info else None) or self._device.manufacturer
        model = (info.model if info else None) or self._device.model
        firmware = (info.firmware if info else None) or self._device.firmware_revision

        return DeviceInfo(
            identifiers={(DOMAIN, self._device.unique_id)},
            name=self._device.name,
            manufacturer=manufacturer,
            model=model,
            serial_number=self._device.serial_number,
            sw_version=firmware,
            configuration_url=f"http://{self._device.host}:{self._device.endpoint.port}",
        )
