"""Device discovery and accessory lifecycle.

:class:`NexxPlatform` owns every live :class:`GarageDoorAccessory`.  It
decides which reported devices become accessories, keeps the host's
accessory cache in step, and starts/stops each accessory's
reconciliation loop.
"""

from __future__ import annotations

import logging
import uuid
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any, Protocol

from pynexx.accessory.door import GarageDoorAccessory
from pynexx.accessory.service import AccessoryCategory
from pynexx.commands import DeviceApi
from pynexx.config import NexxConfig
from pynexx.models.device import DeviceRecord, GateDevice, NexxDevice, classify_device

_logger = logging.getLogger(__name__)

_UUID_NAMESPACE = uuid.uuid5(uuid.NAMESPACE_DNS, "pynexx.accessory")


def accessory_uuid(device_id: str) -> str:
    """Stable accessory UUID for a device id."""
    return str(uuid.uuid5(_UUID_NAMESPACE, device_id))


@dataclass
class CachedAccessory:
    """An accessory as the host platform persists it between restarts."""

    uuid: str
    display_name: str
    category: AccessoryCategory = AccessoryCategory.GARAGE_DOOR_OPENER
    context: dict[str, Any] = field(default_factory=dict)


class AccessoryHost(Protocol):
    """Accessory registry of the host platform."""

    def register_accessories(self, accessories: Sequence[CachedAccessory]) -> None: ...

    def update_accessories(self, accessories: Sequence[CachedAccessory]) -> None: ...

    def unregister_accessories(self, accessories: Sequence[CachedAccessory]) -> None: ...


def _summary(record: DeviceRecord) -> dict[str, Any]:
    return {
        "DeviceId": record.device_id,
        "DeviceType": record.device_type,
        "ProductCode": record.product_code,
        "DeviceNickName": record.nickname,
    }


class NexxPlatform:
    """Discovers Nexx devices and manages their accessories."""

    def __init__(self, api: DeviceApi, config: NexxConfig, host: AccessoryHost) -> None:
        self._api = api
        self._config = config
        self._host = host
        self.cached: dict[str, CachedAccessory] = {}
        self.accessories: dict[str, GarageDoorAccessory] = {}

    def configure_accessory(self, accessory: CachedAccessory) -> None:
        """Remember an accessory restored from the host cache at startup."""
        _logger.info("Loading accessory from cache: %s", accessory.display_name)
        self.cached[accessory.uuid] = accessory

    def category_for(self, device: NexxDevice) -> AccessoryCategory:
        if isinstance(device, GateDevice) and not self._config.treat_gate_as_garage:
            return AccessoryCategory.DOOR
        return AccessoryCategory.GARAGE_DOOR_OPENER

    def _accepts(self, device: NexxDevice | None) -> bool:
        if device is None:
            return False
        return not isinstance(device, GateDevice) or self._config.include_gate

    async def discover_devices(self) -> list[GarageDoorAccessory]:
        """Fetch devices, register accessories, and drop vanished ones.

        Returns the live accessories for every device discovered this pass.
        """
        records = await self._api.get_devices()
        discovered: list[str] = []

        for record in records:
            device = classify_device(record)
            if device is None or not self._accepts(device):
                _logger.info("Skipping device (unsupported): %s", _summary(record))
                continue

            _logger.info("Registering device: %s", _summary(record))
            uid = accessory_uuid(device.device_id)
            discovered.append(uid)
            context = {"device": record.raw or record.model_dump(mode="json", exclude={"raw"})}

            cached = self.cached.get(uid)
            if cached is not None:
                _logger.info("Restoring existing accessory from cache: %s", cached.display_name)
                cached.context = context
                self._host.update_accessories([cached])
            else:
                _logger.info("Adding new accessory: %s", device.display_name)
                cached = CachedAccessory(
                    uuid=uid,
                    display_name=device.display_name,
                    category=self.category_for(device),
                    context=context,
                )
                self.cached[uid] = cached
                self._host.register_accessories([cached])

            if uid not in self.accessories:
                accessory = GarageDoorAccessory.from_config(device, self._api, self._config)
                self.accessories[uid] = accessory
                accessory.start()

        for uid in [uid for uid in self.cached if uid not in discovered]:
            stale = self.cached.pop(uid)
            _logger.info("Removing accessory no longer discovered: %s", stale.display_name)
            self._host.unregister_accessories([stale])
            live = self.accessories.pop(uid, None)
            if live is not None:
                await live.stop()

        return [self.accessories[uid] for uid in discovered]

    async def shutdown(self) -> None:
        """Stop every accessory's reconciliation loop and forget the live accessories.

        Cached entries are kept; the next discovery builds fresh accessories.
        """
        accessories, self.accessories = self.accessories, {}
        for accessory in accessories.values():
            await accessory.stop()
