from __future__ import annotations

from collections.abc import AsyncIterator, Sequence
from dataclasses import dataclass, field

import pytest
import pytest_asyncio
from conftest import FakeDeviceApi

from pynexx.accessory.service import AccessoryCategory, CurrentDoorState
from pynexx.config import NexxConfig
from pynexx.models.device import DeviceRecord
from pynexx.platform import CachedAccessory, NexxPlatform, accessory_uuid

GARAGE = DeviceRecord.model_validate(
    {
        "DeviceId": "NX-GARAGE-1",
        "DeviceNickName": "Main Garage",
        "DeviceStatus": 2,
        "ProductCode": "NXG200",
        "DeviceType": "NexxGarage",
    }
)
GATE = DeviceRecord.model_validate(
    {"DeviceId": "NX-GATE-1", "DeviceNickName": "Front Gate", "DeviceStatus": 1, "ProductCode": "NXGT1"}
)
PLUG = DeviceRecord.model_validate({"DeviceId": "NX-PLUG-1", "DeviceType": "NexxPlug", "ProductCode": "NXPG100"})


@dataclass
class _FakeHost:
    registered: list[CachedAccessory] = field(default_factory=list)
    updated: list[CachedAccessory] = field(default_factory=list)
    unregistered: list[CachedAccessory] = field(default_factory=list)

    def register_accessories(self, accessories: Sequence[CachedAccessory]) -> None:
        self.registered.extend(accessories)

    def update_accessories(self, accessories: Sequence[CachedAccessory]) -> None:
        self.updated.extend(accessories)

    def unregister_accessories(self, accessories: Sequence[CachedAccessory]) -> None:
        self.unregistered.extend(accessories)


@pytest.fixture
def host() -> _FakeHost:
    return _FakeHost()


@pytest_asyncio.fixture
async def platform(api: FakeDeviceApi, config: NexxConfig, host: _FakeHost) -> AsyncIterator[NexxPlatform]:
    platform = NexxPlatform(api, config, host)
    yield platform
    await platform.shutdown()


def _with_gates(config: NexxConfig, *, treat_gate_as_garage: bool = True) -> NexxConfig:
    return NexxConfig(
        username=config.username,
        password=config.password,
        poll_interval=config.poll_interval,
        confirmation_delay=config.confirmation_delay,
        include_gate=True,
        treat_gate_as_garage=treat_gate_as_garage,
    )


def test_accessory_uuid_is_stable() -> None:
    assert accessory_uuid("NX-GARAGE-1") == accessory_uuid("NX-GARAGE-1")
    assert accessory_uuid("NX-GARAGE-1") != accessory_uuid("NX-GARAGE-2")


@pytest.mark.asyncio
async def test_registers_garages_and_skips_the_rest(
    api: FakeDeviceApi, platform: NexxPlatform, host: _FakeHost
) -> None:
    api.devices = [GARAGE, GATE, PLUG]

    accessories = await platform.discover_devices()

    assert [accessory.device.device_id for accessory in accessories] == ["NX-GARAGE-1"]
    assert [cached.display_name for cached in host.registered] == ["Main Garage"]
    assert host.registered[0].uuid == accessory_uuid("NX-GARAGE-1")
    assert host.registered[0].category is AccessoryCategory.GARAGE_DOOR_OPENER
    assert host.registered[0].context["device"]["DeviceId"] == "NX-GARAGE-1"

    accessory = accessories[0]
    assert accessory.reconciliation.is_running
    assert accessory.service.current_door_state is CurrentDoorState.CLOSED


@pytest.mark.asyncio
async def test_include_gate(api: FakeDeviceApi, config: NexxConfig, host: _FakeHost) -> None:
    api.devices = [GARAGE, GATE]
    platform = NexxPlatform(api, _with_gates(config), host)
    try:
        accessories = await platform.discover_devices()
    finally:
        await platform.shutdown()

    assert sorted(accessory.device.device_id for accessory in accessories) == ["NX-GARAGE-1", "NX-GATE-1"]
    gate = next(cached for cached in host.registered if cached.display_name == "Front Gate")
    assert gate.category is AccessoryCategory.GARAGE_DOOR_OPENER


@pytest.mark.asyncio
async def test_gate_as_door_category(api: FakeDeviceApi, config: NexxConfig, host: _FakeHost) -> None:
    api.devices = [GATE]
    platform = NexxPlatform(api, _with_gates(config, treat_gate_as_garage=False), host)
    try:
        await platform.discover_devices()
    finally:
        await platform.shutdown()

    assert host.registered[0].category is AccessoryCategory.DOOR


@pytest.mark.asyncio
async def test_cached_accessory_is_updated_not_registered(
    api: FakeDeviceApi, platform: NexxPlatform, host: _FakeHost
) -> None:
    cached = CachedAccessory(uuid=accessory_uuid("NX-GARAGE-1"), display_name="Main Garage")
    platform.configure_accessory(cached)
    api.devices = [GARAGE]

    await platform.discover_devices()

    assert host.registered == []
    assert host.updated == [cached]
    assert cached.context["device"]["DeviceNickName"] == "Main Garage"


@pytest.mark.asyncio
async def test_stale_accessory_is_removed_and_stopped(
    api: FakeDeviceApi, platform: NexxPlatform, host: _FakeHost
) -> None:
    stale_cached = CachedAccessory(uuid=accessory_uuid("NX-OLD"), display_name="Old Garage")
    platform.configure_accessory(stale_cached)
    api.devices = [GARAGE]

    accessories = await platform.discover_devices()

    assert host.unregistered == [stale_cached]
    assert accessory_uuid("NX-OLD") not in platform.cached

    live = accessories[0]
    api.devices = []
    assert await platform.discover_devices() == []

    assert not live.reconciliation.is_running
    assert platform.accessories == {}
    assert [cached.display_name for cached in host.unregistered] == ["Old Garage", "Main Garage"]


@pytest.mark.asyncio
async def test_repeated_discovery_keeps_live_accessory(
    api: FakeDeviceApi, platform: NexxPlatform, host: _FakeHost
) -> None:
    api.devices = [GARAGE]

    first = await platform.discover_devices()
    second = await platform.discover_devices()

    assert first[0] is second[0]
    assert len(host.registered) == 1
    assert len(host.updated) == 1


@pytest.mark.asyncio
async def test_shutdown_stops_every_loop(api: FakeDeviceApi, config: NexxConfig, host: _FakeHost) -> None:
    api.devices = [GARAGE, GATE]
    platform = NexxPlatform(api, _with_gates(config), host)
    accessories = await platform.discover_devices()

    await platform.shutdown()

    assert all(not accessory.reconciliation.is_running for accessory in accessories)


@pytest.mark.asyncio
async def test_discovery_after_shutdown_restarts_loops(
    api: FakeDeviceApi, platform: NexxPlatform, host: _FakeHost
) -> None:
    api.devices = [GARAGE]
    first = await platform.discover_devices()

    await platform.shutdown()
    assert platform.accessories == {}
    assert not first[0].reconciliation.is_running

    second = await platform.discover_devices()

    assert second[0] is not first[0]
    assert second[0].reconciliation.is_running
    assert host.registered == [platform.cached[accessory_uuid("NX-GARAGE-1")]]
    assert len(host.updated) == 1
