from __future__ import annotations

import pytest
from conftest import DEVICE_ID, FakeDeviceApi

from pynexx.commands import DeviceCommandAdapter
from pynexx.models.device import CommandMetadata

GARAGE_META = CommandMetadata(device_type="NexxGarage", product_code="NXG200")
OTHER_META = CommandMetadata(device_type="NexxGarage", product_code="NXG300")


@pytest.mark.asyncio
async def test_adapter_substitutes_bound_metadata(api: FakeDeviceApi) -> None:
    adapter = DeviceCommandAdapter(api, GARAGE_META)

    await adapter.open(DEVICE_ID)
    await adapter.close(DEVICE_ID)

    assert api.commands == [
        ("open", DEVICE_ID, GARAGE_META),
        ("close", DEVICE_ID, GARAGE_META),
    ]


@pytest.mark.asyncio
async def test_adapter_passes_explicit_metadata_through(api: FakeDeviceApi) -> None:
    adapter = DeviceCommandAdapter(api, GARAGE_META)

    await adapter.open(DEVICE_ID, OTHER_META)

    assert api.commands == [("open", DEVICE_ID, OTHER_META)]
    assert adapter.metadata == GARAGE_META


@pytest.mark.asyncio
async def test_adapter_propagates_sender_errors(api: FakeDeviceApi) -> None:
    api.command_error = RuntimeError("boom")
    adapter = DeviceCommandAdapter(api, GARAGE_META)

    with pytest.raises(RuntimeError, match="boom"):
        await adapter.close(DEVICE_ID)


def test_metadata_payload_uses_wire_names() -> None:
    assert GARAGE_META.to_payload() == {"DeviceType": "NexxGarage", "ProductCode": "NXG200"}
