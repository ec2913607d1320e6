from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from datetime import UTC, datetime

import pytest

from pynexx.config import NexxConfig
from pynexx.models.command import CommandAck, DoorCommand
from pynexx.models.device import CommandMetadata, DeviceRecord, DeviceStatus, GarageDevice

DEVICE_ID = "NX-GARAGE-1"
T0 = datetime(2026, 1, 1, 8, 0, tzinfo=UTC)
T1 = datetime(2026, 1, 1, 9, 30, tzinfo=UTC)


@dataclass
class FakeDeviceApi:
    """In-memory stand-in for the remote device API.

    ``command_gate`` / ``poll_gate`` hold calls open until set, so tests
    can interleave work with an in-flight request.
    """

    devices: list[DeviceRecord] = field(default_factory=list)
    states: dict[str, DeviceRecord] = field(default_factory=dict)
    command_error: Exception | None = None
    command_gate: asyncio.Event | None = None
    poll_gate: asyncio.Event | None = None
    commands: list[tuple[str, str, CommandMetadata | None]] = field(default_factory=list)
    polls: int = 0

    def set_state(
        self,
        status: DeviceStatus,
        timestamp: datetime | None = T1,
        device_id: str = DEVICE_ID,
    ) -> None:
        self.states[device_id] = DeviceRecord(
            device_id=device_id,
            status=status,
            last_operation_timestamp=timestamp,
        )

    async def get_devices(self) -> list[DeviceRecord]:
        return list(self.devices)

    async def get_device_state(self, device_id: str) -> DeviceRecord:
        self.polls += 1
        if self.poll_gate is not None:
            await self.poll_gate.wait()
        return self.states[device_id]

    async def _command(self, command: DoorCommand, device_id: str, metadata: CommandMetadata | None) -> CommandAck:
        self.commands.append((command.value, device_id, metadata))
        if self.command_gate is not None:
            await self.command_gate.wait()
        if self.command_error is not None:
            raise self.command_error
        return CommandAck(device_id=device_id, command=command)

    async def open(self, device_id: str, metadata: CommandMetadata | None = None) -> CommandAck:
        return await self._command(DoorCommand.OPEN, device_id, metadata)

    async def close(self, device_id: str, metadata: CommandMetadata | None = None) -> CommandAck:
        return await self._command(DoorCommand.CLOSE, device_id, metadata)


def make_garage(status: DeviceStatus = DeviceStatus.CLOSED, device_id: str = DEVICE_ID) -> GarageDevice:
    return GarageDevice(
        device_id=device_id,
        nickname="Main Garage",
        product_code="NXG200",
        device_type="NexxGarage",
        status=status,
        last_operation_timestamp=T0,
    )


@pytest.fixture
def api() -> FakeDeviceApi:
    return FakeDeviceApi()


@pytest.fixture
def config() -> NexxConfig:
    return NexxConfig(
        username="user@example.com",
        password="secret",
        poll_interval=3600.0,
        confirmation_delay=0.05,
    )
