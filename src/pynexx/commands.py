"""Command dispatch capability and the per-device adapter.

The door state machine only ever calls ``open(device_id)`` /
``close(device_id)``.  :class:`DeviceCommandAdapter` binds a device's
:class:`CommandMetadata` once, at construction, and substitutes it
whenever the caller passes none.
"""

from __future__ import annotations

from typing import Protocol

from pynexx.models.command import CommandAck
from pynexx.models.device import CommandMetadata, DeviceRecord


class CommandSender(Protocol):
    """Anything that can send open/close commands to a device."""

    async def open(self, device_id: str, metadata: CommandMetadata | None = None) -> CommandAck: ...

    async def close(self, device_id: str, metadata: CommandMetadata | None = None) -> CommandAck: ...


class DeviceApi(CommandSender, Protocol):
    """The remote device API consumed by accessories and discovery."""

    async def get_devices(self) -> list[DeviceRecord]: ...

    async def get_device_state(self, device_id: str) -> DeviceRecord: ...


class DeviceCommandAdapter:
    """A :class:`CommandSender` with per-device metadata defaults."""

    def __init__(self, sender: CommandSender, metadata: CommandMetadata) -> None:
        self._sender = sender
        self._metadata = metadata

    @property
    def metadata(self) -> CommandMetadata:
        return self._metadata

    async def open(self, device_id: str, metadata: CommandMetadata | None = None) -> CommandAck:
        return await self._sender.open(device_id, metadata if metadata is not None else self._metadata)

    async def close(self, device_id: str, metadata: CommandMetadata | None = None) -> CommandAck:
        return await self._sender.close(device_id, metadata if metadata is not None else self._metadata)
