"""Data models for Nexx API responses."""

from pynexx.models._base import NexxBaseModel, NexxEnum, NexxTimestamp, parse_nexx_timestamp
from pynexx.models.command import CommandAck, DoorCommand
from pynexx.models.device import (
    CommandMetadata,
    DeviceKind,
    DeviceRecord,
    DeviceStatus,
    GarageDevice,
    GateDevice,
    NexxDevice,
    classify_device,
)
from pynexx.models.token import AuthToken

__all__ = [
    "AuthToken",
    "CommandAck",
    "CommandMetadata",
    "DeviceKind",
    "DeviceRecord",
    "DeviceStatus",
    "DoorCommand",
    "GarageDevice",
    "GateDevice",
    "NexxBaseModel",
    "NexxDevice",
    "NexxEnum",
    "NexxTimestamp",
    "classify_device",
    "parse_nexx_timestamp",
]
