"""Device records and device kinds.

:class:`DeviceRecord` is the loosely-typed snapshot returned by the API
(both by the device list and by the per-device state poll).  Discovery
narrows each record into one of the closed set of device kinds,
:class:`GarageDevice` or :class:`GateDevice`, which carry the command
metadata as mandatory fields.
"""

from __future__ import annotations

import enum
from datetime import datetime
from typing import Any, Literal

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from pynexx._constants import (
    GARAGE_DEVICE_TYPE,
    GARAGE_PRODUCT_CODES,
    GATE_DEVICE_TYPE,
    GATE_PRODUCT_CODES,
)
from pynexx.models._base import NexxBaseModel, NexxEnum, NexxTimestamp


class DeviceStatus(NexxEnum):
    """Door position reported by the API (``DeviceStatus``)."""

    UNKNOWN = -1
    OPEN = 1
    CLOSED = 2


class DeviceKind(enum.StrEnum):
    GARAGE = "garage"
    GATE = "gate"


class DeviceRecord(NexxBaseModel):
    """A device snapshot as reported by the API.

    Fields map from ``GetDevices`` entries and from the ``Result`` object
    of ``GetDeviceState``.  The state poll may omit identity fields, so
    everything except the status defaults to empty.
    """

    device_id: str = ""
    nickname: str = Field(default="", validation_alias=AliasChoices("DeviceNickName", "nickname"))
    status: DeviceStatus = Field(
        default=DeviceStatus.UNKNOWN,
        validation_alias=AliasChoices("DeviceStatus", "status"),
    )
    last_operation_timestamp: NexxTimestamp = None
    product_code: str = ""
    device_type: str | None = None

    @field_validator("status", mode="before")
    @classmethod
    def _coerce_status(cls, value: Any) -> DeviceStatus:
        # bool is an int subclass; True would look up OPEN.
        if isinstance(value, bool):
            return DeviceStatus.UNKNOWN
        return DeviceStatus(value)

    @field_validator("device_id", "product_code", mode="before")
    @classmethod
    def _coerce_str(cls, value: Any) -> str:
        return str(value)


class CommandMetadata(BaseModel):
    """Device-type metadata sent alongside open/close commands."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    device_type: str = Field(serialization_alias="DeviceType")
    product_code: str = Field(serialization_alias="ProductCode")

    def to_payload(self) -> dict[str, str]:
        return self.model_dump(by_alias=True)


class _NexxDevice(BaseModel):
    model_config = ConfigDict(frozen=True)

    device_id: str
    nickname: str
    product_code: str
    device_type: str
    status: DeviceStatus = DeviceStatus.UNKNOWN
    last_operation_timestamp: datetime | None = None

    @property
    def command_metadata(self) -> CommandMetadata:
        return CommandMetadata(device_type=self.device_type, product_code=self.product_code)

    @property
    def display_name(self) -> str:
        return self.nickname or self.device_id


class GarageDevice(_NexxDevice):
    """A garage door opener (``NexxGarage``, NXG200/NXG300)."""

    kind: Literal[DeviceKind.GARAGE] = DeviceKind.GARAGE


class GateDevice(_NexxDevice):
    """A gate opener (``NexxGate``, NXGT1)."""

    kind: Literal[DeviceKind.GATE] = DeviceKind.GATE


NexxDevice = GarageDevice | GateDevice


def is_garage(record: DeviceRecord) -> bool:
    return record.device_type == GARAGE_DEVICE_TYPE or record.product_code in GARAGE_PRODUCT_CODES


def is_gate(record: DeviceRecord) -> bool:
    return record.device_type == GATE_DEVICE_TYPE or record.product_code in GATE_PRODUCT_CODES


def classify_device(record: DeviceRecord) -> NexxDevice | None:
    """Narrow a raw record into a device kind.

    Returns ``None`` for records that are neither garages nor gates, or
    that carry no device id.  A missing ``DeviceType`` is filled in from
    the kind so command metadata is always complete.
    """
    if not record.device_id:
        return None
    common: dict[str, Any] = {
        "device_id": record.device_id,
        "nickname": record.nickname,
        "product_code": record.product_code,
        "status": record.status,
        "last_operation_timestamp": record.last_operation_timestamp,
    }
    if is_garage(record):
        return GarageDevice(device_type=record.device_type or GARAGE_DEVICE_TYPE, **common)
    if is_gate(record):
        return GateDevice(device_type=record.device_type or GATE_DEVICE_TYPE, **common)
    return None
