"""pynexx - Async Python client and door state reconciliation for Nexx garage/gate openers."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("pynexx")
except PackageNotFoundError:
    __version__ = "0+local"
from pynexx.accessory import (
    AccessoryCategory,
    CurrentDoorState,
    DoorOpenerService,
    GarageDoorAccessory,
    TargetDoorState,
)
from pynexx.client import NexxClient
from pynexx.commands import CommandSender, DeviceApi, DeviceCommandAdapter
from pynexx.config import NexxConfig
from pynexx.exceptions import (
    NexxApiError,
    NexxAuthenticationError,
    NexxCommandError,
    NexxConfigError,
    NexxError,
    NexxSessionExpiredError,
    NexxTransportError,
)
from pynexx.models import (
    CommandAck,
    CommandMetadata,
    DeviceRecord,
    DeviceStatus,
    GarageDevice,
    GateDevice,
    classify_device,
)
from pynexx.platform import AccessoryHost, CachedAccessory, NexxPlatform
from pynexx.state.machine import Direction, DoorState, DoorStateMachine

__all__ = [
    "__version__",
    "AccessoryCategory",
    "AccessoryHost",
    "CachedAccessory",
    "CommandAck",
    "CommandMetadata",
    "CommandSender",
    "CurrentDoorState",
    "DeviceApi",
    "DeviceCommandAdapter",
    "DeviceRecord",
    "DeviceStatus",
    "Direction",
    "DoorOpenerService",
    "DoorState",
    "DoorStateMachine",
    "GarageDevice",
    "GarageDoorAccessory",
    "GateDevice",
    "NexxApiError",
    "NexxAuthenticationError",
    "NexxClient",
    "NexxCommandError",
    "NexxConfig",
    "NexxConfigError",
    "NexxError",
    "NexxPlatform",
    "NexxSessionExpiredError",
    "NexxTransportError",
    "TargetDoorState",
    "classify_device",
]
