"""Door-opener accessory exposed to the host platform."""

from pynexx.accessory.door import GarageDoorAccessory
from pynexx.accessory.service import (
    AccessoryCategory,
    AccessoryInformation,
    Characteristic,
    CurrentDoorState,
    DoorOpenerService,
    TargetDoorState,
)

__all__ = [
    "AccessoryCategory",
    "AccessoryInformation",
    "Characteristic",
    "CurrentDoorState",
    "DoorOpenerService",
    "GarageDoorAccessory",
    "TargetDoorState",
]
