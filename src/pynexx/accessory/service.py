"""Garage door opener service and its characteristics.

Values follow the HomeKit Accessory Protocol numbering so a host bridge
can pass them through unchanged.
"""

from __future__ import annotations

import enum
import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from pynexx._constants import MANUFACTURER

_logger = logging.getLogger(__name__)


class CurrentDoorState(enum.IntEnum):
    OPEN = 0
    CLOSED = 1
    OPENING = 2
    CLOSING = 3
    STOPPED = 4


class TargetDoorState(enum.IntEnum):
    OPEN = 0
    CLOSED = 1


class AccessoryCategory(enum.IntEnum):
    DOOR = 12
    GARAGE_DOOR_OPENER = 4


class Characteristic(enum.StrEnum):
    CURRENT_DOOR_STATE = "CurrentDoorState"
    TARGET_DOOR_STATE = "TargetDoorState"
    OBSTRUCTION_DETECTED = "ObstructionDetected"


@dataclass(frozen=True)
class AccessoryInformation:
    name: str
    model: str
    serial_number: str
    manufacturer: str = MANUFACTURER


Listener = Callable[[Characteristic, Any], None]


class DoorOpenerService:
    """Characteristic values of one door opener.

    Subscribers are notified only when a value actually changes, so
    re-publishing an unchanged state is silent.
    """

    def __init__(self, information: AccessoryInformation) -> None:
        self.information = information
        self._values: dict[Characteristic, Any] = {
            Characteristic.CURRENT_DOOR_STATE: CurrentDoorState.CLOSED,
            Characteristic.TARGET_DOOR_STATE: TargetDoorState.CLOSED,
            Characteristic.OBSTRUCTION_DETECTED: False,
        }
        self._listeners: list[Listener] = []

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register *listener*; returns a callable that unsubscribes it."""
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    def get(self, characteristic: Characteristic) -> Any:
        return self._values[characteristic]

    def update(self, characteristic: Characteristic, value: Any) -> bool:
        """Set a characteristic; returns whether the value changed."""
        if self._values.get(characteristic) == value:
            return False
        self._values[characteristic] = value
        _logger.debug("%s: %s -> %r", self.information.name, characteristic, value)
        for listener in list(self._listeners):
            try:
                listener(characteristic, value)
            except Exception:
                _logger.debug("Characteristic listener failed", exc_info=True)
        return True

    @property
    def current_door_state(self) -> CurrentDoorState:
        value: CurrentDoorState = self._values[Characteristic.CURRENT_DOOR_STATE]
        return value

    @property
    def target_door_state(self) -> TargetDoorState:
        value: TargetDoorState = self._values[Characteristic.TARGET_DOOR_STATE]
        return value

    @property
    def obstruction_detected(self) -> bool:
        return bool(self._values[Characteristic.OBSTRUCTION_DETECTED])
