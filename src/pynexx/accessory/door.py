"""Garage door / gate accessory.

Binds one discovered device to a :class:`DoorOpenerService`: target
state writes become guarded commands on the device's
:class:`DoorStateMachine`, a :class:`ConfirmationTimer` optimistically
completes accepted commands, and a :class:`ReconciliationLoop` pulls the
machine back to remote truth whenever it drifts.
"""

from __future__ import annotations

import logging
from datetime import datetime

from pynexx.accessory.service import (
    AccessoryInformation,
    Characteristic,
    CurrentDoorState,
    DoorOpenerService,
    TargetDoorState,
)
from pynexx.commands import DeviceApi, DeviceCommandAdapter
from pynexx.config import NexxConfig
from pynexx.models.device import DeviceStatus, NexxDevice
from pynexx.state.confirmation import ConfirmationTimer
from pynexx.state.machine import Direction, DoorState, DoorStateMachine
from pynexx.state.reconcile import ReconciliationLoop, ResetAction, needs_reset, reset_action

_logger = logging.getLogger(__name__)

_TERMINAL: dict[Direction, CurrentDoorState] = {
    Direction.OPEN: CurrentDoorState.OPEN,
    Direction.CLOSE: CurrentDoorState.CLOSED,
}
_MOVING: dict[Direction, CurrentDoorState] = {
    Direction.OPEN: CurrentDoorState.OPENING,
    Direction.CLOSE: CurrentDoorState.CLOSING,
}


class GarageDoorAccessory:
    """A door opener accessory for one Nexx device.

    The reconciliation loop is created here but only runs between
    :meth:`start` and :meth:`stop`, which the platform calls.
    """

    def __init__(
        self,
        device: NexxDevice,
        api: DeviceApi,
        *,
        poll_interval: float,
        confirmation_delay: float,
    ) -> None:
        self.device = device
        self._api = api
        self._confirmation_delay = confirmation_delay
        self._confirmation: ConfirmationTimer | None = None

        self.commands = DeviceCommandAdapter(api, device.command_metadata)
        self.machine = DoorStateMachine(device.device_id, self.commands)
        self.service = DoorOpenerService(
            AccessoryInformation(
                name=device.display_name,
                model=device.product_code,
                serial_number=device.device_id,
            )
        )
        self.reconciliation = ReconciliationLoop(
            self.reconcile,
            interval=poll_interval,
            name=f"reconcile-{device.device_id}",
        )

        self.reset_from_remote(device.status, device.last_operation_timestamp)

    @classmethod
    def from_config(cls, device: NexxDevice, api: DeviceApi, config: NexxConfig) -> GarageDoorAccessory:
        return cls(
            device,
            api,
            poll_interval=config.poll_interval,
            confirmation_delay=config.confirmation_delay,
        )

    def __repr__(self) -> str:
        return f"GarageDoorAccessory({self.device.display_name!r}, {self.machine})"

    @property
    def confirmation(self) -> ConfirmationTimer | None:
        """The most recently scheduled confirmation, if any."""
        return self._confirmation

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def start(self) -> None:
        self.reconciliation.start()

    async def stop(self) -> None:
        await self.reconciliation.stop()

    # ------------------------------------------------------------------
    # Remote truth
    # ------------------------------------------------------------------

    def reset_from_remote(self, status: DeviceStatus | None, timestamp: datetime | None) -> None:
        """Force the machine to the remote status and republish the service."""
        action = reset_action(status)
        if action is ResetAction.RESET_OPEN:
            _logger.info("Resetting device state to OPEN; %s, device (%s, %s)", self.machine, status, timestamp)
            self.machine.reset_open(timestamp)
        elif action is ResetAction.RESET_CLOSED:
            _logger.info("Resetting device state to CLOSED; %s, device (%s, %s)", self.machine, status, timestamp)
            self.machine.reset_closed(timestamp)
        else:
            _logger.info(
                "Failed to understand device status, marking STUCK; %s, device (%r, %s)",
                self.machine,
                status,
                timestamp,
            )
            self.machine.stuck(timestamp)
        self._publish()

    async def reconcile(self) -> bool:
        """Run one reconciliation pass; returns whether the machine was reset.

        While a command is in flight nothing is corrected.  If a
        confirmation is pending the device is still polled so that an
        observed arrival confirms it early.
        """
        _logger.debug("Checking on the status of %s", self.machine)
        device_id = self.device.device_id

        if self.machine.is_transitioning():
            confirmation = self._confirmation
            if confirmation is not None and confirmation.pending:
                record = await self._api.get_device_state(device_id)
                if confirmation.observe(record.status):
                    _logger.debug("Poll confirmed %s for %s", confirmation.direction, device_id)
            else:
                _logger.debug("Skipping reconciliation of %s: command in flight", device_id)
            return False

        record = await self._api.get_device_state(device_id)
        _logger.debug("Status from the API is %r for %s", record.status, device_id)

        if self.machine.is_transitioning():
            _logger.debug("Command issued while polling %s; discarding status", device_id)
            return False
        if not needs_reset(self.machine.state, record.status):
            return False
        self.reset_from_remote(record.status, record.last_operation_timestamp)
        return True

    # ------------------------------------------------------------------
    # Host handlers
    # ------------------------------------------------------------------

    async def set_target_door_state(self, value: TargetDoorState) -> None:
        """Handle a target state write from the host.

        Command failures are absorbed here: they leave the door ``stuck``,
        republish the service from the machine (current ``STOPPED``, target
        ``CLOSED``) and never propagate.
        """
        direction = Direction.OPEN if value == TargetDoorState.OPEN else Direction.CLOSE
        _logger.debug("Set Target Door State -> %s (%s)", direction, self.machine)
        self.service.update(Characteristic.TARGET_DOOR_STATE, TargetDoorState(value))

        if not self.machine.can(direction):
            _logger.warning("Attempting to transition to %s but %s", direction, self.machine)
            self._publish()
            return

        self.service.update(Characteristic.CURRENT_DOOR_STATE, _MOVING[direction])
        try:
            if direction is Direction.OPEN:
                await self.machine.open()
            else:
                await self.machine.close()
        except Exception:
            _logger.error("Problem detected attempting to change %s", self.machine, exc_info=True)
            self._publish()
            return

        self._confirmation = ConfirmationTimer(
            direction,
            delay=self._confirmation_delay,
            on_fire=self._on_confirmation,
        )
        self._confirmation.start()

    def get_current_door_state(self) -> CurrentDoorState:
        _logger.debug("Get Current Door State -> %s", self.machine)
        return self._derive_current()

    def get_target_door_state(self) -> TargetDoorState:
        _logger.debug("Get Target Door State -> %s", self.machine)
        return self._derive_target()

    def get_obstruction_detected(self) -> bool:
        _logger.debug("Get Obstruction -> %s", self.machine)
        return self.machine.state is DoorState.STUCK

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _derive_current(self) -> CurrentDoorState:
        pending = self.machine.pending
        if self.machine.is_transitioning() and pending is not None:
            return _MOVING[pending]
        state = self.machine.state
        if state is DoorState.OPEN:
            return CurrentDoorState.OPEN
        if state is DoorState.CLOSED:
            return CurrentDoorState.CLOSED
        return CurrentDoorState.STOPPED

    def _derive_target(self) -> TargetDoorState:
        pending = self.machine.pending
        if self.machine.is_transitioning() and pending is not None:
            return TargetDoorState.OPEN if pending is Direction.OPEN else TargetDoorState.CLOSED
        if self.machine.state is DoorState.OPEN:
            return TargetDoorState.OPEN
        return TargetDoorState.CLOSED

    def _publish(self) -> None:
        self.service.update(Characteristic.CURRENT_DOOR_STATE, self._derive_current())
        self.service.update(Characteristic.TARGET_DOOR_STATE, self._derive_target())
        self.service.update(Characteristic.OBSTRUCTION_DETECTED, self.get_obstruction_detected())

    def _on_confirmation(self, direction: Direction, confirmed: bool) -> None:
        # Unconditional: reconciliation corrects a wrong guess later.
        self.service.update(Characteristic.CURRENT_DOOR_STATE, _TERMINAL[direction])
        self.machine.complete(direction)
        self.service.update(Characteristic.OBSTRUCTION_DETECTED, self.machine.state is DoorState.STUCK)
        _logger.debug(
            "Transitioned successfully to %s (%s)",
            _TERMINAL[direction].name,
            "confirmed by poll" if confirmed else "assumed after delay",
        )
