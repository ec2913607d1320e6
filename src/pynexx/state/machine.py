"""Per-device door state machine."""

from __future__ import annotations

import enum
import logging
from datetime import datetime

from pynexx.commands import CommandSender
from pynexx.models.command import CommandAck

_logger = logging.getLogger(__name__)


class DoorState(enum.StrEnum):
    OPEN = "open"
    CLOSED = "closed"
    STUCK = "stuck"


class Direction(enum.StrEnum):
    OPEN = "open"
    CLOSE = "close"

    @property
    def target(self) -> DoorState:
        return DoorState.OPEN if self is Direction.OPEN else DoorState.CLOSED


class DoorStateMachine:
    """Terminal door state plus an orthogonal ``transitioning`` flag.

    There is no opening/closing state: while a command is in flight the
    machine keeps its prior terminal state and records the pending
    direction.  ``stuck`` is only reached through :meth:`stuck`, never as
    the target of a command.

    ``open``/``close`` do not re-check :meth:`can`; callers must.
    """

    def __init__(
        self,
        device_id: str,
        commands: CommandSender,
        *,
        state: DoorState = DoorState.STUCK,
    ) -> None:
        self.device_id = device_id
        self._commands = commands
        self._state = state
        self._transitioning = False
        self._pending: Direction | None = None
        self.last_transition: datetime | None = None

    def __str__(self) -> str:
        return (
            f"DoorStateMachine(device={self.device_id}, state={self._state}, "
            f"transitioning={self._transitioning}, pending={self._pending})"
        )

    @property
    def state(self) -> DoorState:
        return self._state

    @property
    def pending(self) -> Direction | None:
        return self._pending

    def is_transitioning(self) -> bool:
        return self._transitioning

    def can(self, direction: Direction) -> bool:
        return self._state != direction.target and not self._transitioning

    # ------------------------------------------------------------------
    # Resets (remote truth, initial setup)
    # ------------------------------------------------------------------

    def _settle(self, state: DoorState) -> None:
        self._state = state
        self._transitioning = False
        self._pending = None

    def reset_open(self, timestamp: datetime | None) -> None:
        self._settle(DoorState.OPEN)
        self.last_transition = timestamp

    def reset_closed(self, timestamp: datetime | None) -> None:
        self._settle(DoorState.CLOSED)
        self.last_transition = timestamp

    def stuck(self, timestamp: datetime | None = None) -> None:
        """Force ``stuck``; *timestamp* is recorded when resetting from remote truth."""
        self._settle(DoorState.STUCK)
        if timestamp is not None:
            self.last_transition = timestamp

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    async def open(self) -> CommandAck:
        return await self._issue(Direction.OPEN)

    async def close(self) -> CommandAck:
        return await self._issue(Direction.CLOSE)

    async def _issue(self, direction: Direction) -> CommandAck:
        self._transitioning = True
        self._pending = direction
        send = self._commands.open if direction is Direction.OPEN else self._commands.close
        try:
            return await send(self.device_id)
        except Exception:
            self.stuck()
            raise

    def complete(self, direction: Direction) -> bool:
        """Settle a pending transition in *direction*.

        Returns ``False`` (and changes nothing) when the machine is not
        transitioning in that direction any more.  ``last_transition`` is
        left untouched: only remote truth advances it.
        """
        if not self._transitioning or self._pending is not direction:
            _logger.debug("Ignoring completion of %s; %s", direction, self)
            return False
        self._settle(direction.target)
        return True
