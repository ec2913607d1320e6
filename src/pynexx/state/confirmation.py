"""Optimistic confirmation of a door command.

After a command is accepted the door is assumed to reach its terminal
position.  A :class:`ConfirmationTimer` fires its callback either as
soon as a poll observes the expected status (:meth:`observe`) or, at the
latest, once the fallback delay elapses.  Nothing cancels it.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable

from pynexx.models.device import DeviceStatus
from pynexx.state.machine import Direction

_logger = logging.getLogger(__name__)

_EXPECTED_STATUS: dict[Direction, DeviceStatus] = {
    Direction.OPEN: DeviceStatus.OPEN,
    Direction.CLOSE: DeviceStatus.CLOSED,
}


class ConfirmationTimer:
    """One-shot confirmation of a command in *direction*.

    *on_fire* receives the direction and whether a poll confirmed it
    (``False`` means the fallback delay elapsed).
    """

    def __init__(
        self,
        direction: Direction,
        *,
        delay: float,
        on_fire: Callable[[Direction, bool], None],
    ) -> None:
        self.direction = direction
        self.expected = _EXPECTED_STATUS[direction]
        self._delay = delay
        self._on_fire = on_fire
        self._observed: asyncio.Future[DeviceStatus] | None = None
        self._task: asyncio.Task[None] | None = None

    @property
    def fired(self) -> bool:
        return self._task is not None and self._task.done()

    @property
    def pending(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        if self._task is not None:
            return
        loop = asyncio.get_running_loop()
        self._observed = loop.create_future()
        self._task = loop.create_task(self._run(), name=f"confirm-{self.direction}")

    def observe(self, status: DeviceStatus) -> bool:
        """Feed a polled status; resolves the confirmation when it matches."""
        if self._observed is None or self._observed.done() or status is not self.expected:
            return False
        self._observed.set_result(status)
        return True

    async def wait(self) -> None:
        """Wait until the timer has fired."""
        if self._task is not None:
            await asyncio.shield(self._task)

    async def _run(self) -> None:
        assert self._observed is not None  # noqa: S101
        done, _ = await asyncio.wait({self._observed}, timeout=self._delay)
        confirmed = bool(done)
        if not confirmed:
            # Nobody resolves it past this point.
            self._observed.cancel()
        _logger.debug(
            "Confirmation of %s fired (%s)",
            self.direction,
            "observed by poll" if confirmed else "fallback delay",
        )
        self._on_fire(self.direction, confirmed)
