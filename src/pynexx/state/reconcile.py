"""Reconciliation against remote truth.

Two pieces live here: the pure decision rules (does this poll contradict
the local state, and what reset does it call for) and
:class:`ReconciliationLoop`, the owned, cancellable task that runs a
reconcile callback on a fixed period.
"""

from __future__ import annotations

import asyncio
import contextlib
import enum
import logging
from collections.abc import Awaitable, Callable

from pynexx.models.device import DeviceStatus
from pynexx.state.machine import DoorState

_logger = logging.getLogger(__name__)


class ResetAction(enum.StrEnum):
    RESET_OPEN = "reset_open"
    RESET_CLOSED = "reset_closed"
    STUCK = "stuck"


def reset_action(status: DeviceStatus | None) -> ResetAction:
    """Map a remote status to the reset it dictates."""
    if status is DeviceStatus.OPEN:
        return ResetAction.RESET_OPEN
    if status is DeviceStatus.CLOSED:
        return ResetAction.RESET_CLOSED
    return ResetAction.STUCK


def needs_reset(state: DoorState, status: DeviceStatus | None) -> bool:
    """Whether a settled local *state* has drifted from the remote *status*.

    ``stuck`` only heals when the remote status is unambiguous; an
    unknown status never moves a machine that is already stuck.
    """
    if state is DoorState.OPEN:
        return status is not DeviceStatus.OPEN
    if state is DoorState.CLOSED:
        return status is not DeviceStatus.CLOSED
    return status in (DeviceStatus.OPEN, DeviceStatus.CLOSED)


class ReconciliationLoop:
    """Run *tick* every *interval* seconds until stopped.

    The loop is never started implicitly; the accessory lifecycle owner
    calls :meth:`start` and :meth:`stop`.  A tick that raises is logged
    and the loop carries on with the next period.
    """

    def __init__(
        self,
        tick: Callable[[], Awaitable[object]],
        *,
        interval: float,
        name: str = "reconcile",
    ) -> None:
        self._tick = tick
        self._interval = interval
        self._name = name
        self._task: asyncio.Task[None] | None = None

    @property
    def interval(self) -> float:
        return self._interval

    @property
    def is_running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        if self.is_running:
            return
        self._task = asyncio.get_running_loop().create_task(self._run(), name=self._name)

    async def stop(self) -> None:
        task = self._task
        self._task = None
        if task is None or task.done():
            return
        task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await task

    async def _run(self) -> None:
        while True:
            await asyncio.sleep(self._interval)
            try:
                await self._tick()
            except Exception:
                _logger.warning("Reconciliation tick %s failed", self._name, exc_info=True)
