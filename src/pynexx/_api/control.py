"""Door command endpoints.

Endpoints:
  - /api/Device/Open
  - /api/Device/Close
"""

from __future__ import annotations

import logging
from typing import Any

from pynexx._api._common import request_authenticated
from pynexx._constants import CLOSE_ENDPOINT, OPEN_ENDPOINT
from pynexx._transport import Transport
from pynexx.exceptions import NexxCommandError
from pynexx.models.command import CommandAck, DoorCommand
from pynexx.models.device import CommandMetadata
from pynexx.session import Session

_logger = logging.getLogger(__name__)

_COMMAND_ENDPOINTS: dict[DoorCommand, str] = {
    DoorCommand.OPEN: OPEN_ENDPOINT,
    DoorCommand.CLOSE: CLOSE_ENDPOINT,
}


def build_command_payload(device_id: str, metadata: CommandMetadata | None) -> dict[str, Any]:
    payload: dict[str, Any] = {"DeviceId": device_id}
    if metadata is not None:
        payload.update(metadata.to_payload())
    return payload


async def send_door_command(
    session: Session,
    transport: Transport,
    device_id: str,
    command: DoorCommand,
    *,
    metadata: CommandMetadata | None = None,
) -> CommandAck:
    """Send a single open/close command.

    There is no retry: a rejected command raises immediately.

    Raises
    ------
    NexxCommandError
        If the server reports ``IsSuccess: false``.
    """
    endpoint = _COMMAND_ENDPOINTS[command]
    body = await request_authenticated(
        method="POST",
        endpoint=endpoint,
        session=session,
        transport=transport,
        payload=build_command_payload(device_id, metadata),
        error_cls=NexxCommandError,
    )
    _logger.debug("Door command %s accepted for device=%s", command, device_id)
    return CommandAck.model_validate({**body, "DeviceId": device_id, "Command": command})
