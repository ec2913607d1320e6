"""Device list and device state endpoints.

Endpoints:
  - /api/Device/GetDevices
  - /api/Device/GetDeviceState
"""

from __future__ import annotations

import logging

from pydantic import TypeAdapter

from pynexx._api._common import request_authenticated, unwrap_result
from pynexx._constants import DEVICE_STATE_ENDPOINT, DEVICES_ENDPOINT
from pynexx._transport import Transport
from pynexx.exceptions import NexxApiError
from pynexx.models.device import DeviceRecord
from pynexx.session import Session

_logger = logging.getLogger(__name__)

_DEVICE_LIST = TypeAdapter(list[DeviceRecord])


async def fetch_devices(session: Session, transport: Transport) -> list[DeviceRecord]:
    """Fetch every device associated with the account."""
    body = await request_authenticated(
        method="GET",
        endpoint=DEVICES_ENDPOINT,
        session=session,
        transport=transport,
    )
    result = unwrap_result(body)
    items = result if isinstance(result, list) else []
    _logger.debug("Device list response decoded count=%d", len(items))
    return _DEVICE_LIST.validate_python([item for item in items if isinstance(item, dict)])


async def fetch_device_state(session: Session, transport: Transport, device_id: str) -> DeviceRecord:
    """Poll the current state of a single device.

    The reply's ``Result`` object is parsed as a :class:`DeviceRecord`;
    identity fields the server omits are filled from *device_id*.
    """
    body = await request_authenticated(
        method="POST",
        endpoint=DEVICE_STATE_ENDPOINT,
        session=session,
        transport=transport,
        payload={"DeviceId": device_id},
    )
    result = unwrap_result(body)
    if not isinstance(result, dict):
        raise NexxApiError(
            f"{DEVICE_STATE_ENDPOINT} returned no Result for device {device_id}",
            code="invalid_result",
            endpoint=DEVICE_STATE_ENDPOINT,
        )
    record = DeviceRecord.model_validate(result)
    if not record.device_id:
        record = record.model_copy(update={"device_id": device_id})
    return record
