"""Typed responses for the open/close command endpoints.

These endpoints return a small envelope (``{"IsSuccess": true, ...}``),
sometimes with an empty ``Result``.  The raw reply is kept for forward
compatibility.
"""

from __future__ import annotations

import enum
from typing import Any

from pydantic import Field, model_validator

from pynexx.models._base import NexxBaseModel


class DoorCommand(enum.StrEnum):
    OPEN = "open"
    CLOSE = "close"


class CommandAck(NexxBaseModel):
    """Acknowledgement of an accepted open/close command."""

    device_id: str = ""
    command: DoorCommand
    success: bool = Field(default=True, alias="IsSuccess")
    message: str | None = None

    @model_validator(mode="before")
    @classmethod
    def _coerce_message(cls, values: Any) -> Any:
        if not isinstance(values, dict):
            return values
        message = values.get("Message")
        if message is not None and not isinstance(message, str):
            values = {**values, "Message": str(message)}
        return values
