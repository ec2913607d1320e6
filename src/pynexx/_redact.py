"""Helpers for safe debug logging.

pynexx sends account passwords and bearer tokens over the wire.  This
module redacts sensitive fields before they are emitted in DEBUG logs.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

from pydantic import BaseModel

_REDACTED = "<redacted>"
_MAX_DEPTH = 20

_SENSITIVE_KEYS: frozenset[str] = frozenset({"password", "username", "email", "authorization", "cookie"})


def _is_sensitive_key(key: str) -> bool:
    lowered = key.lower()
    # AccessToken, RefreshToken, Token, ...
    return lowered in _SENSITIVE_KEYS or lowered.endswith("token")


def _redact_string(value: str, max_string: int) -> str:
    if value.lower().startswith("bearer "):
        return f"Bearer {_REDACTED}"
    if len(value) > max_string:
        return f"{value[:max_string]}…<truncated>"
    return value


def redact_for_log(value: Any, *, max_string: int = 512, _depth: int = 0) -> Any:
    """Return a redacted copy of *value* suitable for debug logs.

    Pydantic models are dumped first so their fields are redacted like
    any other mapping.
    """
    if _depth > _MAX_DEPTH:
        return "<max-depth>"

    if value is None or isinstance(value, (bool, int, float)):
        return value
    if isinstance(value, str):
        return _redact_string(value, max_string)
    if isinstance(value, (bytes, bytearray)):
        return f"<bytes:{len(value)}b>"
    if isinstance(value, BaseModel):
        value = value.model_dump(mode="json", by_alias=True, exclude={"raw"})

    if isinstance(value, Mapping):
        return {
            str(key): _REDACTED
            if _is_sensitive_key(str(key))
            else redact_for_log(item, max_string=max_string, _depth=_depth + 1)
            for key, item in value.items()
        }
    if isinstance(value, Sequence):
        return [redact_for_log(item, max_string=max_string, _depth=_depth + 1) for item in value]
    return repr(value)
