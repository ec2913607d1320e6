"""Shared helpers for Nexx API endpoint modules.

This module centralizes the repeated patterns:
- sending an authenticated request
- mapping HTTP 401/403 to session expiry
- checking the ``IsSuccess`` envelope flag
- unwrapping the ``Result`` member

It is internal to pynexx and may change at any time.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pynexx._constants import SESSION_EXPIRED_STATUS
from pynexx._transport import Transport
from pynexx.exceptions import NexxApiError, NexxSessionExpiredError, NexxTransportError
from pynexx.session import Session


def raise_for_envelope(
    body: dict[str, Any],
    *,
    endpoint: str,
    error_cls: type[NexxApiError] = NexxApiError,
) -> None:
    """Raise *error_cls* when the reply envelope reports a failure."""
    if body.get("IsSuccess", True) is not False:
        return
    code = str(body.get("ErrorCode") or body.get("Code") or "")
    message = str(body.get("Message") or body.get("ErrorMessage") or "")
    raise error_cls(
        f"{endpoint} failed: code={code} message={message}",
        code=code,
        endpoint=endpoint,
    )


def unwrap_result(body: dict[str, Any]) -> Any:
    """Return the ``Result`` member of a reply, or the reply itself when absent."""
    if "Result" in body:
        return body["Result"]
    return body


async def request_authenticated(
    *,
    method: str,
    endpoint: str,
    session: Session,
    transport: Transport,
    payload: Mapping[str, Any] | None = None,
    error_cls: type[NexxApiError] = NexxApiError,
) -> dict[str, Any]:
    """Send a bearer-authenticated request and return the checked reply body."""
    try:
        body = await transport.request_json(
            method,
            endpoint,
            payload=payload,
            authorization=session.authorization,
        )
    except NexxTransportError as exc:
        if exc.status_code in SESSION_EXPIRED_STATUS:
            raise NexxSessionExpiredError(
                f"{endpoint} rejected the session token (HTTP {exc.status_code})",
                code=str(exc.status_code),
                endpoint=endpoint,
            ) from exc
        raise
    raise_for_envelope(body, endpoint=endpoint, error_cls=error_cls)
    return body
