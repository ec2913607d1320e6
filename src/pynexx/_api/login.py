"""Login endpoint.

Endpoint:
  - /api/Account/Login
"""

from __future__ import annotations

import logging
from typing import Any

from pynexx._api._common import raise_for_envelope, unwrap_result
from pynexx._constants import LOGIN_ENDPOINT
from pynexx._redact import redact_for_log
from pynexx._transport import Transport
from pynexx.config import NexxConfig
from pynexx.exceptions import NexxAuthenticationError, NexxTransportError
from pynexx.models.token import AuthToken

_logger = logging.getLogger(__name__)


def build_login_request(config: NexxConfig) -> dict[str, Any]:
    """Build the JSON body for the login endpoint."""
    return {"Email": config.username, "Password": config.password}


def parse_login_response(body: dict[str, Any]) -> AuthToken:
    """Parse a login reply and extract the bearer token.

    Raises
    ------
    NexxAuthenticationError
        If login failed or the reply carries no token.
    """
    raise_for_envelope(body, endpoint=LOGIN_ENDPOINT, error_cls=NexxAuthenticationError)

    result = unwrap_result(body)
    _logger.debug("Login result decoded parsed=%s", redact_for_log(result))
    if not isinstance(result, dict):
        raise NexxAuthenticationError("Login response missing Result", endpoint=LOGIN_ENDPOINT)

    token = result.get("AccessToken") or result.get("Token")
    if not token:
        raise NexxAuthenticationError("Login response missing token", endpoint=LOGIN_ENDPOINT)

    expires_in: float | None = None
    raw_expiry = result.get("ExpiresIn")
    if raw_expiry is not None:
        try:
            expires_in = float(raw_expiry)
        except (TypeError, ValueError):
            _logger.debug("Ignoring unparseable ExpiresIn=%r", raw_expiry)

    return AuthToken(access_token=str(token), expires_in=expires_in, raw=result)


async def login(config: NexxConfig, transport: Transport) -> AuthToken:
    """Authenticate with the configured credentials."""
    try:
        body = await transport.request_json("POST", LOGIN_ENDPOINT, payload=build_login_request(config))
    except NexxTransportError as exc:
        if exc.status_code in (400, 401, 403):
            raise NexxAuthenticationError(
                f"Login rejected (HTTP {exc.status_code})",
                code=str(exc.status_code),
                endpoint=LOGIN_ENDPOINT,
            ) from exc
        raise
    return parse_login_response(body)
