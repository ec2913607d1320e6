"""JSON-over-HTTPS transport for the Nexx API."""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from typing import Any, Protocol

import aiohttp

from pynexx._constants import USER_AGENT
from pynexx._redact import redact_for_log
from pynexx.config import NexxConfig
from pynexx.exceptions import NexxTransportError

_logger = logging.getLogger(__name__)


class Transport(Protocol):
    """Structural transport interface used by endpoint modules.

    Having a protocol here makes it easy to pass test doubles while
    keeping the production implementation (`HttpTransport`) concrete.
    """

    async def request_json(
        self,
        method: str,
        endpoint: str,
        *,
        payload: Mapping[str, Any] | None = None,
        authorization: str | None = None,
    ) -> dict[str, Any]: ...


class HttpTransport:
    """aiohttp transport that sends JSON bodies and decodes JSON replies."""

    def __init__(self, config: NexxConfig, http_session: aiohttp.ClientSession) -> None:
        self._config = config
        self._http = http_session

    async def request_json(
        self,
        method: str,
        endpoint: str,
        *,
        payload: Mapping[str, Any] | None = None,
        authorization: str | None = None,
    ) -> dict[str, Any]:
        """Send a request and return the decoded JSON object.

        Raises
        ------
        NexxTransportError
            On network failures, non-2xx statuses, or replies that are
            not a JSON object.
        """
        headers: dict[str, str] = {
            "accept": "application/json",
            "user-agent": USER_AGENT,
        }
        if authorization:
            headers["authorization"] = authorization

        url = f"{self._config.base_url}{endpoint}"
        _logger.debug("%s %s payload=%s", method, url, redact_for_log(payload))

        try:
            async with self._http.request(
                method,
                url,
                json=dict(payload) if payload is not None else None,
                headers=headers,
            ) as resp:
                text = await resp.text()
                if not 200 <= resp.status < 300:
                    raise NexxTransportError(
                        f"HTTP {resp.status} from {endpoint}: {text[:200]}",
                        status_code=resp.status,
                        endpoint=endpoint,
                    )
        except NexxTransportError:
            raise
        except aiohttp.ClientError as exc:
            raise NexxTransportError(
                f"Request to {endpoint} failed: {exc}",
                endpoint=endpoint,
            ) from exc

        if not text.strip():
            return {}

        try:
            body = json.loads(text)
        except json.JSONDecodeError as exc:
            raise NexxTransportError(
                f"Invalid JSON from {endpoint}: {text[:200]}",
                endpoint=endpoint,
            ) from exc

        if not isinstance(body, dict):
            raise NexxTransportError(
                f"Expected a JSON object from {endpoint}, got {type(body).__name__}",
                endpoint=endpoint,
            )
        _logger.debug("%s %s response=%s", method, url, redact_for_log(body))
        return body
