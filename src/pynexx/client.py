"""High-level async client for the Nexx device API."""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from typing import Any, TypeVar

import aiohttp

from pynexx._api import control as _control_api
from pynexx._api import devices as _devices_api
from pynexx._api.login import login as _login
from pynexx._transport import HttpTransport, Transport
from pynexx.config import NexxConfig
from pynexx.exceptions import NexxError, NexxSessionExpiredError
from pynexx.models.command import CommandAck, DoorCommand
from pynexx.models.device import CommandMetadata, DeviceRecord
from pynexx.session import Session

_logger = logging.getLogger(__name__)

T = TypeVar("T")


class NexxClient:
    """Async client for the Nexx device API.

    Usage::

        async with NexxClient(config) as client:
            await client.login()
            devices = await client.get_devices()

    ``open``/``close`` take optional :class:`CommandMetadata`; callers that
    want per-device defaults wrap the client in a
    :class:`pynexx.commands.DeviceCommandAdapter`.
    """

    def __init__(
        self,
        config: NexxConfig,
        *,
        session: aiohttp.ClientSession | None = None,
        transport: Transport | None = None,
    ) -> None:
        self._config = config
        self._external_session = session is not None
        self._http_session = session
        self._transport: Transport | None = transport
        self._external_transport = transport is not None
        self._session: Session | None = None

    # ------------------------------------------------------------------
    # Context manager lifecycle
    # ------------------------------------------------------------------

    async def __aenter__(self) -> NexxClient:
        if self._external_transport:
            return self
        if self._http_session is None:
            self._http_session = aiohttp.ClientSession()
        self._transport = HttpTransport(self._config, self._http_session)
        return self

    async def __aexit__(self, *exc: Any) -> None:
        if not self._external_session and self._http_session is not None:
            await self._http_session.close()
            self._http_session = None
        if not self._external_transport:
            self._transport = None

    # ------------------------------------------------------------------
    # Authentication
    # ------------------------------------------------------------------

    async def login(self) -> None:
        """Authenticate against the Nexx API and obtain a bearer token."""
        transport = self._require_transport()
        token = await _login(self._config, transport)

        if self._config.session_ttl > 0:
            ttl = self._config.session_ttl
        elif token.expires_in is not None and token.expires_in > 0:
            ttl = token.expires_in
        else:
            ttl = float("inf")
        self._session = Session(access_token=token.access_token, ttl=ttl)
        _logger.debug("Logged in; session ttl=%s", ttl)

    async def ensure_session(self) -> Session:
        """Return an active session, re-authenticating if expired."""
        if self._session is not None and not self._session.is_expired:
            return self._session
        await self.login()
        assert self._session is not None  # noqa: S101
        return self._session

    def invalidate_session(self) -> None:
        """Force session invalidation (next call will re-authenticate)."""
        self._session = None

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _require_transport(self) -> Transport:
        if self._transport is None:
            raise NexxError("Client not initialized. Use 'async with NexxClient(...) as client:'")
        return self._transport

    async def _call_with_reauth(self, fn: Callable[[], Awaitable[T]]) -> T:
        """Run an API call, retrying once on session expiry."""
        try:
            return await fn()
        except NexxSessionExpiredError:
            _logger.debug("Session expired; re-authenticating")
            self.invalidate_session()
            await self.ensure_session()
            return await fn()

    # ------------------------------------------------------------------
    # Read endpoints
    # ------------------------------------------------------------------

    async def get_devices(self) -> list[DeviceRecord]:
        """Fetch all devices associated with the account."""

        async def _call() -> list[DeviceRecord]:
            session = await self.ensure_session()
            return await _devices_api.fetch_devices(session, self._require_transport())

        return await self._call_with_reauth(_call)

    async def get_device_state(self, device_id: str) -> DeviceRecord:
        """Poll the current status of one device."""

        async def _call() -> DeviceRecord:
            session = await self.ensure_session()
            return await _devices_api.fetch_device_state(session, self._require_transport(), device_id)

        return await self._call_with_reauth(_call)

    # ------------------------------------------------------------------
    # Door commands
    # ------------------------------------------------------------------

    async def _door_command(
        self,
        device_id: str,
        command: DoorCommand,
        metadata: CommandMetadata | None,
    ) -> CommandAck:
        async def _call() -> CommandAck:
            session = await self.ensure_session()
            return await _control_api.send_door_command(
                session,
                self._require_transport(),
                device_id,
                command,
                metadata=metadata,
            )

        return await self._call_with_reauth(_call)

    async def open(self, device_id: str, metadata: CommandMetadata | None = None) -> CommandAck:
        """Open the door."""
        return await self._door_command(device_id, DoorCommand.OPEN, metadata)

    async def close(self, device_id: str, metadata: CommandMetadata | None = None) -> CommandAck:
        """Close the door."""
        return await self._door_command(device_id, DoorCommand.CLOSE, metadata)
