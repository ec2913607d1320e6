"""Custom exception hierarchy for pynexx."""

from __future__ import annotations


class NexxError(Exception):
    """Base exception for all pynexx errors."""


class NexxConfigError(NexxError):
    """Invalid or missing configuration."""


class NexxTransportError(NexxError):
    """HTTP-level failure (network, non-2xx, invalid JSON)."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        endpoint: str = "",
    ) -> None:
        self.status_code = status_code
        self.endpoint = endpoint
        super().__init__(message)


class NexxApiError(NexxError):
    """API replied but reported a failure (``IsSuccess: false``)."""

    def __init__(
        self,
        message: str,
        *,
        code: str = "",
        endpoint: str = "",
    ) -> None:
        self.code = code
        self.endpoint = endpoint
        super().__init__(message)


class NexxAuthenticationError(NexxApiError):
    """Login failed or credentials were rejected."""


class NexxSessionExpiredError(NexxAuthenticationError):
    """Bearer token rejected by the server.

    Raised when a post-login call fails with HTTP 401/403.  The client
    catches this internally to trigger automatic re-authentication.
    """


class NexxCommandError(NexxApiError):
    """An open/close command was rejected by the remote device API."""
