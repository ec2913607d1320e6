"""Client and platform configuration for pynexx."""

from __future__ import annotations

import dataclasses
import os
from typing import Any

from pynexx._constants import BASE_URL, CONFIRMATION_DELAY_SECONDS, POLL_INTERVAL_SECONDS
from pynexx.exceptions import NexxConfigError


def _env_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in {"1", "true", "yes", "y", "on"}:
        return True
    if normalized in {"0", "false", "no", "n", "off"}:
        return False
    return default


def _env_float(env_key: str, value: str) -> float:
    try:
        return float(value)
    except ValueError as exc:
        raise NexxConfigError(f"{env_key} must be a number, got {value!r}") from exc


@dataclasses.dataclass(frozen=True)
class NexxConfig:
    """Client configuration.

    Parameters
    ----------
    username : str
        Nexx account email.
    password : str
        Nexx account password.
    base_url : str
        API base URL.
    session_ttl : float
        Bearer token time-to-live in seconds.  After this interval the
        client re-authenticates on the next API call.  Set to ``0`` to
        use the ``ExpiresIn`` value returned by the login endpoint
        (or never expire when the server sends none).
    poll_interval : float
        Seconds between reconciliation polls of each device.
    confirmation_delay : float
        Seconds after a successful open/close before the door is reported
        as fully open/closed, unless a poll confirms it sooner.
    include_gate : bool
        Register gate openers in addition to garage door openers.
    treat_gate_as_garage : bool
        Present gates under the garage door opener category.
    """

    username: str
    password: str
    base_url: str = BASE_URL
    session_ttl: float = 0.0
    poll_interval: float = POLL_INTERVAL_SECONDS
    confirmation_delay: float = CONFIRMATION_DELAY_SECONDS
    include_gate: bool = False
    treat_gate_as_garage: bool = True

    def __post_init__(self) -> None:
        if self.poll_interval <= 0:
            raise NexxConfigError("poll_interval must be positive")
        if self.confirmation_delay < 0:
            raise NexxConfigError("confirmation_delay must not be negative")

    @classmethod
    def from_env(cls, **overrides: Any) -> NexxConfig:
        """Create configuration from environment variables.

        Reads ``NEXX_USERNAME``, ``NEXX_PASSWORD`` and the optional
        ``NEXX_*`` variables below.  Explicit keyword arguments override
        environment values.

        Raises
        ------
        NexxConfigError
            If credentials are missing or a numeric variable is malformed.
        """
        env = os.environ

        config_kwargs: dict[str, Any] = {}
        for env_key, field_name in (
            ("NEXX_USERNAME", "username"),
            ("NEXX_PASSWORD", "password"),
            ("NEXX_BASE_URL", "base_url"),
        ):
            val = env.get(env_key)
            if val is not None:
                config_kwargs[field_name] = val

        for env_key, field_name in (
            ("NEXX_SESSION_TTL", "session_ttl"),
            ("NEXX_POLL_INTERVAL", "poll_interval"),
            ("NEXX_CONFIRMATION_DELAY", "confirmation_delay"),
        ):
            val = env.get(env_key)
            if val is not None and field_name not in overrides:
                config_kwargs[field_name] = _env_float(env_key, val)

        if "include_gate" not in overrides:
            config_kwargs["include_gate"] = _env_bool(env.get("NEXX_INCLUDE_GATE"), False)
        if "treat_gate_as_garage" not in overrides:
            config_kwargs["treat_gate_as_garage"] = _env_bool(env.get("NEXX_TREAT_GATE_AS_GARAGE"), True)

        config_kwargs.update(overrides)

        missing = [name for name in ("username", "password") if not config_kwargs.get(name)]
        if missing:
            raise NexxConfigError(f"Missing required configuration: {', '.join(missing)}")

        return cls(**config_kwargs)
