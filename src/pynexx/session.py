"""Bearer session returned by a successful login."""

from __future__ import annotations

import time

from pydantic import BaseModel, ConfigDict, Field


class Session(BaseModel):
    """Immutable bearer session.

    ``created_at`` is a ``time.monotonic()`` reading; ``ttl`` is the
    number of seconds the token is trusted before the client logs in
    again.  An infinite ttl means the token is only replaced when the
    server rejects it.
    """

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        validate_default=True,
        str_strip_whitespace=True,
    )

    access_token: str = Field(min_length=1)
    created_at: float = Field(default_factory=time.monotonic)
    ttl: float = float("inf")

    @property
    def authorization(self) -> str:
        """Value for the ``Authorization`` header."""
        return f"Bearer {self.access_token}"

    @property
    def age(self) -> float:
        return time.monotonic() - self.created_at

    @property
    def remaining(self) -> float:
        """Seconds until the ttl runs out (never negative)."""
        return max(self.ttl - self.age, 0.0)

    @property
    def is_expired(self) -> bool:
        return self.remaining <= 0.0
