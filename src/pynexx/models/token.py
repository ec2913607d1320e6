"""Authentication token model."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict


class AuthToken(BaseModel):
    """Token returned after successful login.

    Parameters
    ----------
    access_token : str
        Bearer token sent with every post-login request.
    expires_in : float or None
        Token lifetime in seconds as reported by the server, if any.
    raw : dict
        Full decoded result dict for access to additional fields.
    """

    model_config = ConfigDict(frozen=True)

    access_token: str
    expires_in: float | None = None
    raw: dict[str, Any]
