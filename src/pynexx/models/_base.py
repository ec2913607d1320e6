"""Base model and enum for Nexx API responses.

Every Nexx response model inherits from :class:`NexxBaseModel` which
provides:

* ``alias_generator=to_pascal`` so the API's PascalCase keys map
  automatically to snake_case fields.
* A ``model_validator(mode="before")`` that drops ``None`` and empty
  strings so the field default is used.
* A ``raw`` dict that captures the original payload.

State enums inherit from :class:`NexxEnum` which resolves any value
without a mapped member to ``UNKNOWN``.
"""

from __future__ import annotations

import enum
from datetime import UTC, datetime
from typing import Annotated, Any

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_pascal

# Threshold to distinguish seconds from milliseconds.
_MS_THRESHOLD = 1_000_000_000_000


def parse_nexx_timestamp(value: Any) -> datetime | None:
    """Convert a Nexx timestamp to a timezone-aware UTC datetime.

    Accepts ISO-8601 strings (``"2024-05-01T10:00:00Z"``) and epoch
    numbers in seconds or milliseconds.  Naive values are taken as UTC.
    Returns ``None`` for anything that cannot be interpreted.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, (int, float)):
        ts = float(value)
        if ts >= _MS_THRESHOLD:
            ts /= 1000.0
        try:
            return datetime.fromtimestamp(ts, tz=UTC)
        except (OverflowError, OSError, ValueError):
            return None
    elif isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        if text.isdigit():
            try:
                return parse_nexx_timestamp(int(text))
            except ValueError:
                return None
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError:
            return None
    else:
        return None
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=UTC)
    return parsed


NexxTimestamp = Annotated[datetime | None, BeforeValidator(parse_nexx_timestamp)]
"""Annotated type that coerces Nexx timestamps to UTC datetimes (or ``None``)."""


class NexxEnum(enum.IntEnum):
    """Base for Nexx API state enums.

    Every subclass **must** define ``UNKNOWN = -1``.
    Values the API sends that have no mapped member resolve to
    ``UNKNOWN`` instead of raising ``ValueError``.
    """

    @classmethod
    def _missing_(cls, value: object) -> NexxEnum:
        if isinstance(value, str):
            text = value.strip()
            try:
                return cls(int(text))
            except ValueError:
                pass
            member = cls.__members__.get(text.upper())
            if member is not None:
                return member
        unknown: NexxEnum = cls.UNKNOWN  # type: ignore[attr-defined]
        return unknown


class NexxBaseModel(BaseModel):
    """Base for Nexx API response models."""

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        populate_by_name=True,
        alias_generator=to_pascal,
    )

    raw: dict[str, Any] = Field(default_factory=dict)
    """Original API response dict."""

    @model_validator(mode="before")
    @classmethod
    def _clean_values(cls, values: Any) -> Any:
        """Drop empty values and stash the raw payload."""
        if not isinstance(values, dict):
            return values
        cleaned: dict[str, Any] = {}
        for key, value in values.items():
            if value is None:
                continue
            if isinstance(value, str) and not value.strip():
                continue
            cleaned[key] = value
        # Keep an explicitly supplied raw= (kwargs construction).
        if "raw" not in values:
            cleaned["raw"] = dict(values)
        return cleaned
