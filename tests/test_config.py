from __future__ import annotations

import pytest

from pynexx._constants import BASE_URL
from pynexx.config import NexxConfig
from pynexx.exceptions import NexxConfigError

_ENV_KEYS = (
    "NEXX_USERNAME",
    "NEXX_PASSWORD",
    "NEXX_BASE_URL",
    "NEXX_SESSION_TTL",
    "NEXX_POLL_INTERVAL",
    "NEXX_CONFIRMATION_DELAY",
    "NEXX_INCLUDE_GATE",
    "NEXX_TREAT_GATE_AS_GARAGE",
)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for key in _ENV_KEYS:
        monkeypatch.delenv(key, raising=False)


def test_defaults() -> None:
    config = NexxConfig(username="u", password="p")

    assert config.base_url == BASE_URL
    assert config.poll_interval == 60
    assert config.confirmation_delay == 12
    assert not config.include_gate
    assert config.treat_gate_as_garage


def test_from_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("NEXX_USERNAME", "user@example.com")
    monkeypatch.setenv("NEXX_PASSWORD", "secret")
    monkeypatch.setenv("NEXX_POLL_INTERVAL", "30")
    monkeypatch.setenv("NEXX_CONFIRMATION_DELAY", "8.5")
    monkeypatch.setenv("NEXX_INCLUDE_GATE", "yes")
    monkeypatch.setenv("NEXX_TREAT_GATE_AS_GARAGE", "off")

    config = NexxConfig.from_env()

    assert config.username == "user@example.com"
    assert config.poll_interval == 30.0
    assert config.confirmation_delay == 8.5
    assert config.include_gate
    assert not config.treat_gate_as_garage


def test_overrides_win(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("NEXX_USERNAME", "user@example.com")
    monkeypatch.setenv("NEXX_PASSWORD", "secret")
    monkeypatch.setenv("NEXX_POLL_INTERVAL", "30")

    config = NexxConfig.from_env(poll_interval=5.0, include_gate=True)

    assert config.poll_interval == 5.0
    assert config.include_gate


def test_unrecognised_bool_keeps_default(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("NEXX_TREAT_GATE_AS_GARAGE", "maybe")

    config = NexxConfig.from_env(username="u", password="p")

    assert config.treat_gate_as_garage


def test_missing_credentials() -> None:
    with pytest.raises(NexxConfigError, match="username, password"):
        NexxConfig.from_env()


def test_malformed_number(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("NEXX_POLL_INTERVAL", "often")

    with pytest.raises(NexxConfigError, match="NEXX_POLL_INTERVAL"):
        NexxConfig.from_env(username="u", password="p")


@pytest.mark.parametrize(
    ("field", "value"),
    [("poll_interval", 0), ("poll_interval", -1), ("confirmation_delay", -0.5)],
)
def test_invalid_timing(field: str, value: float) -> None:
    with pytest.raises(NexxConfigError):
        NexxConfig(username="u", password="p", **{field: value})
