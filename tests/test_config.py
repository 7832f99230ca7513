from __future__ import annotations

import pytest

from fleetdesk.config import FleetConfig
from fleetdesk.exceptions import FleetConfigError

_FLEET_ENV = (
    "FLEET_BASE_URL",
    "FLEET_API_KEY",
    "FLEET_VEHICLES_TABLE",
    "FLEET_PROFILES_TABLE",
    "FLEET_AVATAR_BUCKET",
    "FLEET_VEHICLE_SOURCE",
    "FLEET_MAX_AVATAR_BYTES",
    "FLEET_REQUEST_TIMEOUT",
    "FLEET_STRICT_RANGES",
    "FLEET_API_TRACE_ENABLED",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for key in _FLEET_ENV:
        monkeypatch.delenv(key, raising=False)


def test_defaults() -> None:
    config = FleetConfig.from_env()

    assert config.vehicle_source == "sample"
    assert config.max_avatar_bytes == 5_242_880
    assert not config.strict_ranges
    with pytest.raises(FleetConfigError):
        config.require_backend()


def test_from_env_reads_fleet_variables(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("FLEET_BASE_URL", "https://fleet.example.com")
    monkeypatch.setenv("FLEET_API_KEY", "anon")
    monkeypatch.setenv("FLEET_VEHICLE_SOURCE", "rest")
    monkeypatch.setenv("FLEET_MAX_AVATAR_BYTES", "1024")
    monkeypatch.setenv("FLEET_REQUEST_TIMEOUT", "2.5")
    monkeypatch.setenv("FLEET_STRICT_RANGES", "yes")
    monkeypatch.setenv("FLEET_API_TRACE_ENABLED", "on")

    config = FleetConfig.from_env()

    config.require_backend()
    assert config.vehicle_source == "rest"
    assert config.max_avatar_bytes == 1024
    assert config.request_timeout == 2.5
    assert config.strict_ranges
    assert config.api_trace_enabled


def test_overrides_win(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("FLEET_STRICT_RANGES", "true")
    monkeypatch.setenv("FLEET_MAX_AVATAR_BYTES", "not-a-number")

    config = FleetConfig.from_env(strict_ranges=False, max_avatar_bytes=10)

    assert not config.strict_ranges
    assert config.max_avatar_bytes == 10


def test_bad_integer_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("FLEET_MAX_AVATAR_BYTES", "lots")

    with pytest.raises(FleetConfigError):
        FleetConfig.from_env()


def test_unknown_bool_falls_back_to_default(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("FLEET_STRICT_RANGES", "maybe")

    assert not FleetConfig.from_env().strict_ranges


@pytest.mark.parametrize(
    "kwargs",
    [{"vehicle_source": "csv"}, {"max_avatar_bytes": 0}, {"request_timeout": -1.0}],
)
def test_invalid_values(kwargs: dict[str, object]) -> None:
    with pytest.raises(FleetConfigError):
        FleetConfig(**kwargs)  # type: ignore[arg-type]
