"""Client configuration for fleetdesk."""

from __future__ import annotations

import dataclasses
import os
from typing import Any

from fleetdesk._constants import (
    DEFAULT_AVATAR_BUCKET,
    DEFAULT_PROFILES_TABLE,
    DEFAULT_VEHICLES_TABLE,
    MAX_AVATAR_BYTES,
)
from fleetdesk.exceptions import FleetConfigError

VEHICLE_SOURCES: frozenset[str] = frozenset({"rest", "sample"})


def _env_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in {"1", "true", "yes", "y", "on"}:
        return True
    if normalized in {"0", "false", "no", "n", "off"}:
        return False
    return default


@dataclasses.dataclass(frozen=True)
class FleetConfig:
    """Client configuration.

    Parameters
    ----------
    base_url : str
        Backend base URL (e.g. ``"https://<project>.supabase.co"``).
    api_key : str
        Public (anon) API key sent as the ``apikey`` header.
    vehicles_table : str
        Table holding vehicle rows.
    profiles_table : str
        Table holding profile rows keyed by user id.
    avatar_bucket : str
        Storage bucket that receives uploaded avatars.
    vehicle_source : str
        ``"rest"`` to read/write vehicles through the backend table, or
        ``"sample"`` to serve the built-in sample fleet from memory.
    strict_ranges : bool
        Reject fuel levels outside 0-100 and negative mileage instead of
        accepting them as entered.
    max_avatar_bytes : int
        Largest accepted avatar upload in bytes.
    request_timeout : float
        Total timeout in seconds for one backend request.
    api_trace_enabled : bool
        Log redacted request/response bodies at DEBUG level.
    """

    base_url: str = ""
    api_key: str = ""
    vehicles_table: str = DEFAULT_VEHICLES_TABLE
    profiles_table: str = DEFAULT_PROFILES_TABLE
    avatar_bucket: str = DEFAULT_AVATAR_BUCKET
    vehicle_source: str = "sample"
    strict_ranges: bool = False
    max_avatar_bytes: int = MAX_AVATAR_BYTES
    request_timeout: float = 30.0
    api_trace_enabled: bool = False

    def __post_init__(self) -> None:
        if self.vehicle_source not in VEHICLE_SOURCES:
            raise FleetConfigError(
                f"vehicle_source must be one of {sorted(VEHICLE_SOURCES)}, got {self.vehicle_source!r}"
            )
        if self.max_avatar_bytes <= 0:
            raise FleetConfigError("max_avatar_bytes must be positive")
        if self.request_timeout <= 0:
            raise FleetConfigError("request_timeout must be positive")

    def require_backend(self) -> None:
        if not self.base_url:
            raise FleetConfigError("base_url is required for backend access")
        if not self.api_key:
            raise FleetConfigError("api_key is required for backend access")

    @classmethod
    def from_env(cls, **overrides: Any) -> FleetConfig:
        """Create configuration from environment variables.

        Reads ``FLEET_BASE_URL``, ``FLEET_API_KEY`` and optional ``FLEET_*``
        variables. Explicit keyword arguments override environment values.

        Parameters
        ----------
        **overrides
            Explicit field values that take precedence over env vars.

        Returns
        -------
        FleetConfig
            Populated configuration.
        """
        env = os.environ

        _ENV_CONFIG_MAP = {
            "FLEET_BASE_URL": "base_url",
            "FLEET_API_KEY": "api_key",
            "FLEET_VEHICLES_TABLE": "vehicles_table",
            "FLEET_PROFILES_TABLE": "profiles_table",
            "FLEET_AVATAR_BUCKET": "avatar_bucket",
            "FLEET_VEHICLE_SOURCE": "vehicle_source",
        }
        config_kwargs: dict[str, Any] = {}
        for env_key, field_name in _ENV_CONFIG_MAP.items():
            val = env.get(env_key)
            if val is not None:
                config_kwargs[field_name] = val

        max_bytes_env = env.get("FLEET_MAX_AVATAR_BYTES")
        if max_bytes_env is not None and "max_avatar_bytes" not in overrides:
            try:
                config_kwargs["max_avatar_bytes"] = int(max_bytes_env)
            except ValueError as exc:
                raise FleetConfigError(f"FLEET_MAX_AVATAR_BYTES is not an integer: {max_bytes_env!r}") from exc

        timeout_env = env.get("FLEET_REQUEST_TIMEOUT")
        if timeout_env is not None and "request_timeout" not in overrides:
            try:
                config_kwargs["request_timeout"] = float(timeout_env)
            except ValueError as exc:
                raise FleetConfigError(f"FLEET_REQUEST_TIMEOUT is not a number: {timeout_env!r}") from exc

        if "strict_ranges" not in overrides:
            config_kwargs["strict_ranges"] = _env_bool(env.get("FLEET_STRICT_RANGES"), False)

        if "api_trace_enabled" not in overrides:
            config_kwargs["api_trace_enabled"] = _env_bool(env.get("FLEET_API_TRACE_ENABLED"), False)

        config_kwargs.update(overrides)

        return cls(**config_kwargs)
