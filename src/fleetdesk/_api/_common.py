"""Shared helpers for REST endpoint modules.

It is internal to fleetdesk and may change at any time.
"""

from __future__ import annotations

from typing import Any

from fleetdesk._constants import REST_PREFIX
from fleetdesk.exceptions import PersistenceError

#: Ask PostgREST to echo written rows back so the caller gets the stored record.
RETURN_REPRESENTATION: dict[str, str] = {"prefer": "return=representation"}


def table_endpoint(table: str) -> str:
    return f"{REST_PREFIX}/{table}"


def eq(value: str) -> str:
    """PostgREST equality filter value."""
    return f"eq.{value}"


def expect_rows(decoded: Any, *, endpoint: str) -> list[dict[str, Any]]:
    """Return *decoded* as a list of row dicts or raise :class:`PersistenceError`."""
    if decoded is None:
        return []
    if isinstance(decoded, dict):
        decoded = [decoded]
    if not isinstance(decoded, list) or not all(isinstance(row, dict) for row in decoded):
        raise PersistenceError(f"Unexpected payload from {endpoint}: expected rows", endpoint=endpoint)
    return decoded


def single_row(decoded: Any, *, endpoint: str) -> dict[str, Any] | None:
    rows = expect_rows(decoded, endpoint=endpoint)
    return rows[0] if rows else None
