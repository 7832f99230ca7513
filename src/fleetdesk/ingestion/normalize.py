"""Normalization helpers.

Centralizes lenient parsing of form input and backend rows.
"""

from __future__ import annotations

import math
import re
from datetime import date, datetime
from typing import Any

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


def safe_int(value: Any) -> int | None:
    """Parse an integer the way a browser number input does.

    Numbers are truncated toward zero; strings are read up to the first
    non-digit (``"42km"`` -> ``42``, ``"7.9"`` -> ``7``). Anything without a
    leading integer yields ``None``.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if math.isnan(value) or math.isinf(value):
            return None
        return int(value)
    match = _LEADING_INT.match(str(value))
    if match is None:
        return None
    return int(match.group(1))


def int_or_zero(value: Any) -> int:
    parsed = safe_int(value)
    return 0 if parsed is None else parsed


def safe_str(value: Any) -> str:
    if value is None:
        return ""
    return str(value)


def parse_date(value: Any) -> date | None:
    """Accept ``date``, ``datetime`` or an ISO ``YYYY-MM-DD[...]`` string."""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    text = str(value).strip()
    try:
        return date.fromisoformat(text[:10])
    except ValueError:
        return None
