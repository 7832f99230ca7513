"""Store change notifications.

The store emits one :class:`StoreChange` after every committed mutation so
that views holding a selected id know to re-resolve it.
"""

from __future__ import annotations

from datetime import UTC, datetime
from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field


class ChangeKind(StrEnum):
    LOADED = "loaded"
    ADDED = "added"
    UPDATED = "updated"
    CLEARED = "cleared"


class StoreChange(BaseModel):
    """A committed mutation of the vehicle collection."""

    model_config = ConfigDict(frozen=True)

    kind: ChangeKind
    vehicle_ids: tuple[str, ...] = ()
    observed_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
