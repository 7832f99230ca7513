"""Derived fleet statistics."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class FleetAggregates(BaseModel):
    """Values derived from the current vehicle collection.

    Always recomputed from the store; never cached.
    """

    model_config = ConfigDict(frozen=True)

    total: int = 0
    active_count: int = 0
    maintenance_count: int = 0
    average_fuel: int = 0
    """Mean fuel level rounded half-up; ``0`` for an empty fleet."""
