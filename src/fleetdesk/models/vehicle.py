"""Vehicle models."""

from __future__ import annotations

from datetime import date
from enum import StrEnum
from typing import Any

from pydantic import Field, field_validator

from fleetdesk.ingestion.normalize import int_or_zero, parse_date
from fleetdesk.models._base import FleetBaseModel


class VehicleStatus(StrEnum):
    ACTIVE = "active"
    MAINTENANCE = "maintenance"
    IDLE = "idle"


class VehicleDraft(FleetBaseModel):
    """A vehicle record without an id.

    This is the payload of an add submission; the store assigns the id.
    Defaults match an empty "add vehicle" form.
    """

    name: str = ""
    """Display name (e.g. ``"Fleet Vehicle 001"``)."""
    license_plate: str = ""
    """License plate (e.g. ``"ABC-123"``)."""
    model: str = ""
    """Make and model (e.g. ``"Ford Transit"``)."""
    status: VehicleStatus = VehicleStatus.IDLE
    location: str = ""
    """Free-text location, may be empty."""
    fuel_level: int = 100
    """Fuel level in percent; intended range 0-100 but not enforced here."""
    mileage: int = 0
    """Odometer reading; intended to be non-negative but not enforced here."""
    last_maintenance: date = Field(default_factory=date.today)

    @field_validator("fuel_level", "mileage", mode="before")
    @classmethod
    def _coerce_ints(cls, value: Any) -> int:
        return int_or_zero(value)

    @field_validator("last_maintenance", mode="before")
    @classmethod
    def _coerce_date(cls, value: Any) -> Any:
        parsed = parse_date(value)
        return value if parsed is None else parsed

    def with_id(self, vehicle_id: str) -> Vehicle:
        return Vehicle(id=vehicle_id, **self.model_dump())


class Vehicle(VehicleDraft):
    """A committed vehicle record.

    ``id`` is assigned once at creation and never changes; an update
    replaces every other field.
    """

    id: str

    @field_validator("id", mode="before")
    @classmethod
    def _id_to_str(cls, value: Any) -> str:
        vehicle_id = str(value).strip()
        if not vehicle_id:
            raise ValueError("id must be non-empty")
        return vehicle_id

    def to_draft(self) -> VehicleDraft:
        return VehicleDraft(**self.model_dump(exclude={"id"}))
