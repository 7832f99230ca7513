"""Tests for Pydantic model parsing with FleetBaseModel."""

from __future__ import annotations

from datetime import date

import pytest
from pydantic import ValidationError

from fleetdesk.models.profile import Profile, ProfileDraft
from fleetdesk.models.vehicle import Vehicle, VehicleDraft, VehicleStatus
from fleetdesk.repositories import sample_fleet

# ------------------------------------------------------------------
# Vehicle
# ------------------------------------------------------------------


class TestVehicle:
    def test_camel_case_payload(self) -> None:
        vehicle = Vehicle.model_validate(
            {
                "id": 4,
                "name": "Fleet Vehicle 004",
                "licensePlate": "JKL-012",
                "model": "Renault Master",
                "status": "maintenance",
                "fuelLevel": "55",
                "mileage": None,
                "lastMaintenance": "2024-02-01",
            }
        )

        assert vehicle.id == "4"
        assert vehicle.license_plate == "JKL-012"
        assert vehicle.status == VehicleStatus.MAINTENANCE
        assert vehicle.fuel_level == 55
        assert vehicle.mileage == 0
        assert vehicle.last_maintenance == date(2024, 2, 1)

    def test_empty_id_rejected(self) -> None:
        with pytest.raises(ValidationError):
            Vehicle(id="  ", name="x", license_plate="y", model="z")

    def test_records_are_frozen(self) -> None:
        vehicle = sample_fleet()[0]

        with pytest.raises(ValidationError):
            vehicle.name = "changed"  # type: ignore[misc]

    def test_draft_defaults(self) -> None:
        draft = VehicleDraft()

        assert draft.status == VehicleStatus.IDLE
        assert draft.fuel_level == 100
        assert draft.mileage == 0
        assert draft.last_maintenance == date.today()

    def test_with_id_and_back(self) -> None:
        draft = VehicleDraft(name="Van", license_plate="VAN-1", model="Daily")

        vehicle = draft.with_id("abc")

        assert vehicle.id == "abc"
        assert vehicle.to_draft() == draft

    def test_payload_camel_and_snake(self) -> None:
        vehicle = sample_fleet()[0]

        assert vehicle.to_payload()["license_plate"] == "ABC-123"
        camel = vehicle.to_payload(camel=True)
        assert camel["licensePlate"] == "ABC-123"
        assert camel["lastMaintenance"] == "2024-01-15"


def test_sample_fleet() -> None:
    fleet = sample_fleet()

    assert [v.id for v in fleet] == ["1", "2", "3"]
    assert [v.fuel_level for v in fleet] == [75, 20, 90]
    assert [v.status for v in fleet] == [VehicleStatus.ACTIVE, VehicleStatus.MAINTENANCE, VehicleStatus.IDLE]


# ------------------------------------------------------------------
# Profile
# ------------------------------------------------------------------


class TestProfile:
    def test_row_maps_avatar_column(self) -> None:
        draft = ProfileDraft(name="Jane", email="jane@example.com", avatar_ref="https://a/b.png")

        row = draft.to_row()

        assert row["avatar_url"] == "https://a/b.png"
        assert set(row) == {"name", "email", "phone", "company", "position", "address", "avatar_url"}

    def test_local_avatar_flag(self) -> None:
        assert ProfileDraft(avatar_ref="data:image/png;base64,AAAA").has_local_avatar
        assert not ProfileDraft(avatar_ref="https://a/b.png").has_local_avatar

    def test_nulls_become_empty_strings(self) -> None:
        profile = Profile.model_validate({"id": "user-1", "name": "Jane", "email": "j@x.io", "phone": None})

        assert profile.phone == ""
        assert profile.to_draft().name == "Jane"

    @pytest.mark.parametrize(("name", "initials"), [("Jane Doe", "JD"), ("cher", "C"), ("", "")])
    def test_initials(self, name: str, initials: str) -> None:
        assert Profile(id="u", name=name).initials == initials
