from __future__ import annotations

from datetime import date
from typing import Any

import pytest

from fleetdesk.exceptions import InvalidEmailError, InvalidFieldError, InvalidNumberError, MissingFieldError
from fleetdesk.models.vehicle import VehicleStatus
from fleetdesk.validation import is_valid_email, validate_profile_draft, validate_vehicle_draft


def _vehicle_form(**overrides: Any) -> dict[str, Any]:
    form: dict[str, Any] = {
        "name": "Fleet Vehicle 004",
        "license_plate": "JKL-012",
        "model": "Ford Transit",
        "status": "active",
        "location": "",
        "fuel_level": "80",
        "mileage": "1200",
        "last_maintenance": "2024-02-01",
    }
    form.update(overrides)
    return form


class TestVehicleDraft:
    def test_valid_form_is_normalized(self) -> None:
        draft = validate_vehicle_draft(_vehicle_form(name="  Van 4  "))

        assert draft.name == "Van 4"
        assert draft.status == VehicleStatus.ACTIVE
        assert draft.fuel_level == 80
        assert draft.mileage == 1200
        assert draft.last_maintenance == date(2024, 2, 1)

    @pytest.mark.parametrize("field", ["name", "license_plate", "model"])
    @pytest.mark.parametrize("value", ["", "   ", None])
    def test_required_text_fields(self, field: str, value: Any) -> None:
        with pytest.raises(MissingFieldError) as exc_info:
            validate_vehicle_draft(_vehicle_form(**{field: value}))

        assert exc_info.value.field == field

    def test_camel_case_keys_accepted(self) -> None:
        draft = validate_vehicle_draft(
            {"name": "Van", "licensePlate": "ABC-1", "model": "Daily", "fuelLevel": 12, "lastMaintenance": "2024-03-03"}
        )

        assert draft.license_plate == "ABC-1"
        assert draft.fuel_level == 12

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [("abc", 0), ("", 0), (None, 0), ("42km", 42), ("7.9", 7), (55, 55)],
    )
    def test_numbers_are_parsed_leniently(self, raw: Any, expected: int) -> None:
        draft = validate_vehicle_draft(_vehicle_form(fuel_level=raw, mileage=raw))

        assert draft.fuel_level == expected
        assert draft.mileage == expected

    def test_out_of_range_numbers_pass_by_default(self) -> None:
        draft = validate_vehicle_draft(_vehicle_form(fuel_level=150, mileage=-5))

        assert draft.fuel_level == 150
        assert draft.mileage == -5

    def test_strict_ranges_reject_fuel(self) -> None:
        with pytest.raises(InvalidNumberError) as exc_info:
            validate_vehicle_draft(_vehicle_form(fuel_level=101), strict_ranges=True)

        assert exc_info.value.field == "fuel_level"

    def test_strict_ranges_reject_negative_mileage(self) -> None:
        with pytest.raises(InvalidNumberError) as exc_info:
            validate_vehicle_draft(_vehicle_form(mileage=-1), strict_ranges=True)

        assert exc_info.value.field == "mileage"

    def test_unknown_status(self) -> None:
        with pytest.raises(InvalidFieldError) as exc_info:
            validate_vehicle_draft(_vehicle_form(status="parked"))

        assert exc_info.value.field == "status"

    def test_bad_date(self) -> None:
        with pytest.raises(InvalidFieldError):
            validate_vehicle_draft(_vehicle_form(last_maintenance="yesterday"))

    def test_id_key_is_ignored(self) -> None:
        draft = validate_vehicle_draft(_vehicle_form(id="123"))

        assert "id" not in draft.model_dump()


class TestProfileDraft:
    @pytest.mark.parametrize("email", ["a@b.co", "jane.doe@example.com", "x+tag@sub.domain.org"])
    def test_valid_emails(self, email: str) -> None:
        assert is_valid_email(email)

    @pytest.mark.parametrize("email", ["foo@bar", "no-at.example.com", "two words@example.com", "a@@b.co"])
    def test_invalid_emails(self, email: str) -> None:
        assert not is_valid_email(email)

    def test_rejects_email_without_tld(self) -> None:
        with pytest.raises(InvalidEmailError):
            validate_profile_draft({"name": "Jane", "email": "foo@bar"})

    @pytest.mark.parametrize("email", [" a@b.co", "a@b.co ", "\ta@b.co"])
    def test_surrounding_whitespace_is_rejected(self, email: str) -> None:
        with pytest.raises(InvalidEmailError):
            validate_profile_draft({"name": "Jane", "email": email})

    def test_accepts_short_email(self) -> None:
        draft = validate_profile_draft({"name": "Jane", "email": "a@b.co"})

        assert draft.email == "a@b.co"
        assert draft.phone == ""

    @pytest.mark.parametrize("field", ["name", "email"])
    def test_required_fields(self, field: str) -> None:
        form = {"name": "Jane", "email": "jane@example.com", field: ""}

        with pytest.raises(MissingFieldError) as exc_info:
            validate_profile_draft(form)

        assert exc_info.value.field == field

    def test_optional_fields_and_avatar_alias(self) -> None:
        draft = validate_profile_draft(
            {
                "id": "user-1",
                "name": "Jane",
                "email": "jane@example.com",
                "company": "Acme Logistics",
                "avatar_url": "https://cdn.example.com/a.png",
            }
        )

        assert draft.email == "jane@example.com"
        assert draft.company == "Acme Logistics"
        assert draft.avatar_ref == "https://cdn.example.com/a.png"
