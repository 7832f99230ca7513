"""Form validation for vehicle and profile drafts.

Validators take the raw draft mapping (snake_case or camelCase keys) and
return a validated, normalized model, or raise a
:class:`~fleetdesk.exceptions.FleetValidationError` subclass. They never
touch the network; the caller runs them strictly before any persistence
call.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import ValidationError
from pydantic.alias_generators import to_camel

from fleetdesk._constants import EMAIL_PATTERN, FUEL_LEVEL_MAX, FUEL_LEVEL_MIN, MILEAGE_MIN
from fleetdesk.exceptions import InvalidEmailError, InvalidFieldError, InvalidNumberError, MissingFieldError
from fleetdesk.ingestion.normalize import int_or_zero, parse_date
from fleetdesk.models.profile import ProfileDraft
from fleetdesk.models.vehicle import VehicleDraft, VehicleStatus

VEHICLE_REQUIRED_FIELDS: tuple[str, ...] = ("name", "license_plate", "model")
PROFILE_REQUIRED_FIELDS: tuple[str, ...] = ("name", "email")


def _lookup(draft: Mapping[str, Any], field: str) -> Any:
    if field in draft:
        return draft[field]
    return draft.get(to_camel(field))


def _require_text(draft: Mapping[str, Any], fields: tuple[str, ...]) -> None:
    for field in fields:
        value = _lookup(draft, field)
        if value is None or not str(value).strip():
            raise MissingFieldError(f"{field} is required", field=field)


def is_valid_email(email: str) -> bool:
    return EMAIL_PATTERN.match(email) is not None


def validate_vehicle_draft(draft: Mapping[str, Any], *, strict_ranges: bool = False) -> VehicleDraft:
    """Validate an add/edit vehicle submission.

    ``fuel_level`` and ``mileage`` that do not parse as integers become ``0``.
    Values outside their intended ranges pass unless *strict_ranges* is set.
    """
    _require_text(draft, VEHICLE_REQUIRED_FIELDS)

    fuel_level = int_or_zero(_lookup(draft, "fuel_level"))
    mileage = int_or_zero(_lookup(draft, "mileage"))
    if strict_ranges:
        if not FUEL_LEVEL_MIN <= fuel_level <= FUEL_LEVEL_MAX:
            raise InvalidNumberError(
                f"fuel_level must be between {FUEL_LEVEL_MIN} and {FUEL_LEVEL_MAX}, got {fuel_level}",
                field="fuel_level",
            )
        if mileage < MILEAGE_MIN:
            raise InvalidNumberError(f"mileage must be >= {MILEAGE_MIN}, got {mileage}", field="mileage")

    status = _lookup(draft, "status")
    if status is not None:
        try:
            status = VehicleStatus(status)
        except ValueError as exc:
            raise InvalidFieldError(f"Unknown vehicle status {status!r}", field="status") from exc

    last_maintenance = _lookup(draft, "last_maintenance")
    if last_maintenance is not None and parse_date(last_maintenance) is None:
        raise InvalidFieldError(f"Invalid date {last_maintenance!r}", field="last_maintenance")

    fields: dict[str, Any] = {
        "name": _lookup(draft, "name"),
        "license_plate": _lookup(draft, "license_plate"),
        "model": _lookup(draft, "model"),
        "status": status,
        "location": _lookup(draft, "location"),
        "fuel_level": fuel_level,
        "mileage": mileage,
        "last_maintenance": last_maintenance,
    }
    try:
        return VehicleDraft.model_validate(fields)
    except ValidationError as exc:
        error = exc.errors()[0]
        field = str(error["loc"][0]) if error["loc"] else ""
        raise InvalidFieldError(f"Invalid vehicle field {field}: {error['msg']}", field=field) from exc


def validate_profile_draft(draft: Mapping[str, Any]) -> ProfileDraft:
    """Validate a profile submission: name and a plausible email are required."""
    _require_text(draft, PROFILE_REQUIRED_FIELDS)

    email = str(_lookup(draft, "email"))
    if not is_valid_email(email):
        raise InvalidEmailError(f"Invalid email address {email!r}", field="email")

    fields = {key: value for key, value in draft.items() if key != "id"}
    fields["email"] = email
    try:
        return ProfileDraft.model_validate(fields)
    except ValidationError as exc:
        error = exc.errors()[0]
        field = str(error["loc"][0]) if error["loc"] else ""
        raise InvalidFieldError(f"Invalid profile field {field}: {error['msg']}", field=field) from exc
