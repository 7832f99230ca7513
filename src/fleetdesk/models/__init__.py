"""Data models for fleet records."""

from fleetdesk.models._base import FleetBaseModel
from fleetdesk.models.fleet import FleetAggregates
from fleetdesk.models.profile import PROFILE_FIELDS, Profile, ProfileDraft
from fleetdesk.models.token import AuthToken
from fleetdesk.models.vehicle import Vehicle, VehicleDraft, VehicleStatus

__all__ = [
    "AuthToken",
    "FleetAggregates",
    "FleetBaseModel",
    "PROFILE_FIELDS",
    "Profile",
    "ProfileDraft",
    "Vehicle",
    "VehicleDraft",
    "VehicleStatus",
]
