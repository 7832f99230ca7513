"""User profile models."""

from __future__ import annotations

from typing import Any

from pydantic import AliasChoices, Field, field_validator

from fleetdesk.ingestion.normalize import safe_str
from fleetdesk.models._base import FleetBaseModel

PROFILE_FIELDS: tuple[str, ...] = ("name", "email", "phone", "company", "position", "address", "avatar_ref")


class ProfileDraft(FleetBaseModel):
    """Editable profile fields."""

    name: str = ""
    email: str = ""
    phone: str = ""
    company: str = ""
    position: str = ""
    address: str = ""
    avatar_ref: str = Field(
        default="",
        validation_alias=AliasChoices("avatar_ref", "avatarRef", "avatar_url", "avatarUrl"),
    )
    """Image reference: a storage URL, or a ``data:`` URI for a local preview."""

    @field_validator("name", "email", "phone", "company", "position", "address", "avatar_ref", mode="before")
    @classmethod
    def _coerce_str(cls, value: Any) -> str:
        return safe_str(value)

    @property
    def has_local_avatar(self) -> bool:
        """Whether the avatar is an un-uploaded ``data:`` preview."""
        return self.avatar_ref.startswith("data:")

    def to_row(self) -> dict[str, str]:
        """Column mapping used by the profiles table."""
        row = self.model_dump(include=set(PROFILE_FIELDS) - {"avatar_ref"})
        row["avatar_url"] = self.avatar_ref
        return row


class Profile(ProfileDraft):
    """The signed-in user's profile. ``id`` equals the session user id."""

    id: str

    def to_draft(self) -> ProfileDraft:
        return ProfileDraft(**self.model_dump(exclude={"id"}))

    @property
    def initials(self) -> str:
        return "".join(part[0] for part in self.name.split() if part).upper()
