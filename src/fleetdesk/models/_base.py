"""Base model for fleetdesk records.

Every record model inherits from :class:`FleetBaseModel` which provides:

* ``alias_generator=to_camel`` so camelCase payloads (``licensePlate``)
  map automatically to snake_case fields, while snake_case database rows
  validate by field name.
* A ``model_validator(mode="before")`` that drops ``None`` values so the
  field default is used instead.
* Immutability: records are replaced, never mutated in place.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, model_validator
from pydantic.alias_generators import to_camel


class FleetBaseModel(BaseModel):
    """Base for committed records (vehicles, profiles)."""

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        populate_by_name=True,
        alias_generator=to_camel,
        str_strip_whitespace=True,
    )

    @model_validator(mode="before")
    @classmethod
    def _drop_nulls(cls, values: Any) -> Any:
        if not isinstance(values, dict):
            return values
        return {key: value for key, value in values.items() if value is not None}

    def to_payload(self, *, camel: bool = False, exclude: set[str] | None = None) -> dict[str, Any]:
        """JSON-compatible dict, snake_case by default (database columns)."""
        return self.model_dump(mode="json", by_alias=camel, exclude=exclude)
