"""Profile table endpoints."""

from __future__ import annotations

from pydantic import ValidationError

from fleetdesk._api._common import RETURN_REPRESENTATION, eq, single_row, table_endpoint
from fleetdesk._transport import Transport
from fleetdesk.config import FleetConfig
from fleetdesk.exceptions import PersistenceError
from fleetdesk.models.profile import Profile, ProfileDraft
from fleetdesk.session import AuthSession


def _parse_profile(row: dict[str, object], *, endpoint: str) -> Profile:
    try:
        return Profile.model_validate(row)
    except ValidationError as exc:
        raise PersistenceError(f"Malformed profile row from {endpoint}: {exc}", endpoint=endpoint) from exc


async def fetch_profile(config: FleetConfig, session: AuthSession, transport: Transport, user_id: str) -> Profile:
    endpoint = table_endpoint(config.profiles_table)
    decoded = await transport.request_json(
        "GET",
        endpoint,
        session=session,
        params={"select": "*", "id": eq(user_id)},
    )
    row = single_row(decoded, endpoint=endpoint)
    if row is None:
        raise PersistenceError(f"No profile for user {user_id}", status_code=404, endpoint=endpoint)
    return _parse_profile(row, endpoint=endpoint)


async def update_profile(
    config: FleetConfig,
    session: AuthSession,
    transport: Transport,
    user_id: str,
    fields: ProfileDraft,
) -> Profile:
    endpoint = table_endpoint(config.profiles_table)
    decoded = await transport.request_json(
        "PATCH",
        endpoint,
        session=session,
        params={"id": eq(user_id)},
        json_body=fields.to_row(),
        headers=RETURN_REPRESENTATION,
    )
    row = single_row(decoded, endpoint=endpoint)
    if row is None:
        raise PersistenceError(f"No profile for user {user_id}", status_code=404, endpoint=endpoint)
    return _parse_profile(row, endpoint=endpoint)
