"""Vehicle table endpoints."""

from __future__ import annotations

import logging

from pydantic import ValidationError

from fleetdesk._api._common import RETURN_REPRESENTATION, eq, expect_rows, single_row, table_endpoint
from fleetdesk._transport import Transport
from fleetdesk.config import FleetConfig
from fleetdesk.exceptions import PersistenceError, VehicleNotFoundError
from fleetdesk.models.vehicle import Vehicle
from fleetdesk.session import AuthSession

_logger = logging.getLogger(__name__)


def _parse_vehicle(row: dict[str, object], *, endpoint: str) -> Vehicle:
    try:
        return Vehicle.model_validate(row)
    except ValidationError as exc:
        raise PersistenceError(f"Malformed vehicle row from {endpoint}: {exc}", endpoint=endpoint) from exc


async def fetch_vehicles(config: FleetConfig, session: AuthSession, transport: Transport) -> list[Vehicle]:
    """Fetch every vehicle row visible to the session."""
    endpoint = table_endpoint(config.vehicles_table)
    decoded = await transport.request_json(
        "GET",
        endpoint,
        session=session,
        params={"select": "*"},
    )
    rows = expect_rows(decoded, endpoint=endpoint)
    vehicles = [_parse_vehicle(row, endpoint=endpoint) for row in rows]
    _logger.debug("Fetched %d vehicle rows", len(vehicles))
    return vehicles


async def insert_vehicle(
    config: FleetConfig,
    session: AuthSession,
    transport: Transport,
    vehicle: Vehicle,
) -> Vehicle:
    endpoint = table_endpoint(config.vehicles_table)
    decoded = await transport.request_json(
        "POST",
        endpoint,
        session=session,
        json_body=vehicle.to_payload(),
        headers=RETURN_REPRESENTATION,
    )
    row = single_row(decoded, endpoint=endpoint)
    if row is None:
        # Row-level security may hide the echoed row; fall back to what we sent.
        return vehicle
    return _parse_vehicle(row, endpoint=endpoint)


async def update_vehicle(
    config: FleetConfig,
    session: AuthSession,
    transport: Transport,
    vehicle: Vehicle,
) -> Vehicle:
    """Replace every column of the row with ``vehicle.id``."""
    endpoint = table_endpoint(config.vehicles_table)
    decoded = await transport.request_json(
        "PATCH",
        endpoint,
        session=session,
        params={"id": eq(vehicle.id)},
        json_body=vehicle.to_payload(exclude={"id"}),
        headers=RETURN_REPRESENTATION,
    )
    row = single_row(decoded, endpoint=endpoint)
    if row is None:
        raise VehicleNotFoundError(f"{endpoint} has no vehicle {vehicle.id!r}", vehicle_id=vehicle.id)
    return _parse_vehicle(row, endpoint=endpoint)
