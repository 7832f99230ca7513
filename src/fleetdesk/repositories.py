"""Collaborator contracts consumed by the console core, plus adapters.

The console depends only on the protocols below. Two families of
implementations ship with the library:

* :class:`InMemoryVehicleRepository` serves the built-in sample fleet and
  echoes writes back without leaving the process.
* ``Rest*`` adapters talk to the REST backend through a
  :class:`~fleetdesk._transport.Transport`.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Protocol, runtime_checkable

from fleetdesk._api import auth as _auth_api
from fleetdesk._api import profiles as _profiles_api
from fleetdesk._api import storage as _storage_api
from fleetdesk._api import vehicles as _vehicles_api
from fleetdesk._constants import SAMPLE_VEHICLES
from fleetdesk._transport import Transport
from fleetdesk.config import FleetConfig
from fleetdesk.exceptions import DuplicateVehicleError, VehicleNotFoundError
from fleetdesk.models.profile import Profile, ProfileDraft
from fleetdesk.models.vehicle import Vehicle
from fleetdesk.session import AuthSession

_logger = logging.getLogger(__name__)


# ----------------------------------------------------------------------
# Protocols
# ----------------------------------------------------------------------


@runtime_checkable
class AuthProvider(Protocol):
    """Current user identity and cached profile for one signed-in session."""

    @property
    def user_id(self) -> str: ...

    @property
    def profile(self) -> Profile | None: ...

    async def refresh_profile(self) -> Profile:
        """Refetch the profile and replace the cached copy."""
        ...

    async def sign_out(self) -> None: ...


class VehicleRepository(Protocol):
    async def fetch_all(self) -> list[Vehicle]: ...

    async def insert(self, vehicle: Vehicle) -> Vehicle: ...

    async def update(self, vehicle: Vehicle) -> Vehicle: ...


class ProfileRepository(Protocol):
    async def fetch(self, user_id: str) -> Profile: ...

    async def update(self, user_id: str, fields: ProfileDraft) -> Profile: ...


class AvatarStorage(Protocol):
    async def upload(self, data: bytes, content_type: str) -> str:
        """Store an image and return its URI."""
        ...


# ----------------------------------------------------------------------
# In-memory
# ----------------------------------------------------------------------


def sample_fleet() -> list[Vehicle]:
    return [Vehicle.model_validate(row) for row in SAMPLE_VEHICLES]


class InMemoryVehicleRepository:
    """Vehicle repository kept entirely in process memory.

    Seeded with the sample fleet unless *vehicles* is given.
    """

    def __init__(self, vehicles: Iterable[Vehicle] | None = None) -> None:
        seed = sample_fleet() if vehicles is None else list(vehicles)
        self._rows: dict[str, Vehicle] = {vehicle.id: vehicle for vehicle in seed}

    async def fetch_all(self) -> list[Vehicle]:
        return list(self._rows.values())

    async def insert(self, vehicle: Vehicle) -> Vehicle:
        if vehicle.id in self._rows:
            raise DuplicateVehicleError(f"Duplicate vehicle id {vehicle.id!r}", vehicle_id=vehicle.id)
        self._rows[vehicle.id] = vehicle
        return vehicle

    async def update(self, vehicle: Vehicle) -> Vehicle:
        if vehicle.id not in self._rows:
            raise VehicleNotFoundError(f"Cannot update unknown vehicle {vehicle.id!r}", vehicle_id=vehicle.id)
        self._rows[vehicle.id] = vehicle
        return vehicle


# ----------------------------------------------------------------------
# REST
# ----------------------------------------------------------------------


class RestVehicleRepository:
    def __init__(self, config: FleetConfig, session: AuthSession, transport: Transport) -> None:
        self._config = config
        self._session = session
        self._transport = transport

    async def fetch_all(self) -> list[Vehicle]:
        return await _vehicles_api.fetch_vehicles(self._config, self._session, self._transport)

    async def insert(self, vehicle: Vehicle) -> Vehicle:
        return await _vehicles_api.insert_vehicle(self._config, self._session, self._transport, vehicle)

    async def update(self, vehicle: Vehicle) -> Vehicle:
        return await _vehicles_api.update_vehicle(self._config, self._session, self._transport, vehicle)


class RestProfileRepository:
    def __init__(self, config: FleetConfig, session: AuthSession, transport: Transport) -> None:
        self._config = config
        self._session = session
        self._transport = transport

    async def fetch(self, user_id: str) -> Profile:
        return await _profiles_api.fetch_profile(self._config, self._session, self._transport, user_id)

    async def update(self, user_id: str, fields: ProfileDraft) -> Profile:
        return await _profiles_api.update_profile(self._config, self._session, self._transport, user_id, fields)


class RestAvatarStorage:
    def __init__(self, config: FleetConfig, session: AuthSession, transport: Transport) -> None:
        self._config = config
        self._session = session
        self._transport = transport

    async def upload(self, data: bytes, content_type: str) -> str:
        return await _storage_api.upload_avatar(self._config, self._session, self._transport, data, content_type)


class RestAuthProvider:
    """Auth collaborator backed by an :class:`AuthSession` and the profiles table."""

    def __init__(
        self,
        session: AuthSession,
        transport: Transport,
        profiles: ProfileRepository,
        *,
        profile: Profile | None = None,
    ) -> None:
        self._session = session
        self._transport = transport
        self._profiles = profiles
        self._profile = profile

    @property
    def user_id(self) -> str:
        return self._session.user_id

    @property
    def session(self) -> AuthSession:
        return self._session

    @property
    def profile(self) -> Profile | None:
        return self._profile

    async def refresh_profile(self) -> Profile:
        self._profile = await self._profiles.fetch(self._session.user_id)
        return self._profile

    async def sign_out(self) -> None:
        await _auth_api.sign_out(self._transport, self._session)
        self._profile = None
        _logger.debug("Signed out user %s", self._session.user_id)
