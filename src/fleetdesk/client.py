"""High-level async client for the fleet console backend."""

from __future__ import annotations

import logging
from typing import Any

import aiohttp

from fleetdesk._api import auth as _auth_api
from fleetdesk._transport import RestTransport, Transport
from fleetdesk.config import FleetConfig
from fleetdesk.console import ConsoleSession
from fleetdesk.exceptions import FleetAuthenticationError, FleetError
from fleetdesk.repositories import (
    InMemoryVehicleRepository,
    RestAuthProvider,
    RestAvatarStorage,
    RestProfileRepository,
    RestVehicleRepository,
    VehicleRepository,
)
from fleetdesk.session import AuthSession

_logger = logging.getLogger(__name__)


class FleetClient:
    """Async client that signs in and opens console sessions.

    Usage::

        async with FleetClient(config) as client:
            await client.login("me@example.com", "secret")
            console = await client.open_console()
    """

    def __init__(
        self,
        config: FleetConfig,
        *,
        session: aiohttp.ClientSession | None = None,
        transport: Transport | None = None,
    ) -> None:
        self._config = config
        self._external_session = session is not None
        self._http_session = session
        self._transport: Transport | None = transport
        self._external_transport = transport is not None
        self._session: AuthSession | None = None
        self._console: ConsoleSession | None = None

    # ------------------------------------------------------------------
    # Context manager lifecycle
    # ------------------------------------------------------------------

    async def __aenter__(self) -> FleetClient:
        if self._transport is None:
            self._config.require_backend()
            if self._http_session is None:
                self._http_session = aiohttp.ClientSession()
            self._transport = RestTransport(self._config, self._http_session)
        return self

    async def __aexit__(self, *exc: Any) -> None:
        if self._console is not None:
            self._console.teardown()
            self._console = None
        if not self._external_session and self._http_session is not None:
            await self._http_session.close()
            self._http_session = None
        if not self._external_transport:
            self._transport = None

    # ------------------------------------------------------------------
    # Authentication
    # ------------------------------------------------------------------

    @property
    def session(self) -> AuthSession | None:
        return self._session

    async def login(self, email: str, password: str) -> AuthSession:
        """Sign in with email and password."""
        transport = self._require_transport()
        token = await _auth_api.sign_in(transport, email, password)
        self._session = AuthSession(
            user_id=token.user_id,
            access_token=token.access_token,
            refresh_token=token.refresh_token,
            ttl=token.expires_in,
        )
        _logger.debug("Signed in user %s", token.user_id)
        return self._session

    async def sign_out(self) -> None:
        """Sign out and tear down the open console, if any."""
        console, self._console = self._console, None
        if console is not None:
            result = await console.sign_out()
            self._session = None
            result.unwrap()
            return
        if self._session is not None:
            transport = self._require_transport()
            session, self._session = self._session, None
            await _auth_api.sign_out(transport, session)

    # ------------------------------------------------------------------
    # Console
    # ------------------------------------------------------------------

    def _require_transport(self) -> Transport:
        if self._transport is None:
            raise FleetError("Client not initialized. Use 'async with FleetClient(...) as client:'")
        return self._transport

    def _require_session(self) -> AuthSession:
        if self._session is None:
            raise FleetAuthenticationError("Not signed in; call login() first")
        if self._session.is_expired:
            raise FleetAuthenticationError("Session expired; sign in again")
        return self._session

    def _vehicle_repository(self, session: AuthSession, transport: Transport) -> VehicleRepository:
        if self._config.vehicle_source == "rest":
            return RestVehicleRepository(self._config, session, transport)
        return InMemoryVehicleRepository()

    async def open_console(self) -> ConsoleSession:
        """Create and start the console session for the signed-in user."""
        session = self._require_session()
        transport = self._require_transport()
        if self._console is not None:
            self._console.teardown()

        profiles = RestProfileRepository(self._config, session, transport)
        console = ConsoleSession(
            RestAuthProvider(session, transport, profiles),
            self._vehicle_repository(session, transport),
            profiles,
            storage=RestAvatarStorage(self._config, session, transport),
            config=self._config,
        )
        self._console = await console.start()
        return self._console
