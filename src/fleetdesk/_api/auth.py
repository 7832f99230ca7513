"""Sign-in / sign-out endpoints.

Endpoints:
  - /auth/v1/token?grant_type=password
  - /auth/v1/logout
"""

from __future__ import annotations

import logging
from typing import Any

from fleetdesk._constants import AUTH_PREFIX
from fleetdesk._redact import redact_for_log
from fleetdesk._transport import Transport
from fleetdesk.exceptions import FleetAuthenticationError, PersistenceError
from fleetdesk.models.token import AuthToken
from fleetdesk.session import AuthSession

_logger = logging.getLogger(__name__)

TOKEN_ENDPOINT = f"{AUTH_PREFIX}/token"
LOGOUT_ENDPOINT = f"{AUTH_PREFIX}/logout"


def parse_token_response(response: Any) -> AuthToken:
    """Parse the password-grant response into an :class:`AuthToken`."""
    if not isinstance(response, dict):
        raise FleetAuthenticationError("Sign-in response is not an object", endpoint=TOKEN_ENDPOINT)
    user = response.get("user")
    user_id = user.get("id") if isinstance(user, dict) else None
    access_token = response.get("access_token")
    if not user_id or not access_token:
        _logger.debug("Unexpected sign-in response: %s", redact_for_log(response))
        raise FleetAuthenticationError("Sign-in response missing user id or access token", endpoint=TOKEN_ENDPOINT)
    expires_in = response.get("expires_in")
    return AuthToken(
        user_id=str(user_id),
        access_token=str(access_token),
        refresh_token=str(response.get("refresh_token") or ""),
        expires_in=float(expires_in) if isinstance(expires_in, (int, float)) else 3600.0,
        raw=response,
    )


async def sign_in(transport: Transport, email: str, password: str) -> AuthToken:
    try:
        response = await transport.request_json(
            "POST",
            TOKEN_ENDPOINT,
            params={"grant_type": "password"},
            json_body={"email": email, "password": password},
        )
    except FleetAuthenticationError:
        raise
    except PersistenceError as exc:
        if exc.status_code is not None and 400 <= exc.status_code < 500:
            raise FleetAuthenticationError(
                "Invalid email or password",
                status_code=exc.status_code,
                endpoint=TOKEN_ENDPOINT,
            ) from exc
        raise
    return parse_token_response(response)


async def sign_out(transport: Transport, session: AuthSession) -> None:
    await transport.request_json("POST", LOGOUT_ENDPOINT, session=session)
