"""Authenticated session state."""

from __future__ import annotations

import time

from pydantic import BaseModel, ConfigDict, Field

#: Fallback access-token lifetime when the server does not report one.
DEFAULT_SESSION_TTL: float = 3600.0


class AuthSession(BaseModel):
    """Immutable session state after successful sign-in.

    Parameters
    ----------
    user_id : str
        The authenticated user's ID; also the profile row key.
    access_token : str
        Bearer token for table and storage requests.
    refresh_token : str
        Token for renewing the session.
    created_at : float
        Monotonic timestamp (``time.monotonic()``) when the session
        was created.  Defaults to *now* if not provided.
    ttl : float
        Time-to-live in seconds.
    """

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        validate_default=True,
        str_strip_whitespace=True,
    )

    user_id: str
    access_token: str
    refresh_token: str = ""
    created_at: float = Field(default_factory=time.monotonic)
    ttl: float = DEFAULT_SESSION_TTL

    def auth_headers(self) -> dict[str, str]:
        return {"authorization": f"Bearer {self.access_token}"}

    @property
    def is_expired(self) -> bool:
        """Whether the session has exceeded its TTL."""
        return (time.monotonic() - self.created_at) >= self.ttl
