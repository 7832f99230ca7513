"""Authentication token model."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict


class AuthToken(BaseModel):
    """Token returned after successful sign-in.

    Parameters
    ----------
    user_id : str
        The authenticated user's ID.
    access_token : str
        Bearer token sent with every table/storage request.
    refresh_token : str
        Token for obtaining a new access token.
    expires_in : float
        Seconds until ``access_token`` expires, as reported by the server.
    raw : dict
        Full decoded response for access to additional fields.
    """

    model_config = ConfigDict(frozen=True)

    user_id: str
    access_token: str
    refresh_token: str = ""
    expires_in: float = 3600.0
    raw: dict[str, Any]
