"""Object storage endpoint for avatar uploads."""

from __future__ import annotations

import mimetypes
import secrets

from fleetdesk._constants import STORAGE_PREFIX
from fleetdesk._transport import Transport
from fleetdesk.config import FleetConfig
from fleetdesk.session import AuthSession


def object_path(user_id: str, content_type: str) -> str:
    extension = mimetypes.guess_extension(content_type) or ".bin"
    return f"{user_id}/{secrets.token_hex(8)}{extension}"


def public_url(config: FleetConfig, path: str) -> str:
    return f"{config.base_url.rstrip('/')}{STORAGE_PREFIX}/object/public/{config.avatar_bucket}/{path}"


async def upload_avatar(
    config: FleetConfig,
    session: AuthSession,
    transport: Transport,
    data: bytes,
    content_type: str,
) -> str:
    """Upload *data* to the avatar bucket and return its public URL."""
    path = object_path(session.user_id, content_type)
    await transport.upload_bytes(
        f"{STORAGE_PREFIX}/object/{config.avatar_bucket}/{path}",
        data,
        content_type=content_type,
        session=session,
        headers={"x-upsert": "false"},
    )
    return public_url(config, path)
