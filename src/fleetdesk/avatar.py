"""Avatar image ingestion.

An accepted image becomes a ``data:`` URI that lives only in the active
profile draft (a local preview). It is uploaded and persisted only when
that draft is committed.
"""

from __future__ import annotations

import base64
import binascii
import logging
from typing import Any

from fleetdesk._constants import IMAGE_CONTENT_PREFIX, MAX_AVATAR_BYTES
from fleetdesk.editing.draft import DraftEditor
from fleetdesk.exceptions import AvatarTooLargeError, InvalidAvatarTypeError

_logger = logging.getLogger(__name__)

_DATA_URI_PREFIX = "data:"
_BASE64_MARKER = ";base64,"


def encode_data_uri(data: bytes, content_type: str) -> str:
    return f"{_DATA_URI_PREFIX}{content_type}{_BASE64_MARKER}{base64.b64encode(data).decode('ascii')}"


def split_data_uri(uri: str) -> tuple[str, bytes]:
    """Decode a base64 ``data:`` URI into ``(content_type, bytes)``."""
    if not uri.startswith(_DATA_URI_PREFIX) or _BASE64_MARKER not in uri:
        raise ValueError("not a base64 data URI")
    header, _, payload = uri[len(_DATA_URI_PREFIX) :].partition(_BASE64_MARKER)
    try:
        data = base64.b64decode(payload, validate=True)
    except binascii.Error as exc:
        raise ValueError("data URI payload is not valid base64") from exc
    return header, data


class AvatarIngestor:
    """Validate an uploaded image and turn it into a local preview URI."""

    def __init__(self, *, max_bytes: int = MAX_AVATAR_BYTES) -> None:
        self._max_bytes = max_bytes

    @property
    def max_bytes(self) -> int:
        return self._max_bytes

    def check(self, data: bytes, content_type: str) -> None:
        if not content_type.startswith(IMAGE_CONTENT_PREFIX):
            raise InvalidAvatarTypeError(
                f"Expected an image, got content type {content_type!r}",
                content_type=content_type,
            )
        size = len(data)
        if size > self._max_bytes:
            raise AvatarTooLargeError(
                f"Image is {size} bytes; the limit is {self._max_bytes}",
                size=size,
                limit=self._max_bytes,
            )

    def ingest(self, data: bytes, content_type: str) -> str:
        """Return a ``data:`` URI for *data* or raise an :class:`AvatarError`."""
        self.check(data, content_type)
        _logger.debug("Ingested %d byte %s avatar", len(data), content_type)
        return encode_data_uri(data, content_type)

    def ingest_into(
        self,
        editor: DraftEditor[Any, Any],
        data: bytes,
        content_type: str,
        *,
        field: str = "avatar_ref",
    ) -> str:
        """Ingest and store the preview URI in *editor*'s active draft only."""
        uri = self.ingest(data, content_type)
        editor.set(field, uri)
        return uri
