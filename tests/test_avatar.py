from __future__ import annotations

import base64
from typing import Any

import pytest

from fleetdesk._constants import MAX_AVATAR_BYTES
from fleetdesk.avatar import AvatarIngestor, split_data_uri
from fleetdesk.editing import DraftEditor
from fleetdesk.exceptions import AvatarTooLargeError, DraftStateError, InvalidAvatarTypeError
from fleetdesk.models.profile import Profile, ProfileDraft
from fleetdesk.validation import validate_profile_draft


async def _never_persist(_fields: ProfileDraft, _source: Any) -> Profile:  # pragma: no cover
    raise AssertionError("persist must not run")


def _profile_editor() -> DraftEditor[Profile, ProfileDraft]:
    return DraftEditor(validate=validate_profile_draft, persist=_never_persist, name="profile")


def test_limit_is_five_mebibytes() -> None:
    assert MAX_AVATAR_BYTES == 5_242_880


def test_accepts_exactly_the_limit() -> None:
    uri = AvatarIngestor().ingest(b"\x00" * 5_242_880, "image/png")

    assert uri.startswith("data:image/png;base64,")


def test_rejects_one_byte_over_the_limit() -> None:
    with pytest.raises(AvatarTooLargeError) as exc_info:
        AvatarIngestor().ingest(b"\x00" * 5_242_881, "image/png")

    assert exc_info.value.size == 5_242_881
    assert exc_info.value.limit == 5_242_880


@pytest.mark.parametrize("content_type", ["text/plain", "application/pdf", "", "IMAGE/png"])
def test_rejects_non_image_content_types(content_type: str) -> None:
    with pytest.raises(InvalidAvatarTypeError):
        AvatarIngestor().ingest(b"GIF89a", content_type)


def test_data_uri_encodes_bytes() -> None:
    payload = b"\x89PNG\r\n\x1a\n"
    uri = AvatarIngestor().ingest(payload, "image/png")

    assert uri == "data:image/png;base64," + base64.b64encode(payload).decode("ascii")
    assert split_data_uri(uri) == ("image/png", payload)


def test_split_data_uri_rejects_plain_urls() -> None:
    with pytest.raises(ValueError):
        split_data_uri("https://cdn.example.com/a.png")


def test_custom_limit() -> None:
    ingestor = AvatarIngestor(max_bytes=4)

    with pytest.raises(AvatarTooLargeError):
        ingestor.ingest(b"12345", "image/jpeg")


def test_ingest_into_touches_only_the_draft() -> None:
    profile = Profile(id="user-1", name="Jane Doe", email="jane@example.com", avatar_ref="https://cdn/old.png")
    editor = _profile_editor()
    editor.begin(profile)

    uri = AvatarIngestor().ingest_into(editor, b"img", "image/gif")

    assert editor.draft["avatar_ref"] == uri
    assert profile.avatar_ref == "https://cdn/old.png"


def test_ingest_into_requires_active_draft() -> None:
    with pytest.raises(DraftStateError):
        AvatarIngestor().ingest_into(_profile_editor(), b"img", "image/gif")
