from __future__ import annotations

import asyncio
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

import pytest

from fleetdesk.editing import DraftEditor
from fleetdesk.exceptions import CommitInProgressError, DraftStateError, MissingFieldError, PersistenceError
from fleetdesk.models.vehicle import Vehicle, VehicleDraft
from fleetdesk.validation import validate_vehicle_draft


@dataclass
class FakePersister:
    """Records persisted drafts; can fail or block on demand."""

    fail_with: Exception | None = None
    gate: asyncio.Event | None = None
    calls: list[tuple[VehicleDraft, Vehicle | None]] = field(default_factory=list)

    async def __call__(self, draft: VehicleDraft, source: Vehicle | None) -> Vehicle:
        self.calls.append((draft, source))
        if self.gate is not None:
            await self.gate.wait()
        if self.fail_with is not None:
            raise self.fail_with
        return draft.with_id(source.id if source is not None else "new-1")


def _validate(draft: Mapping[str, Any]) -> VehicleDraft:
    return validate_vehicle_draft(draft)


def _source() -> Vehicle:
    return Vehicle(id="1", name="Fleet Vehicle 001", license_plate="ABC-123", model="Ford Transit", fuel_level=75)


def _editor(persister: FakePersister) -> DraftEditor[Vehicle, VehicleDraft]:
    return DraftEditor(validate=_validate, persist=persister, name="vehicle")


def test_begin_snapshots_a_copy() -> None:
    editor = _editor(FakePersister())
    source = _source()

    draft = editor.begin(source)
    draft["name"] = "mutated outside"
    editor.edit(fuel_level=5)

    assert editor.is_editing
    assert not editor.is_new
    assert editor.draft["name"] == "Fleet Vehicle 001"
    assert editor.draft["fuel_level"] == 5
    assert source.fuel_level == 75


def test_begin_new_from_defaults() -> None:
    editor = _editor(FakePersister())

    draft = editor.begin(defaults=VehicleDraft())

    assert editor.is_new
    assert draft["fuel_level"] == 100
    assert draft["name"] == ""


def test_edit_keys_are_normalized_to_field_names() -> None:
    editor = _editor(FakePersister())
    editor.begin(_source())

    draft = editor.edit(licensePlate="NEW-999", fuelLevel=5)

    assert draft["license_plate"] == "NEW-999"
    assert draft["fuel_level"] == 5
    assert "licensePlate" not in draft
    assert "fuelLevel" not in draft


def test_edit_without_begin_raises() -> None:
    editor = _editor(FakePersister())

    with pytest.raises(DraftStateError):
        editor.edit(name="x")


def test_cancel_discards_draft() -> None:
    editor = _editor(FakePersister())
    editor.begin(_source())
    editor.set("name", "changed")

    editor.cancel()

    assert not editor.is_editing
    assert editor.source is None
    with pytest.raises(DraftStateError):
        _ = editor.draft


@pytest.mark.asyncio
async def test_commit_returns_authoritative_record_and_exits_editing() -> None:
    persister = FakePersister()
    editor = _editor(persister)
    editor.begin(_source())
    editor.edit(name="Renamed")

    result = await editor.commit()

    assert result.id == "1"
    assert result.name == "Renamed"
    assert editor.committed == result
    assert not editor.is_editing
    assert persister.calls[0][1] == _source()


@pytest.mark.asyncio
async def test_validation_failure_keeps_draft_and_skips_persist() -> None:
    persister = FakePersister()
    editor = _editor(persister)
    editor.begin(defaults=VehicleDraft())
    editor.edit(name="Van", license_plate="")

    with pytest.raises(MissingFieldError):
        await editor.commit()

    assert persister.calls == []
    assert editor.is_editing
    assert editor.draft["name"] == "Van"
    assert not editor.in_flight


@pytest.mark.asyncio
async def test_persist_failure_keeps_draft_for_retry() -> None:
    persister = FakePersister(fail_with=PersistenceError("offline", status_code=503))
    editor = _editor(persister)
    editor.begin(_source())
    editor.edit(mileage="99999")

    with pytest.raises(PersistenceError):
        await editor.commit()

    assert editor.is_editing
    assert editor.draft["mileage"] == "99999"

    persister.fail_with = None
    result = await editor.commit()
    assert result.mileage == 99999
    assert len(persister.calls) == 2


@pytest.mark.asyncio
async def test_second_commit_while_in_flight_is_rejected() -> None:
    gate = asyncio.Event()
    persister = FakePersister(gate=gate)
    editor = _editor(persister)
    editor.begin(_source())

    first = asyncio.create_task(editor.commit())
    await asyncio.sleep(0)
    assert editor.in_flight

    with pytest.raises(CommitInProgressError):
        await editor.commit()
    with pytest.raises(CommitInProgressError):
        editor.edit(name="late edit")
    with pytest.raises(CommitInProgressError):
        editor.cancel()

    gate.set()
    result = await first

    assert result.id == "1"
    assert len(persister.calls) == 1
    assert not editor.in_flight


@pytest.mark.asyncio
async def test_reset_during_commit_does_not_resurrect_state() -> None:
    gate = asyncio.Event()
    editor = _editor(FakePersister(gate=gate))
    editor.begin(_source())

    task = asyncio.create_task(editor.commit())
    await asyncio.sleep(0)
    editor.reset()
    gate.set()
    await task

    assert editor.committed is None
    assert not editor.is_editing
