"""Session-scoped console state.

A :class:`ConsoleSession` is created after sign-in and torn down on
sign-out. It owns the vehicle store, the navigation state and the two
draft editors, and exposes every user action as a command method that
returns a :class:`CommandResult` instead of raising for recoverable
(:class:`~fleetdesk.exceptions.FleetError`) failures.

Usage::

    async with ConsoleSession(auth, vehicles, profiles) as console:
        console.select_tab(Screen.VEHICLE_LIST)
        console.begin_add_vehicle()
        console.edit_vehicle(name="Van 7", license_plate="VAN-007", model="Transit")
        result = await console.commit_vehicle()
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import StrEnum
from typing import Any, Generic, TypeVar

from fleetdesk.avatar import AvatarIngestor, split_data_uri
from fleetdesk.config import FleetConfig
from fleetdesk.editing.draft import DraftEditor
from fleetdesk.exceptions import (
    DraftStateError,
    FleetError,
    FleetValidationError,
    InvalidEmailError,
    InvalidFieldError,
    SessionClosedError,
)
from fleetdesk.models.fleet import FleetAggregates
from fleetdesk.models.profile import Profile, ProfileDraft
from fleetdesk.models.vehicle import Vehicle, VehicleDraft
from fleetdesk.repositories import AuthProvider, AvatarStorage, ProfileRepository, VehicleRepository
from fleetdesk.state.store import VehicleStore
from fleetdesk.state.view import Screen, ViewController, ViewState
from fleetdesk.validation import validate_profile_draft, validate_vehicle_draft

_logger = logging.getLogger(__name__)

T = TypeVar("T")


class NoticeLevel(StrEnum):
    INFO = "info"
    ERROR = "error"


@dataclass(frozen=True, slots=True)
class Notice:
    """A transient user-facing message (toast)."""

    level: NoticeLevel
    title: str
    message: str
    created_at: datetime = field(default_factory=lambda: datetime.now(UTC))


@dataclass(frozen=True)
class CommandResult(Generic[T]):
    """Outcome of a console command: a value or a recoverable error."""

    value: T | None = None
    error: FleetError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> T:
        if self.error is not None:
            raise self.error
        return self.value  # type: ignore[return-value]


def _error_title(exc: FleetError) -> str:
    if isinstance(exc, InvalidEmailError):
        return "Invalid Email"
    if isinstance(exc, FleetValidationError):
        return "Validation Error"
    return "Error"


class ConsoleSession:
    """All mutable UI state for one signed-in user."""

    def __init__(
        self,
        auth: AuthProvider,
        vehicles: VehicleRepository,
        profiles: ProfileRepository,
        *,
        storage: AvatarStorage | None = None,
        config: FleetConfig | None = None,
        id_factory: Callable[[], str] | None = None,
    ) -> None:
        self._config = config or FleetConfig()
        self._auth = auth
        self._profiles = profiles
        self._storage = storage
        self.store = VehicleStore(vehicles) if id_factory is None else VehicleStore(vehicles, id_factory=id_factory)
        self.view = ViewController(self.store)
        self.avatars = AvatarIngestor(max_bytes=self._config.max_avatar_bytes)
        self.vehicle_editor: DraftEditor[Vehicle, VehicleDraft] = DraftEditor(
            validate=self._validate_vehicle,
            persist=self._persist_vehicle,
            name="vehicle",
        )
        self.profile_editor: DraftEditor[Profile, ProfileDraft] = DraftEditor(
            validate=validate_profile_draft,
            persist=self._persist_profile,
            name="profile",
        )
        self._notices: list[Notice] = []
        self._open = False

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    async def __aenter__(self) -> ConsoleSession:
        return await self.start()

    async def __aexit__(self, *exc: Any) -> None:
        self.teardown()

    @property
    def is_open(self) -> bool:
        return self._open

    async def start(self) -> ConsoleSession:
        """Load the fleet (and profile, if not cached) and show the overview.

        A failed load is reported as a notice; the session stays usable with
        an empty fleet.
        """
        self._open = True
        self.view.reset()
        try:
            await self.store.load_all()
        except FleetError as exc:
            _logger.warning("Error fetching vehicles: %s", exc)
            self._notify(NoticeLevel.ERROR, "Error", f"Failed to load vehicles: {exc}")
        if self._auth.profile is None:
            try:
                await self._auth.refresh_profile()
            except FleetError as exc:
                _logger.warning("Error fetching profile: %s", exc)
                self._notify(NoticeLevel.ERROR, "Error", f"Failed to load profile: {exc}")
        return self

    def teardown(self) -> None:
        """Discard every piece of session state."""
        self.vehicle_editor.reset()
        self.profile_editor.reset()
        self.view.reset()
        self.store.clear()
        self._notices.clear()
        self._open = False
        _logger.debug("Console session torn down")

    async def sign_out(self) -> CommandResult[None]:
        try:
            await self._auth.sign_out()
        except FleetError as exc:
            _logger.warning("Sign-out failed: %s", exc)
            self.teardown()
            return CommandResult(error=exc)
        self.teardown()
        return CommandResult()

    # ------------------------------------------------------------------
    # Notices
    # ------------------------------------------------------------------

    @property
    def notices(self) -> list[Notice]:
        return list(self._notices)

    def drain_notices(self) -> list[Notice]:
        drained, self._notices = self._notices, []
        return drained

    def _notify(self, level: NoticeLevel, title: str, message: str) -> None:
        self._notices.append(Notice(level=level, title=title, message=message))

    # ------------------------------------------------------------------
    # Command plumbing
    # ------------------------------------------------------------------

    def _require_open(self) -> None:
        if not self._open:
            raise SessionClosedError("Console session is closed; sign in again")

    def _run(self, fn: Callable[[], T]) -> CommandResult[T]:
        try:
            self._require_open()
            return CommandResult(value=fn())
        except FleetError as exc:
            self._notify(NoticeLevel.ERROR, _error_title(exc), str(exc))
            return CommandResult(error=exc)

    async def _run_async(self, fn: Callable[[], Awaitable[T]]) -> CommandResult[T]:
        try:
            self._require_open()
            return CommandResult(value=await fn())
        except FleetError as exc:
            self._notify(NoticeLevel.ERROR, _error_title(exc), str(exc))
            return CommandResult(error=exc)

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    @property
    def state(self) -> ViewState:
        return self.view.state

    @property
    def vehicles(self) -> list[Vehicle]:
        return self.store.list()

    @property
    def profile(self) -> Profile | None:
        return self._auth.profile

    def aggregates(self) -> FleetAggregates:
        return self.store.aggregates()

    def selected_vehicle(self) -> Vehicle | None:
        return self.view.selected_vehicle()

    def avatar_preview(self) -> str:
        """Avatar to display: the draft's while editing, else the committed one."""
        if self.profile_editor.is_editing:
            return str(self.profile_editor.draft.get("avatar_ref") or "")
        profile = self._auth.profile
        return profile.avatar_ref if profile is not None else ""

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------

    def select_tab(self, screen: Screen | str) -> CommandResult[ViewState]:
        return self._run(lambda: self.view.select_tab(screen))

    def view_vehicle(self, vehicle_id: str) -> CommandResult[ViewState]:
        return self._run(lambda: self.view.view_vehicle(vehicle_id))

    def back(self) -> CommandResult[ViewState]:
        return self._run(self.view.back)

    # ------------------------------------------------------------------
    # Vehicle editing
    # ------------------------------------------------------------------

    def _validate_vehicle(self, draft: Any) -> VehicleDraft:
        return validate_vehicle_draft(draft, strict_ranges=self._config.strict_ranges)

    async def _persist_vehicle(self, draft: VehicleDraft, source: Vehicle | None) -> Vehicle:
        if source is None:
            return await self.store.persist_add(draft)
        return await self.store.persist_update(draft.with_id(source.id))

    def begin_add_vehicle(self) -> CommandResult[dict[str, Any]]:
        return self._run(lambda: self.vehicle_editor.begin(defaults=VehicleDraft()))

    def begin_edit_vehicle(self, vehicle_id: str | None = None) -> CommandResult[dict[str, Any]]:
        """Edit *vehicle_id*, or the vehicle open in the detail view."""

        def _begin() -> dict[str, Any]:
            target_id = vehicle_id if vehicle_id is not None else self.view.selected_id
            if target_id is None:
                raise DraftStateError("No vehicle selected")
            return self.vehicle_editor.begin(self.store.require(target_id))

        return self._run(_begin)

    def edit_vehicle(self, **changes: Any) -> CommandResult[dict[str, Any]]:
        return self._run(lambda: self.vehicle_editor.edit(**changes))

    def cancel_vehicle_edit(self) -> CommandResult[None]:
        return self._run(self.vehicle_editor.cancel)

    async def commit_vehicle(self) -> CommandResult[Vehicle]:
        is_new = self.vehicle_editor.is_new
        result = await self._run_async(self.vehicle_editor.commit)
        if result.ok and result.value is not None and self._open:
            action = "added" if is_new else "updated"
            self._notify(NoticeLevel.INFO, f"Vehicle {action.capitalize()}", f"{result.value.name} was {action}.")
        return result

    # ------------------------------------------------------------------
    # Profile editing
    # ------------------------------------------------------------------

    async def _persist_profile(self, fields: ProfileDraft, source: Profile | None) -> Profile:
        if fields.has_local_avatar and self._storage is not None:
            try:
                content_type, data = split_data_uri(fields.avatar_ref)
            except ValueError as exc:
                raise InvalidFieldError(f"Invalid avatar image: {exc}", field="avatar_ref") from exc
            uri = await self._storage.upload(data, content_type)
            fields = fields.model_copy(update={"avatar_ref": uri})
        await self._profiles.update(self._auth.user_id, fields)
        return await self._auth.refresh_profile()

    def begin_profile_edit(self) -> CommandResult[dict[str, Any]]:
        def _begin() -> dict[str, Any]:
            profile = self._auth.profile
            if profile is None:
                raise DraftStateError("Profile not loaded")
            return self.profile_editor.begin(profile)

        return self._run(_begin)

    def edit_profile(self, **changes: Any) -> CommandResult[dict[str, Any]]:
        return self._run(lambda: self.profile_editor.edit(**changes))

    def cancel_profile_edit(self) -> CommandResult[None]:
        return self._run(self.profile_editor.cancel)

    def ingest_avatar(self, data: bytes, content_type: str) -> CommandResult[str]:
        result = self._run(lambda: self.avatars.ingest_into(self.profile_editor, data, content_type))
        if result.ok:
            self._notify(
                NoticeLevel.INFO,
                "Profile Picture Updated",
                "Your profile picture has been updated. Don't forget to save your changes!",
            )
        return result

    async def commit_profile(self) -> CommandResult[Profile]:
        result = await self._run_async(self.profile_editor.commit)
        if result.ok and self._open:
            self._notify(
                NoticeLevel.INFO,
                "Profile Updated",
                "Your profile information has been saved successfully.",
            )
        return result
