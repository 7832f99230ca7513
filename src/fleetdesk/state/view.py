"""Screen navigation state machine.

States::

    OVERVIEW ─┐
    VEHICLE_LIST ──view_vehicle(id)──▶ VEHICLE_DETAIL(id) ──back()──▶ VEHICLE_LIST
    REPORTS  ─┤
    PROFILE ──┘   (select_tab jumps between any of the four tab screens)

``back()`` from the detail screen always returns to the vehicle list; the
previously active tab is not remembered.
"""

from __future__ import annotations

import logging
from enum import StrEnum

from pydantic import BaseModel, ConfigDict, model_validator

from fleetdesk.exceptions import NavigationError
from fleetdesk.models.vehicle import Vehicle
from fleetdesk.state.store import VehicleStore

_logger = logging.getLogger(__name__)


class Screen(StrEnum):
    OVERVIEW = "overview"
    VEHICLE_LIST = "vehicles"
    VEHICLE_DETAIL = "vehicle_detail"
    REPORTS = "reports"
    PROFILE = "profile"


TAB_SCREENS: frozenset[Screen] = frozenset({Screen.OVERVIEW, Screen.VEHICLE_LIST, Screen.REPORTS, Screen.PROFILE})


class ViewState(BaseModel):
    """Visible screen plus, on the detail screen only, the selected vehicle id."""

    model_config = ConfigDict(frozen=True)

    screen: Screen = Screen.OVERVIEW
    selected_id: str | None = None

    @model_validator(mode="after")
    def _selection_only_on_detail(self) -> ViewState:
        if self.screen == Screen.VEHICLE_DETAIL and self.selected_id is None:
            raise ValueError("vehicle detail requires a selected_id")
        if self.screen != Screen.VEHICLE_DETAIL and self.selected_id is not None:
            raise ValueError("selected_id is only valid on the vehicle detail screen")
        return self


class ViewController:
    """Selects the visible screen and the vehicle shown in detail.

    The selection is held by id and re-resolved against *store* on every
    read, so an update to the store shows up in an open detail view.
    """

    def __init__(self, store: VehicleStore) -> None:
        self._store = store
        self._state = ViewState()

    @property
    def state(self) -> ViewState:
        return self._state

    @property
    def screen(self) -> Screen:
        return self._state.screen

    @property
    def selected_id(self) -> str | None:
        return self._state.selected_id

    def _transition(self, new_state: ViewState) -> ViewState:
        if new_state != self._state:
            _logger.debug("View %s -> %s", self._state.screen, new_state.screen)
        self._state = new_state
        return new_state

    def select_tab(self, screen: Screen | str) -> ViewState:
        """Show one of the tab screens, discarding any detail selection."""
        try:
            target = Screen(screen)
        except ValueError as exc:
            raise NavigationError(f"Unknown screen {screen!r}", screen=str(screen)) from exc
        if target not in TAB_SCREENS:
            raise NavigationError(f"{target} is not a tab screen", screen=target.value)
        return self._transition(ViewState(screen=target))

    def view_vehicle(self, vehicle_id: str) -> ViewState:
        self._store.require(vehicle_id)
        return self._transition(ViewState(screen=Screen.VEHICLE_DETAIL, selected_id=vehicle_id))

    def back(self) -> ViewState:
        if self._state.screen != Screen.VEHICLE_DETAIL:
            return self._state
        return self._transition(ViewState(screen=Screen.VEHICLE_LIST))

    def selected_vehicle(self) -> Vehicle | None:
        if self._state.selected_id is None:
            return None
        return self._store.get(self._state.selected_id)

    def reset(self) -> ViewState:
        return self._transition(ViewState())
