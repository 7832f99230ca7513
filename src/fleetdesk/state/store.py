"""In-memory vehicle store.

This is the only component allowed to mutate the committed vehicle
collection. Records are kept in an arena keyed by id; insertion order is
the display order.
"""

from __future__ import annotations

import logging
import secrets
from collections.abc import Callable, Iterable, Iterator
from typing import TYPE_CHECKING

from fleetdesk.exceptions import DuplicateVehicleError, VehicleNotFoundError
from fleetdesk.models.fleet import FleetAggregates
from fleetdesk.models.vehicle import Vehicle, VehicleDraft, VehicleStatus
from fleetdesk.state.events import ChangeKind, StoreChange

if TYPE_CHECKING:
    from fleetdesk.repositories import VehicleRepository

_logger = logging.getLogger(__name__)

StoreListener = Callable[[StoreChange], None]


def _random_id() -> str:
    return secrets.token_hex(16)


def _round_half_up(numerator: int, denominator: int) -> int:
    """``floor(numerator / denominator + 0.5)`` in exact integer arithmetic."""
    return (2 * numerator + denominator) // (2 * denominator)


class VehicleStore:
    """Committed vehicle collection plus derived aggregates.

    Ids are generated by *id_factory* and re-drawn on collision, so two adds
    issued back to back can never share an id.
    """

    def __init__(
        self,
        repository: VehicleRepository | None = None,
        *,
        id_factory: Callable[[], str] = _random_id,
    ) -> None:
        self._repository = repository
        self._id_factory = id_factory
        self._vehicles: dict[str, Vehicle] = {}
        self._listeners: list[StoreListener] = []
        self._epoch = 0

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def __len__(self) -> int:
        return len(self._vehicles)

    def __contains__(self, vehicle_id: object) -> bool:
        return vehicle_id in self._vehicles

    def __iter__(self) -> Iterator[Vehicle]:
        return iter(list(self._vehicles.values()))

    def list(self) -> list[Vehicle]:
        return list(self._vehicles.values())

    def get(self, vehicle_id: str) -> Vehicle | None:
        return self._vehicles.get(vehicle_id)

    def require(self, vehicle_id: str) -> Vehicle:
        vehicle = self._vehicles.get(vehicle_id)
        if vehicle is None:
            raise VehicleNotFoundError(f"No vehicle with id {vehicle_id!r}", vehicle_id=vehicle_id)
        return vehicle

    def recent(self, limit: int = 3) -> list[Vehicle]:
        """First *limit* vehicles in collection order (overview activity list)."""
        if limit <= 0:
            return []
        return self.list()[:limit]

    def aggregates(self) -> FleetAggregates:
        vehicles = self.list()
        total = len(vehicles)
        if total == 0:
            return FleetAggregates()
        fuel_sum = sum(vehicle.fuel_level for vehicle in vehicles)
        return FleetAggregates(
            total=total,
            active_count=sum(1 for vehicle in vehicles if vehicle.status == VehicleStatus.ACTIVE),
            maintenance_count=sum(1 for vehicle in vehicles if vehicle.status == VehicleStatus.MAINTENANCE),
            average_fuel=_round_half_up(fuel_sum, total),
        )

    # ------------------------------------------------------------------
    # Listeners
    # ------------------------------------------------------------------

    def subscribe(self, listener: StoreListener) -> Callable[[], None]:
        """Register *listener*; returns a callable that unregisters it."""
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    def _emit(self, kind: ChangeKind, *vehicle_ids: str) -> None:
        change = StoreChange(kind=kind, vehicle_ids=vehicle_ids)
        for listener in list(self._listeners):
            try:
                listener(change)
            except Exception:
                _logger.debug("Store listener failed for %s", kind, exc_info=True)

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def new_id(self) -> str:
        vehicle_id = self._id_factory()
        while vehicle_id in self._vehicles:
            _logger.debug("Vehicle id collision on %s; drawing again", vehicle_id)
            vehicle_id = self._id_factory()
        return vehicle_id

    def replace_all(self, vehicles: Iterable[Vehicle]) -> list[Vehicle]:
        """Replace the whole collection. Duplicate ids leave the store untouched."""
        arena: dict[str, Vehicle] = {}
        for vehicle in vehicles:
            if vehicle.id in arena:
                raise DuplicateVehicleError(f"Duplicate vehicle id {vehicle.id!r}", vehicle_id=vehicle.id)
            arena[vehicle.id] = vehicle
        self._vehicles = arena
        self._emit(ChangeKind.LOADED, *arena)
        return self.list()

    def clear(self) -> None:
        self._vehicles = {}
        self._epoch += 1
        self._emit(ChangeKind.CLEARED)

    def insert(self, vehicle: Vehicle) -> Vehicle:
        """Append a record whose id was already assigned."""
        if vehicle.id in self._vehicles:
            raise DuplicateVehicleError(f"Duplicate vehicle id {vehicle.id!r}", vehicle_id=vehicle.id)
        self._vehicles[vehicle.id] = vehicle
        self._emit(ChangeKind.ADDED, vehicle.id)
        return vehicle

    def add(self, draft: VehicleDraft) -> Vehicle:
        """Assign a fresh id to *draft*, append it and return the new record."""
        return self.insert(draft.with_id(self.new_id()))

    def update(self, vehicle: Vehicle) -> Vehicle:
        """Replace the record with ``vehicle.id`` entirely (no field merge)."""
        if vehicle.id not in self._vehicles:
            raise VehicleNotFoundError(f"Cannot update unknown vehicle {vehicle.id!r}", vehicle_id=vehicle.id)
        self._vehicles[vehicle.id] = vehicle
        self._emit(ChangeKind.UPDATED, vehicle.id)
        return vehicle

    # ------------------------------------------------------------------
    # Repository-backed operations
    # ------------------------------------------------------------------

    async def load_all(self) -> list[Vehicle]:
        """Fetch the fleet from the repository and replace the collection.

        On failure the exception propagates and the prior collection is kept.
        """
        if self._repository is None:
            return self.list()
        vehicles = await self._repository.fetch_all()
        loaded = self.replace_all(vehicles)
        _logger.debug("Loaded %d vehicles", len(loaded))
        return loaded

    def _cleared_since(self, epoch: int) -> bool:
        if self._epoch == epoch:
            return False
        _logger.debug("Store cleared while a write was in flight; result not applied")
        return True

    async def persist_add(self, draft: VehicleDraft) -> Vehicle:
        """Assign an id, write through the repository, then append its result.

        If the store is cleared while the write is awaited, the result is
        returned but not inserted.
        """
        vehicle = draft.with_id(self.new_id())
        epoch = self._epoch
        if self._repository is not None:
            vehicle = await self._repository.insert(vehicle)
        if self._cleared_since(epoch):
            return vehicle
        return self.insert(vehicle)

    async def persist_update(self, vehicle: Vehicle) -> Vehicle:
        """Write through the repository, then replace with its result."""
        self.require(vehicle.id)
        epoch = self._epoch
        if self._repository is not None:
            vehicle = await self._repository.update(vehicle)
        if self._cleared_since(epoch):
            return vehicle
        return self.update(vehicle)
