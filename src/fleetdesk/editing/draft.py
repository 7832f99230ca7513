"""Two-phase draft editing: snapshot, edit a copy, then commit or cancel."""

from __future__ import annotations

import copy
import logging
from collections.abc import Awaitable, Callable, Mapping
from typing import Any, Generic, TypeVar

from pydantic import BaseModel
from pydantic.alias_generators import to_snake

from fleetdesk.exceptions import CommitInProgressError, DraftStateError

_logger = logging.getLogger(__name__)

T = TypeVar("T")
V = TypeVar("V")

Validator = Callable[[Mapping[str, Any]], V]
Persister = Callable[[V, T | None], Awaitable[T]]


def _field_keys(values: Mapping[str, Any]) -> dict[str, Any]:
    """Key *values* by snake_case field name so each field has one entry."""
    return {to_snake(key): copy.deepcopy(value) for key, value in values.items()}


def _snapshot(source: Any) -> dict[str, Any]:
    if isinstance(source, BaseModel):
        return source.model_dump()
    if isinstance(source, Mapping):
        return _field_keys(source)
    raise TypeError(f"Cannot snapshot {type(source).__name__} into a draft")


class DraftEditor(Generic[T, V]):
    """Holds one in-progress edit of an entity of type ``T``.

    ``begin()`` deep-copies the source record (or new-entity defaults) into
    a plain dict; ``edit()`` touches only that dict. ``commit()`` runs
    *validate* on a copy of the draft and hands the result to *persist*,
    whose return value is the authoritative record. A failed commit keeps
    the draft exactly as it was so the user can correct and retry.

    At most one commit runs at a time; a second call while the first is
    awaiting the persister raises :class:`CommitInProgressError`.
    """

    def __init__(
        self,
        *,
        validate: Validator[V],
        persist: Persister[V, T],
        name: str = "draft",
    ) -> None:
        self._validate = validate
        self._persist = persist
        self._name = name
        self._source: T | None = None
        self._draft: dict[str, Any] | None = None
        self._committed: T | None = None
        self._in_flight = False
        self._generation = 0

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    @property
    def name(self) -> str:
        return self._name

    @property
    def is_editing(self) -> bool:
        return self._draft is not None

    @property
    def in_flight(self) -> bool:
        return self._in_flight

    @property
    def is_new(self) -> bool:
        """Whether the draft will create a record rather than replace one."""
        return self._draft is not None and self._source is None

    @property
    def source(self) -> T | None:
        return self._source

    @property
    def committed(self) -> T | None:
        """Result of the last successful commit."""
        return self._committed

    @property
    def draft(self) -> dict[str, Any]:
        """A copy of the current draft; mutate via :meth:`edit`."""
        return copy.deepcopy(self._require_draft())

    def _require_draft(self) -> dict[str, Any]:
        if self._draft is None:
            raise DraftStateError(f"{self._name}: not editing (call begin() first)")
        return self._draft

    def _require_idle(self) -> None:
        if self._in_flight:
            raise CommitInProgressError(f"{self._name}: a commit is already in flight")

    # ------------------------------------------------------------------
    # Editing
    # ------------------------------------------------------------------

    def begin(
        self, source: T | None = None, *, defaults: Mapping[str, Any] | BaseModel | None = None
    ) -> dict[str, Any]:
        """Start editing *source*, or a new entity seeded from *defaults*."""
        self._require_idle()
        if source is not None:
            draft = _snapshot(source)
        elif defaults is not None:
            draft = _snapshot(defaults)
        else:
            draft = {}
        self._source = source
        self._draft = draft
        self._generation += 1
        _logger.debug("%s: begin (%s)", self._name, "new" if source is None else "existing")
        return self.draft

    def edit(self, **changes: Any) -> dict[str, Any]:
        self._require_idle()
        draft = self._require_draft()
        draft.update(_field_keys(changes))
        return self.draft

    def set(self, field: str, value: Any) -> dict[str, Any]:
        return self.edit(**{field: value})

    def cancel(self) -> None:
        """Discard the draft; the committed record is untouched."""
        self._require_idle()
        self._clear()

    def reset(self) -> None:
        """Drop all state, including any in-flight commit's outcome."""
        self._clear()
        self._committed = None

    def _clear(self) -> None:
        if self._draft is not None:
            _logger.debug("%s: draft discarded", self._name)
        self._draft = None
        self._source = None
        self._generation += 1

    # ------------------------------------------------------------------
    # Commit
    # ------------------------------------------------------------------

    async def commit(self) -> T:
        self._require_idle()
        draft = copy.deepcopy(self._require_draft())
        generation = self._generation

        self._in_flight = True
        try:
            validated = self._validate(draft)
            result = await self._persist(validated, self._source)
        except Exception:
            _logger.debug("%s: commit failed; draft retained", self._name, exc_info=True)
            raise
        finally:
            self._in_flight = False

        if generation == self._generation:
            self._committed = result
            self._clear()
        else:
            _logger.debug("%s: editor reset during commit; result not applied to draft state", self._name)
        return result
