"""Visit queue navigation for the property edit session.

An agent edits properties one after another: the edit modal shows the
"current" record and previous/next buttons walk the currently filtered list
with wraparound. Moving away from a record that has valid unsaved edits saves
it first, and the cursor only moves once that save has succeeded.

States:

* Idle: no record open.
* Editing: ``current_id`` is set.
* Saving: a save is being awaited; further saves are rejected.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import (
    Any,
    Awaitable,
    Callable,
    Generic,
    Hashable,
    Iterable,
    Optional,
    Protocol,
    Sequence,
    TypeVar,
    runtime_checkable,
)

from ...exceptions import (
    NoRecordOpen,
    QueueTooShort,
    RecordNotInQueue,
    SaveFailed,
    SaveInProgress,
)

logger = logging.getLogger(__name__)

K = TypeVar("K", bound=Hashable)
T = TypeVar("T")

SaveFn = Callable[[Any], Awaitable[Any]]


class Direction(str, Enum):
    NEXT = "next"
    PREVIOUS = "previous"


class NavigatorStatus(str, Enum):
    IDLE = "idle"
    EDITING = "editing"
    SAVING = "saving"


@runtime_checkable
class VisitRecord(Protocol):
    """What the navigator needs from a record: identity plus dirty/valid checks."""

    @property
    def id(self) -> Hashable: ...

    def is_dirty(self) -> bool: ...

    def is_valid(self) -> bool: ...


@dataclass
class EditableVisit(Generic[K, T]):
    """A record being edited: the last saved ``baseline`` and the working ``draft``."""

    id: K
    baseline: T
    draft: T
    validator: Optional[Callable[[T], bool]] = None

    @classmethod
    def open(cls, record_id: K, saved: T, validator: Optional[Callable[[T], bool]] = None) -> "EditableVisit[K, T]":
        return cls(id=record_id, baseline=saved, draft=saved, validator=validator)

    def is_dirty(self) -> bool:
        return self.draft != self.baseline

    def is_valid(self) -> bool:
        return self.validator(self.draft) if self.validator is not None else True

    def commit(self) -> None:
        """Adopt the draft as the saved baseline."""
        self.baseline = self.draft


@dataclass
class VisitQueueState(Generic[K]):
    ordered_ids: tuple[K, ...] = ()
    current_id: Optional[K] = None
    pending_save: Optional[K] = None


def _never_dirty(record_id: Any) -> bool:
    return False


def _always_valid(record_id: Any) -> bool:
    return True


@dataclass(eq=False)
class _SaveTicket(Generic[K]):
    record_id: K
    session: int = 0


class VisitQueueNavigator(Generic[K]):
    """Save-before-advance cursor over an ordered, externally filtered list of record ids.

    One navigator serves one edit session and is driven from a single task.
    ``is_dirty`` and ``is_valid`` are called with a record id and decide
    whether moving away from that record requires a save.
    """

    def __init__(
        self,
        ordered_ids: Iterable[K] = (),
        *,
        is_dirty: Callable[[K], bool] = _never_dirty,
        is_valid: Callable[[K], bool] = _always_valid,
    ) -> None:
        self._state: VisitQueueState[K] = VisitQueueState(ordered_ids=tuple(ordered_ids))
        self._is_dirty = is_dirty
        self._is_valid = is_valid
        self._session = 0
        self._ticket: Optional[_SaveTicket[K]] = None

    @classmethod
    def for_records(cls, records: Sequence[VisitRecord]) -> "VisitQueueNavigator":
        """Navigator over ``records`` in the given order, using their own dirty/valid checks."""
        by_id = {record.id: record for record in records}

        def is_dirty(record_id: Hashable) -> bool:
            record = by_id.get(record_id)
            return record is not None and record.is_dirty()

        def is_valid(record_id: Hashable) -> bool:
            record = by_id.get(record_id)
            return record is not None and record.is_valid()

        return cls((record.id for record in records), is_dirty=is_dirty, is_valid=is_valid)

    @property
    def state(self) -> VisitQueueState[K]:
        return VisitQueueState(
            ordered_ids=self._state.ordered_ids,
            current_id=self._state.current_id,
            pending_save=self._state.pending_save,
        )

    @property
    def ordered_ids(self) -> tuple[K, ...]:
        return self._state.ordered_ids

    @property
    def current_id(self) -> Optional[K]:
        return self._state.current_id

    @property
    def status(self) -> NavigatorStatus:
        if self._state.pending_save is not None:
            return NavigatorStatus.SAVING
        if self._state.current_id is not None:
            return NavigatorStatus.EDITING
        return NavigatorStatus.IDLE

    @property
    def is_saving(self) -> bool:
        return self._state.pending_save is not None

    def refresh(self, ordered_ids: Iterable[K]) -> None:
        """Replace the queue after the caller's filters or sort order changed."""
        self._state.ordered_ids = tuple(ordered_ids)
        logger.debug(f"Visit queue refreshed: {len(self._state.ordered_ids)} record(s)")

    def open(self, record_id: K) -> None:
        """Show ``record_id`` in the editor; unsaved edits on the previous record are left alone.

        A save still in flight keeps blocking other saves but will no longer
        move the cursor when it completes.
        """
        self._session += 1
        self._state.current_id = record_id
        logger.debug(f"Opened record {record_id!r}")

    def close(self) -> None:
        """End the edit session without saving anything and forget any in-flight save."""
        self._session += 1
        logger.debug(f"Closed edit session (current={self._state.current_id!r})")
        self._state.current_id = None
        self._state.pending_save = None
        self._ticket = None

    def target_of(self, direction: Direction | str) -> K:
        """Id that ``advance(direction)`` would move to, without moving."""
        direction = Direction(direction)
        ids = self._state.ordered_ids
        current = self._state.current_id
        if current is None:
            raise NoRecordOpen("No record is open for editing.")
        if len(ids) <= 1:
            raise QueueTooShort(len(ids))
        try:
            position = ids.index(current)
        except ValueError:
            raise RecordNotInQueue(current) from None
        step = 1 if direction is Direction.NEXT else -1
        return ids[(position + step) % len(ids)]

    def _begin_save(self, record_id: K) -> _SaveTicket[K]:
        ticket = _SaveTicket(record_id=record_id, session=self._session)
        self._ticket = ticket
        self._state.pending_save = record_id
        return ticket

    def _end_save(self, ticket: _SaveTicket[K]) -> bool:
        """Clear the in-flight marker; False when the record was closed or replaced meanwhile."""
        if self._ticket is ticket:
            self._ticket = None
            self._state.pending_save = None
        return self._session == ticket.session

    async def _save(self, ticket: _SaveTicket[K], save_fn: SaveFn) -> None:
        try:
            result = await save_fn(ticket.record_id)
        except Exception as exc:
            logger.warning(f"Saving record {ticket.record_id!r} failed: {exc}")
            raise SaveFailed(ticket.record_id, exc) from exc
        if result is False:
            logger.warning(f"Saving record {ticket.record_id!r} was rejected")
            raise SaveFailed(ticket.record_id)

    def _needs_save(self, record_id: K) -> bool:
        return self._is_dirty(record_id) and self._is_valid(record_id)

    async def advance(self, direction: Direction | str, save_fn: SaveFn) -> Optional[K]:
        """Move to the previous/next record, saving the current one first when it has valid edits.

        The neighbour is taken from the queue as it stands once the save has
        completed, so a ``refresh`` during the save is honoured. If the saved
        record left the queue meanwhile the cursor stays on it.

        Returns:
            The id that is current afterwards.

        Raises:
            SaveInProgress: an earlier advance/save is still awaiting its save.
            NoRecordOpen: nothing is open.
            QueueTooShort: the queue has at most one record.
            RecordNotInQueue: the open record was filtered out of the queue.
            SaveFailed: ``save_fn`` raised or returned False; the cursor did not move.
        """
        if self._state.pending_save is not None:
            raise SaveInProgress(self._state.pending_save)

        current = self._state.current_id
        target = self.target_of(direction)

        if not self._needs_save(current):
            self._state.current_id = target
            logger.debug(f"Moved {Direction(direction).value} from {current!r} to {target!r}")
            return target

        ticket = self._begin_save(current)
        try:
            await self._save(ticket, save_fn)
        finally:
            still_current = self._end_save(ticket)

        if not still_current:
            logger.debug(f"Edit session changed while saving {current!r}; not moving")
            return self._state.current_id
        # the queue may have been refreshed while the save was awaited
        try:
            target = self.target_of(direction)
        except (QueueTooShort, RecordNotInQueue) as exc:
            logger.info(f"Saved record {current!r}; queue changed during the save, staying put ({exc})")
            return current
        self._state.current_id = target
        logger.info(f"Saved record {current!r} and moved {Direction(direction).value} to {target!r}")
        return target

    async def save_current(self, save_fn: SaveFn) -> Optional[K]:
        """Save the open record and stay on it. Returns the saved id, or None when nothing needed saving."""
        if self._state.pending_save is not None:
            raise SaveInProgress(self._state.pending_save)
        current = self._state.current_id
        if current is None:
            raise NoRecordOpen("No record is open for editing.")
        if not self._needs_save(current):
            return None

        ticket = self._begin_save(current)
        try:
            await self._save(ticket, save_fn)
        finally:
            self._end_save(ticket)
        logger.info(f"Saved record {current!r}")
        return current
