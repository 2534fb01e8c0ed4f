"""Error types raised by the geospatial core and the visit queue."""

from __future__ import annotations

from typing import Any, Hashable, Optional


class CanvassError(Exception):
    """Base class for every error the core raises on purpose."""


class MalformedPolyline(CanvassError, ValueError):
    """Encoded polyline is not a complete sequence of (lat, lng) varints."""

    def __init__(self, message: str, *, position: int | None = None) -> None:
        super().__init__(message)
        self.position = position


class NoRoutesAvailable(CanvassError, LookupError):
    """A route calculation produced no candidates."""


class DirectionsError(CanvassError):
    """The directions service answered with a non-OK status."""

    def __init__(self, message: str, *, status: Optional[str] = None) -> None:
        super().__init__(message)
        self.status = status


class NavigatorError(CanvassError):
    """Visit queue misuse or a failed navigation step."""


class NoRecordOpen(NavigatorError):
    """Navigation was requested while no record is open."""


class RecordNotInQueue(NavigatorError):
    """The open record is not part of the current (filtered) queue."""

    def __init__(self, record_id: Hashable) -> None:
        super().__init__(f"Record {record_id!r} is not in the visit queue.")
        self.record_id = record_id


class QueueTooShort(NavigatorError):
    """The queue holds at most one record, so there is nothing to move to."""

    def __init__(self, length: int) -> None:
        super().__init__(f"Visit queue has {length} record(s); nothing to advance to.")
        self.length = length


class SaveInProgress(NavigatorError):
    """A save is already being awaited for this session."""

    def __init__(self, record_id: Hashable) -> None:
        super().__init__(f"A save for record {record_id!r} is still in progress.")
        self.record_id = record_id


class SaveFailed(NavigatorError):
    """The caller's save operation failed; the cursor did not move."""

    def __init__(self, record_id: Hashable, cause: Any = None) -> None:
        detail = f": {cause}" if cause is not None else ""
        super().__init__(f"Failed to save record {record_id!r}{detail}")
        self.record_id = record_id
        self.cause = cause
