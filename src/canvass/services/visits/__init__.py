"""Visit queue navigation for property edit sessions."""

from .navigator import (
    Direction,
    EditableVisit,
    NavigatorStatus,
    VisitQueueNavigator,
    VisitQueueState,
    VisitRecord,
)

__all__ = [
    "Direction",
    "EditableVisit",
    "NavigatorStatus",
    "VisitQueueNavigator",
    "VisitQueueState",
    "VisitRecord",
]
