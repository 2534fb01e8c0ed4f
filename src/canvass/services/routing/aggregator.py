"""Aggregation of raw directions candidates into ordered route alternatives."""

from __future__ import annotations

import logging
import re
from typing import Optional, Sequence

from ...exceptions import NoRoutesAvailable
from ...models.domain import Coordinate, RouteAlternative, RouteLeg, RouteStep
from ...schemas.routing import RawLeg, RawRoute, RawStep
from ..polyline import decode_polyline

logger = logging.getLogger(__name__)

SUMMARY_SEPARATOR = " → "

_HTML_TAG = re.compile(r"<[^>]*>")


def _coordinate(value: Optional[tuple[float, float]]) -> Optional[Coordinate]:
    if value is None:
        return None
    return Coordinate(value[0], value[1])


def _build_step(raw: RawStep) -> RouteStep:
    return RouteStep(
        instruction=_HTML_TAG.sub("", raw.instruction),
        distance_meters=raw.distance_meters,
        duration_seconds=raw.duration_seconds,
        start_coordinate=_coordinate(raw.start_coordinate),
        end_coordinate=_coordinate(raw.end_coordinate),
        maneuver=raw.maneuver,
        polyline=tuple(decode_polyline(raw.polyline)) if raw.polyline else (),
    )


def _build_leg(raw: RawLeg) -> RouteLeg:
    return RouteLeg(
        start_address=raw.start_address,
        end_address=raw.end_address,
        start_coordinate=_coordinate(raw.start_coordinate),
        end_coordinate=_coordinate(raw.end_coordinate),
        distance_meters=raw.distance_meters,
        duration_seconds=raw.duration_seconds,
        steps=tuple(_build_step(step) for step in raw.steps),
    )


def summary_label(raw: RawRoute, index: int) -> str:
    """Service summary, else the first two leg destinations, else "Route N" (1-based)."""
    if raw.summary and raw.summary.strip():
        return raw.summary.strip()
    destinations = [leg.end_address for leg in raw.legs[:2] if leg.end_address]
    if destinations:
        return SUMMARY_SEPARATOR.join(destinations)
    return f"Route {index + 1}"


def aggregate(raw_candidates: Sequence[RawRoute]) -> list[RouteAlternative]:
    """Convert raw candidates into alternatives, keeping the service's order.

    Index 0 stays the service's default pick; nothing is re-ranked by
    distance or duration.

    Raises:
        NoRoutesAvailable: when there are no candidates at all.
        MalformedPolyline: when a candidate carries corrupt geometry.
    """
    if not raw_candidates:
        raise NoRoutesAvailable("No routes returned by the directions service.")

    alternatives: list[RouteAlternative] = []
    for index, raw in enumerate(raw_candidates):
        overview = decode_polyline(raw.overview_polyline) if raw.overview_polyline else []
        alternatives.append(
            RouteAlternative(
                summary_label=summary_label(raw, index),
                legs=tuple(_build_leg(leg) for leg in raw.legs),
                overview_path=tuple(overview),
                warnings=tuple(raw.warnings),
                waypoint_order=tuple(raw.waypoint_order),
            )
        )

    logger.info(
        f"Aggregated {len(alternatives)} route alternative(s): "
        f"{[alternative.summary_label for alternative in alternatives]}"
    )
    return alternatives


def _clamp(index: int, length: int) -> int:
    return max(0, min(index, length - 1))


def select_alternative(alternatives: Sequence[RouteAlternative], index: int) -> RouteAlternative:
    """Return the alternative at ``index``, clamped into range so stale indices still select something."""
    if not alternatives:
        raise NoRoutesAvailable("There are no route alternatives to select from.")
    return alternatives[_clamp(index, len(alternatives))]


class RouteAlternatives:
    """Ordered alternatives for one calculation plus the selected-alternative cursor."""

    def __init__(self, alternatives: Sequence[RouteAlternative], selected_index: int = 0) -> None:
        if not alternatives:
            raise NoRoutesAvailable("There are no route alternatives to select from.")
        self._alternatives = tuple(alternatives)
        self._selected_index = _clamp(selected_index, len(self._alternatives))

    @classmethod
    def from_candidates(cls, raw_candidates: Sequence[RawRoute], selected_index: int = 0) -> "RouteAlternatives":
        return cls(aggregate(raw_candidates), selected_index)

    def __len__(self) -> int:
        return len(self._alternatives)

    def __iter__(self):
        return iter(self._alternatives)

    def __getitem__(self, index: int) -> RouteAlternative:
        return self._alternatives[index]

    @property
    def alternatives(self) -> tuple[RouteAlternative, ...]:
        return self._alternatives

    @property
    def selected_index(self) -> int:
        return self._selected_index

    @property
    def selected(self) -> RouteAlternative:
        return self._alternatives[self._selected_index]

    @property
    def best(self) -> RouteAlternative:
        """The service's default pick."""
        return self._alternatives[0]

    def select(self, index: int) -> RouteAlternative:
        self._selected_index = _clamp(index, len(self._alternatives))
        return self.selected
