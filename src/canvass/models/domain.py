"""Domain models for coordinates, map regions and route alternatives."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import NamedTuple, Optional


class Coordinate(NamedTuple):
    """A (latitude, longitude) pair in decimal degrees."""

    latitude: float
    longitude: float


@dataclass(frozen=True, slots=True)
class BoundingBox:
    min_lat: float
    max_lat: float
    min_lng: float
    max_lng: float


@dataclass(frozen=True, slots=True)
class Region:
    """Map framing: a center plus the latitude/longitude span to show around it."""

    center: Coordinate
    lat_span: float
    lng_span: float

    @property
    def southwest(self) -> Coordinate:
        return Coordinate(self.center.latitude - self.lat_span / 2, self.center.longitude - self.lng_span / 2)

    @property
    def northeast(self) -> Coordinate:
        return Coordinate(self.center.latitude + self.lat_span / 2, self.center.longitude + self.lng_span / 2)


@dataclass(frozen=True, slots=True)
class RouteStep:
    instruction: str
    distance_meters: float
    duration_seconds: float
    start_coordinate: Optional[Coordinate] = None
    end_coordinate: Optional[Coordinate] = None
    maneuver: Optional[str] = None
    polyline: tuple[Coordinate, ...] = ()


@dataclass(frozen=True, slots=True)
class RouteLeg:
    """One origin-to-stop segment of a route, as split by the directions service."""

    start_address: str
    end_address: str
    start_coordinate: Optional[Coordinate]
    end_coordinate: Optional[Coordinate]
    distance_meters: float
    duration_seconds: float
    steps: tuple[RouteStep, ...] = ()

    @property
    def step_polyline(self) -> tuple[Coordinate, ...]:
        """Per-step geometry joined end to end; empty when no step carries any."""
        return tuple(point for step in self.steps for point in step.polyline)


@dataclass(frozen=True, slots=True)
class RouteAlternative:
    """A candidate route; totals are always derived from the legs."""

    summary_label: str
    legs: tuple[RouteLeg, ...]
    overview_path: tuple[Coordinate, ...]
    warnings: tuple[str, ...] = field(default=())
    waypoint_order: tuple[int, ...] = field(default=())

    @property
    def total_distance_meters(self) -> float:
        return sum(leg.distance_meters for leg in self.legs)

    @property
    def total_duration_seconds(self) -> float:
        return sum(leg.duration_seconds for leg in self.legs)
