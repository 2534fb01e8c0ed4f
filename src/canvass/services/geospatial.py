"""Geospatial helper functions for territory boundaries."""

from __future__ import annotations

import math
from typing import Callable, Iterable, Optional, Sequence, TypeVar

from shapely.geometry import Polygon

from ..models.domain import BoundingBox

EARTH_RADIUS_M = 6378137.0

T = TypeVar("T")


def _edges(ring: Sequence[Sequence[float]]) -> list[tuple[float, float, float, float]]:
    """Ring edges as (xi, yi, xj, yj) with x = longitude, y = latitude, j = i - 1 wrapping."""
    edges = []
    j = len(ring) - 1
    for i in range(len(ring)):
        yi, xi = ring[i][0], ring[i][1]
        yj, xj = ring[j][0], ring[j][1]
        edges.append((xi, yi, xj, yj))
        j = i
    return edges


def _crosses_odd(edges: Sequence[tuple[float, float, float, float]], lat: float, lng: float) -> bool:
    inside = False
    for xi, yi, xj, yj in edges:
        # the straddle test guarantees yj != yi, so the division is safe
        if (yi > lat) != (yj > lat) and lng < (xj - xi) * (lat - yi) / (yj - yi) + xi:
            inside = not inside
    return inside


def contains(ring: Sequence[Sequence[float]], point: Sequence[float]) -> bool:
    """Return True if the (lat, lng) point is inside the ring, by even-odd ray casting.

    The ring is treated as closed whether or not its last vertex repeats the
    first. Rings with fewer than 3 vertices never contain anything. Points
    lying exactly on an edge may land on either side, and rings crossing the
    antimeridian are not unwrapped.
    """
    if len(ring) < 3:
        return False
    return _crosses_odd(_edges(ring), point[0], point[1])


def filter_inside(
    ring: Sequence[Sequence[float]],
    points: Iterable[T],
    key: Optional[Callable[[T], Sequence[float]]] = None,
) -> list[T]:
    """Keep the points (or records, via ``key``) that fall inside the ring, in input order."""
    if len(ring) < 3:
        return []
    edges = _edges(ring)
    inside: list[T] = []
    for item in points:
        lat, lng = key(item) if key is not None else item
        if _crosses_odd(edges, lat, lng):
            inside.append(item)
    return inside


def bounding_box(coordinates: Iterable[Sequence[float]]) -> BoundingBox | None:
    """Min/max latitude and longitude of the coordinates, or None when there are none."""
    lats: list[float] = []
    lngs: list[float] = []
    for lat, lng in coordinates:
        lats.append(lat)
        lngs.append(lng)
    if not lats:
        return None
    return BoundingBox(min_lat=min(lats), max_lat=max(lats), min_lng=min(lngs), max_lng=max(lngs))


def _to_local_meters(point: Sequence[float], reference_latitude: float) -> tuple[float, float]:
    x = math.radians(point[1]) * EARTH_RADIUS_M * math.cos(math.radians(reference_latitude))
    y = math.radians(point[0]) * EARTH_RADIUS_M
    return x, y


def ring_area_sq_meters(ring: Sequence[Sequence[float]]) -> float:
    """Approximate area of a territory ring in square meters.

    Uses an equirectangular projection around the ring's mean latitude, which
    is accurate enough for neighbourhood-sized territories.
    """
    if len(ring) < 3:
        return 0.0
    reference_latitude = sum(point[0] for point in ring) / len(ring)
    polygon = Polygon([_to_local_meters(point, reference_latitude) for point in ring])
    return abs(polygon.area)
