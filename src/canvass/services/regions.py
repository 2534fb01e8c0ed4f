"""Map region (center + span) calculation for territories, properties and routes."""

from __future__ import annotations

import logging
import math
from typing import Iterable, Optional, Sequence

from ..config import settings
from ..models.domain import Coordinate, Region
from .geospatial import bounding_box

logger = logging.getLogger(__name__)


def fallback_region() -> Region:
    """Region shown when there is nothing to frame."""
    return Region(
        center=Coordinate(settings.fallback_latitude, settings.fallback_longitude),
        lat_span=settings.fallback_span,
        lng_span=settings.fallback_span,
    )


def _finite(points: Iterable[Sequence[float]]) -> list[tuple[float, float]]:
    return [
        (lat, lng)
        for lat, lng in points
        if math.isfinite(lat) and math.isfinite(lng)
    ]


def _padded_region(
    points: Sequence[Sequence[float]],
    padding_factor: Optional[float],
    min_span: Optional[float],
) -> Region:
    padding = settings.region_padding_factor if padding_factor is None else padding_factor
    floor = settings.region_min_span if min_span is None else min_span

    box = bounding_box(_finite(points))
    if box is None:
        return fallback_region()

    scale = 1.0 + padding
    lat_span = (box.max_lat - box.min_lat) * scale
    lng_span = (box.max_lng - box.min_lng) * scale
    return Region(
        center=Coordinate((box.min_lat + box.max_lat) / 2, (box.min_lng + box.max_lng) / 2),
        lat_span=max(lat_span, floor),
        lng_span=max(lng_span, floor),
    )


def region_from_ring(
    ring: Sequence[Sequence[float]],
    padding_factor: Optional[float] = None,
    min_span: Optional[float] = None,
) -> Region:
    """Frame a territory boundary with padding on both axes."""
    return _padded_region(ring, padding_factor, min_span)


def region_from_points(
    points: Sequence[Sequence[float]],
    padding_factor: Optional[float] = None,
    min_span: Optional[float] = None,
) -> Region:
    """Frame an arbitrary point set; falls back to the default region when empty."""
    return _padded_region(points, padding_factor, min_span)


def region_for_territory(
    ring: Sequence[Sequence[float]] | None,
    points: Sequence[Sequence[float]] | None = None,
) -> Region:
    """Boundary first, then the territory's properties, then the fallback region."""
    if ring:
        region = region_from_ring(ring)
        logger.debug(f"Region calculated from boundary ({len(ring)} vertices): {region}")
        return region
    if points:
        region = region_from_points(points)
        logger.debug(f"Region calculated from {len(points)} properties: {region}")
        return region
    logger.debug("Region using fallback (nothing to frame)")
    return fallback_region()


def region_for_path(path: Sequence[Sequence[float]]) -> Region:
    """Frame a decoded route path."""
    return region_from_points(path)
