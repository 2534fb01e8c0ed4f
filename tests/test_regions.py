import math

import pytest

from src.canvass.config import settings
from src.canvass.models.domain import Coordinate
from src.canvass.services.regions import (
    fallback_region,
    region_for_path,
    region_for_territory,
    region_from_points,
    region_from_ring,
)

UNIT_SQUARE = [(0.0, 0.0), (0.0, 1.0), (1.0, 1.0), (1.0, 0.0)]


def test_region_from_ring_pads_both_axes():
    region = region_from_ring(UNIT_SQUARE, 0.3)

    assert region.center == Coordinate(0.5, 0.5)
    assert region.lat_span == pytest.approx(1.3)
    assert region.lng_span == pytest.approx(1.3)


def test_region_from_ring_uses_configured_padding(monkeypatch):
    monkeypatch.setattr(settings, "region_padding_factor", 0.5)
    region = region_from_ring(UNIT_SQUARE)

    assert region.lat_span == pytest.approx(1.5)


def test_single_point_region_has_minimum_span():
    region = region_from_points([(10, 10)], 0.3)

    assert region.center == Coordinate(10, 10)
    assert region.lat_span == settings.region_min_span
    assert region.lng_span == settings.region_min_span


def test_minimum_span_applies_per_axis():
    # wide in longitude, flat in latitude
    region = region_from_points([(10.0, 10.0), (10.0, 11.0)], 0.3, min_span=0.02)

    assert region.lat_span == 0.02
    assert region.lng_span == pytest.approx(1.3)


def test_empty_points_use_fallback_region():
    region = region_from_points([], 0.3)

    assert region == fallback_region()
    assert region.center == Coordinate(37.7749, -122.4194)
    assert region.lat_span == 0.05


def test_non_finite_points_are_ignored():
    region = region_from_points([(math.nan, 1.0), (2.0, math.inf), (5.0, 5.0)], 0.3)
    assert region.center == Coordinate(5.0, 5.0)

    only_bad = region_from_points([(math.nan, math.nan)])
    assert only_bad == fallback_region()
    assert not math.isnan(only_bad.lat_span)


def test_region_corners():
    region = region_from_ring(UNIT_SQUARE, 0.0)
    assert region.southwest == Coordinate(0.0, 0.0)
    assert region.northeast == Coordinate(1.0, 1.0)


def test_region_for_territory_prefers_boundary():
    points = [(20.0, 20.0), (21.0, 21.0)]

    assert region_for_territory(UNIT_SQUARE, points).center == Coordinate(0.5, 0.5)
    assert region_for_territory([], points).center == Coordinate(20.5, 20.5)
    assert region_for_territory(None, None) == fallback_region()


def test_region_for_path_frames_route():
    path = [(43.0, -79.0), (43.2, -79.4)]
    region = region_for_path(path)

    assert region.center.latitude == pytest.approx(43.1)
    assert region.center.longitude == pytest.approx(-79.2)
    assert region.lng_span == pytest.approx(0.4 * 1.3)
