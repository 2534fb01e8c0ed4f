import math

import pytest

from src.canvass.services.geospatial import bounding_box, contains, filter_inside, ring_area_sq_meters

UNIT_SQUARE = [(0.0, 0.0), (0.0, 1.0), (1.0, 1.0), (1.0, 0.0)]

# L-shaped territory: the (1.5, 1.5) corner is cut out
L_SHAPE = [(0, 0), (0, 2), (1, 2), (1, 1), (2, 1), (2, 0)]


def test_contains_unit_square():
    assert contains(UNIT_SQUARE, (0.5, 0.5)) is True
    assert contains(UNIT_SQUARE, (2, 2)) is False
    assert contains(UNIT_SQUARE, (-0.5, 0.5)) is False


def test_contains_accepts_explicitly_closed_ring():
    closed = UNIT_SQUARE + [UNIT_SQUARE[0]]
    assert contains(closed, (0.25, 0.75)) is True
    assert contains(closed, (1.25, 0.75)) is False


def test_degenerate_rings_contain_nothing():
    assert contains([], (0, 0)) is False
    assert contains([(0, 0)], (0, 0)) is False
    assert contains([(0, 0), (1, 1)], (0.5, 0.5)) is False
    assert filter_inside([(0, 0), (1, 1)], [(0.5, 0.5)]) == []


def test_contains_concave_ring():
    assert contains(L_SHAPE, (0.5, 1.5)) is True
    assert contains(L_SHAPE, (1.5, 0.5)) is True
    assert contains(L_SHAPE, (1.5, 1.5)) is False


def test_contains_real_territory():
    territory = [
        (43.6550, -79.3900),
        (43.6550, -79.3750),
        (43.6450, -79.3750),
        (43.6450, -79.3900),
    ]
    assert contains(territory, (43.6500, -79.3800)) is True
    assert contains(territory, (43.6600, -79.3800)) is False


def test_contains_never_raises_on_odd_input():
    assert contains(UNIT_SQUARE, (math.nan, 0.5)) is False
    assert contains(UNIT_SQUARE, (500.0, -900.0)) is False
    assert contains([(0, 0), (0, 0), (0, 0)], (0, 0)) is False


def test_filter_inside_preserves_order():
    points = [(0.9, 0.9), (5, 5), (0.1, 0.2), (-1, 0.5), (0.5, 0.5)]
    assert filter_inside(UNIT_SQUARE, points) == [(0.9, 0.9), (0.1, 0.2), (0.5, 0.5)]


def test_filter_inside_with_key_filters_records():
    properties = [
        {"id": "p1", "coordinates": [0.5, 0.5]},
        {"id": "p2", "coordinates": [3.0, 3.0]},
        {"id": "p3", "coordinates": [0.2, 0.8]},
    ]
    inside = filter_inside(UNIT_SQUARE, properties, key=lambda record: record["coordinates"])
    assert [record["id"] for record in inside] == ["p1", "p3"]


def test_bounding_box():
    box = bounding_box(L_SHAPE)
    assert (box.min_lat, box.max_lat, box.min_lng, box.max_lng) == (0, 2, 0, 2)
    assert bounding_box([]) is None


def test_ring_area_near_equator():
    side = 0.001
    square = [(0, 0), (0, side), (side, side), (side, 0)]
    # 0.001 degrees is roughly 111.3 m at the equator
    assert ring_area_sq_meters(square) == pytest.approx(12392.0, rel=0.01)


def test_ring_area_of_degenerate_ring_is_zero():
    assert ring_area_sq_meters([(0, 0), (1, 1)]) == 0.0
