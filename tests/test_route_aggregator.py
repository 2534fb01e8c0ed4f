import pytest

from src.canvass.exceptions import MalformedPolyline, NoRoutesAvailable
from src.canvass.models.domain import Coordinate
from src.canvass.schemas.routing import RawLeg, RawRoute
from src.canvass.services.polyline import encode_polyline
from src.canvass.services.routing.aggregator import (
    RouteAlternatives,
    aggregate,
    select_alternative,
    summary_label,
)

REFERENCE_ENCODED = "_p~iF~ps|U_ulLnnqC_mqNvxq`@"


def _leg(distance: float, duration: float, end: str = "", start: str = "") -> RawLeg:
    return RawLeg(
        distance_meters=distance,
        duration_seconds=duration,
        start_address=start,
        end_address=end,
        start_coordinate=(43.65, -79.38),
        end_coordinate=(43.66, -79.39),
    )


def _route(summary: str | None, *legs: RawLeg, polyline: str = REFERENCE_ENCODED) -> RawRoute:
    return RawRoute(summary=summary, legs=list(legs), overview_polyline=polyline)


def test_aggregate_preserves_service_order():
    candidates = [
        _route("A", _leg(9000, 900)),
        _route("B", _leg(1000, 100)),
        _route("C", _leg(5000, 500)),
    ]

    alternatives = aggregate(candidates)

    assert [alternative.summary_label for alternative in alternatives] == ["A", "B", "C"]


def test_aggregate_sums_legs():
    alternatives = aggregate([_route("Main St", _leg(1200, 300), _leg(800.5, 120), _leg(0, 0))])
    alternative = alternatives[0]

    assert alternative.total_distance_meters == pytest.approx(2000.5)
    assert alternative.total_duration_seconds == pytest.approx(420)
    assert len(alternative.legs) == 3


def test_aggregate_decodes_overview_geometry():
    alternative = aggregate([_route("Main St", _leg(1, 1))])[0]

    assert alternative.overview_path[0] == Coordinate(38.5, -120.2)
    assert len(alternative.overview_path) == 3


def test_aggregate_without_overview_geometry_has_empty_path():
    alternative = aggregate([_route("Main St", _leg(1, 1), polyline="")])[0]
    assert alternative.overview_path == ()


def test_aggregate_empty_candidates_raises():
    with pytest.raises(NoRoutesAvailable):
        aggregate([])


def test_aggregate_propagates_corrupt_geometry():
    with pytest.raises(MalformedPolyline):
        aggregate([_route("Main St", _leg(1, 1), polyline="_p~iF")])


def test_summary_label_fallbacks():
    with_summary = _route("  I-90 W ", _leg(1, 1, end="X"))
    from_legs = _route(None, _leg(1, 1, end="12 Oak Ave"), _leg(1, 1, end="4 Elm St"), _leg(1, 1, end="9 Pine Rd"))
    blank = _route("", _leg(1, 1))

    assert summary_label(with_summary, 0) == "I-90 W"
    assert summary_label(from_legs, 0) == "12 Oak Ave → 4 Elm St"
    assert summary_label(blank, 2) == "Route 3"
    assert [alternative.summary_label for alternative in aggregate([blank, blank])] == ["Route 1", "Route 2"]


def test_raw_route_accepts_camel_case_json():
    raw = RawRoute.model_validate(
        {
            "summary": "Queen St W",
            "overviewPolyline": REFERENCE_ENCODED,
            "legs": [
                {
                    "distanceMeters": 1500,
                    "durationSeconds": 240,
                    "startAddress": "1 King St",
                    "endAddress": "200 Queen St",
                    "startCoordinate": {"lat": 43.64, "lng": -79.38},
                    "endCoordinate": {"latitude": 43.65, "longitude": -79.39},
                    "steps": [
                        {
                            "instruction": "Turn <b>left</b> onto Queen St",
                            "distanceMeters": 1500,
                            "durationSeconds": 240,
                            "polyline": encode_polyline([(43.64, -79.38), (43.65, -79.39)]),
                        }
                    ],
                }
            ],
        }
    )

    alternative = aggregate([raw])[0]
    leg = alternative.legs[0]

    assert leg.start_coordinate == Coordinate(43.64, -79.38)
    assert leg.end_coordinate == Coordinate(43.65, -79.39)
    assert leg.steps[0].instruction == "Turn left onto Queen St"
    assert leg.step_polyline == (Coordinate(43.64, -79.38), Coordinate(43.65, -79.39))


def test_select_alternative_clamps_index():
    alternatives = aggregate([_route("A", _leg(1, 1)), _route("B", _leg(2, 2)), _route("C", _leg(3, 3))])

    assert select_alternative(alternatives, 1).summary_label == "B"
    assert select_alternative(alternatives, 7).summary_label == "C"
    assert select_alternative(alternatives, -2).summary_label == "A"


def test_select_alternative_requires_alternatives():
    with pytest.raises(NoRoutesAvailable):
        select_alternative([], 0)


def test_route_alternatives_cursor():
    alternatives = RouteAlternatives.from_candidates(
        [_route("A", _leg(1, 1)), _route("B", _leg(2, 2))],
        selected_index=5,
    )

    assert alternatives.selected_index == 1
    assert alternatives.best.summary_label == "A"

    chosen = alternatives.select(0)
    assert chosen.summary_label == "A"
    assert alternatives.selected is chosen
    assert len(alternatives) == 2
    assert [alternative.summary_label for alternative in alternatives] == ["A", "B"]
