import pytest

from src.canvass.models.domain import RouteAlternative, RouteLeg
from src.canvass.services.routing.formatting import (
    PLACEHOLDER,
    describe_alternative,
    format_distance_detailed,
    format_distance_meters,
    format_distance_rounded,
    format_duration,
    format_duration_seconds,
    kilometers_to_miles,
    meters_to_kilometers,
    seconds_to_minutes,
)


def _alternative(distance_meters: float, duration_seconds: float) -> RouteAlternative:
    leg = RouteLeg(
        start_address="1 King St",
        end_address="200 Queen St",
        start_coordinate=None,
        end_coordinate=None,
        distance_meters=distance_meters,
        duration_seconds=duration_seconds,
    )
    return RouteAlternative(summary_label="Queen St", legs=(leg,), overview_path=())


def test_unit_conversions():
    assert meters_to_kilometers(1500) == 1.5
    assert meters_to_kilometers(None) == 0.0
    assert meters_to_kilometers(-10) == 0.0
    assert seconds_to_minutes(90) == 1.5
    assert seconds_to_minutes(0) == 0.0
    assert kilometers_to_miles(10) == pytest.approx(6.21371)


def test_distance_text():
    assert format_distance_rounded(12.3) == "12 km"
    assert format_distance_detailed(12.34) == "12.3 km"
    assert format_distance_meters(850) == "0.8 km"
    assert format_distance_rounded(0) == PLACEHOLDER
    assert format_distance_detailed(None) == PLACEHOLDER


@pytest.mark.parametrize(
    "minutes, expected",
    [
        (45, "45 min"),
        (59.2, "59 min"),
        (60, "1 hr"),
        (65, "1 hr 5 min"),
        (90, "1 hr 30 min"),
        (119.7, "2 hr"),
        (125, "2 hr 5 min"),
        (0, PLACEHOLDER),
        (None, PLACEHOLDER),
    ],
)
def test_format_duration(minutes, expected):
    assert format_duration(minutes) == expected


def test_format_duration_seconds():
    assert format_duration_seconds(3900) == "1 hr 5 min"


def test_describe_alternative_does_not_touch_stored_values():
    alternative = _alternative(16093.4, 1260)

    best = describe_alternative(alternative, best=True)
    other = describe_alternative(alternative, best=False)

    assert best["traffic_condition"] == "Best route"
    assert other["traffic_condition"] == "Alternative"
    assert best["distance_meters"] == 16093.4
    assert best["duration_seconds"] == 1260
    assert best["distance_miles"] == pytest.approx(10.0, rel=1e-3)
    assert best["distance_rounded_text"] == "16 km"
    assert best["distance_detailed_text"] == "16.1 km"
    assert best["duration_text"] == "21 min"
    assert alternative.total_distance_meters == 16093.4
