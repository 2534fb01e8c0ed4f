"""Presentation helpers for route distances and durations.

Stored values are always meters and seconds; everything here only derives
display values and never mutates a route.
"""

from __future__ import annotations

import math
from typing import Optional

from ...models.domain import RouteAlternative

PLACEHOLDER = "—"
MILES_PER_KILOMETER = 0.621371

BEST_ROUTE = "Best route"
ALTERNATIVE_ROUTE = "Alternative"


def _positive(value: Optional[float]) -> bool:
    return value is not None and math.isfinite(value) and value > 0


def meters_to_kilometers(value: Optional[float]) -> float:
    return value / 1000 if _positive(value) else 0.0


def seconds_to_minutes(value: Optional[float]) -> float:
    return value / 60 if _positive(value) else 0.0


def kilometers_to_miles(kilometers: float) -> float:
    return kilometers * MILES_PER_KILOMETER


def format_distance_rounded(kilometers: Optional[float]) -> str:
    if not _positive(kilometers):
        return PLACEHOLDER
    return f"{round(kilometers)} km"


def format_distance_detailed(kilometers: Optional[float]) -> str:
    if not _positive(kilometers):
        return PLACEHOLDER
    return f"{kilometers:.1f} km"


def format_duration(minutes: Optional[float]) -> str:
    """Render minutes as e.g. ``45 min``, ``1 hr 5 min`` or ``2 hr``."""
    if not _positive(minutes):
        return PLACEHOLDER
    if minutes < 60:
        return f"{round(minutes)} min"

    hours = int(minutes // 60)
    mins = round(minutes % 60)
    if mins == 60:
        hours += 1
        mins = 0
    return f"{hours} hr {mins} min" if mins > 0 else f"{hours} hr"


def format_duration_seconds(seconds: Optional[float]) -> str:
    return format_duration(seconds_to_minutes(seconds))


def format_distance_meters(meters: Optional[float]) -> str:
    return format_distance_detailed(meters_to_kilometers(meters))


def describe_alternative(alternative: RouteAlternative, *, best: bool) -> dict:
    """Display values for one alternative, as shown in the route picker."""
    kilometers = meters_to_kilometers(alternative.total_distance_meters)
    minutes = seconds_to_minutes(alternative.total_duration_seconds)
    return {
        "summary": alternative.summary_label,
        "distance_meters": alternative.total_distance_meters,
        "duration_seconds": alternative.total_duration_seconds,
        "distance_miles": kilometers_to_miles(kilometers),
        "distance_rounded_text": format_distance_rounded(kilometers),
        "distance_detailed_text": format_distance_detailed(kilometers),
        "duration_text": format_duration(minutes),
        "traffic_condition": BEST_ROUTE if best else ALTERNATIVE_ROUTE,
    }
