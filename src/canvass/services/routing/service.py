"""Route preview orchestration service."""

from __future__ import annotations

import logging
from typing import Sequence

from ...models.domain import RouteAlternative, RouteLeg
from ...schemas.geometry import RegionModel
from ...schemas.routing import (
    RawRoute,
    RouteAlternativeModel,
    RouteLegModel,
    RoutePreviewRequest,
    RoutePreviewResponse,
    RouteStepModel,
)
from ..regions import region_for_path
from .aggregator import RouteAlternatives
from .directions_client import DirectionsClient
from .formatting import describe_alternative, format_distance_meters, format_duration_seconds

logger = logging.getLogger(__name__)


def _leg_model(leg: RouteLeg) -> RouteLegModel:
    return RouteLegModel(
        start_address=leg.start_address,
        end_address=leg.end_address,
        start_coordinate=leg.start_coordinate,
        end_coordinate=leg.end_coordinate,
        distance_meters=leg.distance_meters,
        distance_text=format_distance_meters(leg.distance_meters),
        duration_seconds=leg.duration_seconds,
        duration_text=format_duration_seconds(leg.duration_seconds),
        steps=[
            RouteStepModel(
                instruction=step.instruction,
                distance_meters=step.distance_meters,
                distance_text=format_distance_meters(step.distance_meters),
                duration_seconds=step.duration_seconds,
                duration_text=format_duration_seconds(step.duration_seconds),
                maneuver=step.maneuver,
            )
            for step in leg.steps
        ],
    )


def _alternative_model(index: int, alternative: RouteAlternative) -> RouteAlternativeModel:
    return RouteAlternativeModel(index=index, **describe_alternative(alternative, best=index == 0))


def build_preview(alternatives: RouteAlternatives) -> RoutePreviewResponse:
    """Display models for every alternative plus the selected one's legs, path and framing region."""
    selected = alternatives.selected
    path = selected.overview_path
    if not path:
        # no overview geometry: frame the leg endpoints instead
        path = tuple(
            coordinate
            for leg in selected.legs
            for coordinate in (leg.start_coordinate, leg.end_coordinate)
            if coordinate is not None
        )
    return RoutePreviewResponse(
        selected_index=alternatives.selected_index,
        alternatives=[_alternative_model(index, alternative) for index, alternative in enumerate(alternatives)],
        legs=[_leg_model(leg) for leg in selected.legs],
        overview_path=list(selected.overview_path),
        region=RegionModel.from_region(region_for_path(path)),
        warnings=list(selected.warnings),
    )


def preview_from_candidates(candidates: Sequence[RawRoute], selected_index: int = 0) -> RoutePreviewResponse:
    alternatives = RouteAlternatives.from_candidates(candidates, selected_index)
    selected = alternatives.selected
    logger.info(
        f"Selected route {alternatives.selected_index + 1}/{len(alternatives)} '{selected.summary_label}': "
        f"{selected.total_distance_meters:.0f} m, {selected.total_duration_seconds:.0f} s, "
        f"{len(selected.legs)} leg(s)"
    )
    return build_preview(alternatives)


def preview_routes(payload: RoutePreviewRequest, client: DirectionsClient | None = None) -> RoutePreviewResponse:
    """Fetch directions for the requested stops and build the route preview."""
    directions_client = client or DirectionsClient()
    candidates = directions_client.directions(
        payload.addresses,
        mode=payload.mode,
        optimize_waypoints=payload.optimize_waypoints,
        avoid=payload.avoid(),
    )
    logger.info(f"Directions service returned {len(candidates)} candidate(s)")
    return preview_from_candidates(candidates, payload.selected_index)
