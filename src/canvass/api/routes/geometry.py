"""Geometry endpoints: polyline codec, containment and map regions."""

from __future__ import annotations

from fastapi import APIRouter, HTTPException, status

from ...exceptions import MalformedPolyline
from ...schemas.geometry import (
    ContainsRequest,
    ContainsResponse,
    FilterRequest,
    FilterResponse,
    PolylineDecodeRequest,
    PolylineEncodeRequest,
    PolylineResponse,
    RegionModel,
    RegionRequest,
    TerritoryStatsResponse,
)
from ...services.geospatial import contains, filter_inside, ring_area_sq_meters
from ...services.polyline import decode_polyline, encode_polyline
from ...services.regions import region_for_territory, region_from_points, region_from_ring

router = APIRouter(prefix="/geometry", tags=["geometry"])


@router.post("/polyline/decode", response_model=PolylineResponse, status_code=status.HTTP_200_OK)
def decode(payload: PolylineDecodeRequest) -> PolylineResponse:
    try:
        coordinates = decode_polyline(payload.encoded, precision=payload.precision)
    except MalformedPolyline as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    return PolylineResponse(encoded=payload.encoded, coordinates=coordinates)


@router.post("/polyline/encode", response_model=PolylineResponse, status_code=status.HTTP_200_OK)
def encode(payload: PolylineEncodeRequest) -> PolylineResponse:
    try:
        encoded = encode_polyline(payload.coordinates, precision=payload.precision)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    return PolylineResponse(encoded=encoded, coordinates=payload.coordinates)


@router.post("/contains", response_model=ContainsResponse, status_code=status.HTTP_200_OK)
def point_in_territory(payload: ContainsRequest) -> ContainsResponse:
    return ContainsResponse(inside=contains(payload.ring, payload.point))


@router.post("/filter", response_model=FilterResponse, status_code=status.HTTP_200_OK)
def points_in_territory(payload: FilterRequest) -> FilterResponse:
    inside = filter_inside(payload.ring, list(enumerate(payload.points)), key=lambda item: item[1])
    return FilterResponse(
        indices=[index for index, _ in inside],
        points=[point for _, point in inside],
    )


@router.post("/region", response_model=RegionModel, status_code=status.HTTP_200_OK)
def region(payload: RegionRequest) -> RegionModel:
    if payload.ring:
        result = region_from_ring(payload.ring, payload.padding_factor, payload.min_span)
    else:
        result = region_from_points(payload.points or [], payload.padding_factor, payload.min_span)
    return RegionModel.from_region(result)


@router.post("/territory", response_model=TerritoryStatsResponse, status_code=status.HTTP_200_OK)
def territory_stats(payload: RegionRequest) -> TerritoryStatsResponse:
    ring = payload.ring or []
    return TerritoryStatsResponse(
        vertex_count=len(ring),
        area_sq_meters=ring_area_sq_meters(ring),
        region=RegionModel.from_region(region_for_territory(ring, payload.points)),
    )
