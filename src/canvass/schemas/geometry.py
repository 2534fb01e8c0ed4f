"""Pydantic request/response models for geometry endpoints."""

from __future__ import annotations

from typing import List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field

from ..models.domain import Region

LatLng = Tuple[float, float]


class PolylineDecodeRequest(BaseModel):
    encoded: str = Field(..., description="Encoded polyline string.")
    precision: int = Field(default=5, ge=1, le=7)


class PolylineEncodeRequest(BaseModel):
    model_config = ConfigDict(allow_inf_nan=False)

    coordinates: List[LatLng]
    precision: int = Field(default=5, ge=1, le=7)


class PolylineResponse(BaseModel):
    encoded: str
    coordinates: List[LatLng]


class ContainsRequest(BaseModel):
    ring: List[LatLng] = Field(..., description="Territory boundary as (lat, lng) pairs.")
    point: LatLng


class ContainsResponse(BaseModel):
    inside: bool


class FilterRequest(BaseModel):
    ring: List[LatLng]
    points: List[LatLng]


class FilterResponse(BaseModel):
    indices: List[int] = Field(..., description="Positions of the inside points in the request.")
    points: List[LatLng]


class RegionRequest(BaseModel):
    ring: Optional[List[LatLng]] = Field(default=None, description="Territory boundary, framed when present.")
    points: Optional[List[LatLng]] = Field(default=None, description="Properties, framed when there is no boundary.")
    padding_factor: Optional[float] = Field(default=None, ge=0.0)
    min_span: Optional[float] = Field(default=None, gt=0.0)


class RegionModel(BaseModel):
    latitude: float
    longitude: float
    latitude_delta: float
    longitude_delta: float

    @classmethod
    def from_region(cls, region: Region) -> "RegionModel":
        return cls(
            latitude=region.center.latitude,
            longitude=region.center.longitude,
            latitude_delta=region.lat_span,
            longitude_delta=region.lng_span,
        )


class TerritoryStatsResponse(BaseModel):
    vertex_count: int
    area_sq_meters: float
    region: RegionModel
