"""Route candidate, request and response schemas."""

from __future__ import annotations

from typing import Any, List, Literal, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from .geometry import LatLng, RegionModel


def _coerce_lat_lng(value: Any) -> Any:
    """Accept {lat, lng}, {latitude, longitude} or a (lat, lng) pair."""
    if isinstance(value, dict):
        if "lat" in value and "lng" in value:
            return (value["lat"], value["lng"])
        if "latitude" in value and "longitude" in value:
            return (value["latitude"], value["longitude"])
    return value


class _RawModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class RawStep(_RawModel):
    instruction: str = ""
    distance_meters: float = 0.0
    duration_seconds: float = 0.0
    start_coordinate: Optional[LatLng] = None
    end_coordinate: Optional[LatLng] = None
    maneuver: Optional[str] = None
    polyline: Optional[str] = Field(default=None, description="Encoded step geometry.")

    @field_validator("start_coordinate", "end_coordinate", mode="before")
    @classmethod
    def _parse_coordinate(cls, value: Any) -> Any:
        return _coerce_lat_lng(value)


class RawLeg(_RawModel):
    distance_meters: float = 0.0
    duration_seconds: float = 0.0
    start_address: str = ""
    end_address: str = ""
    start_coordinate: Optional[LatLng] = None
    end_coordinate: Optional[LatLng] = None
    steps: List[RawStep] = Field(default_factory=list)

    @field_validator("start_coordinate", "end_coordinate", mode="before")
    @classmethod
    def _parse_coordinate(cls, value: Any) -> Any:
        return _coerce_lat_lng(value)


class RawRoute(_RawModel):
    """One route candidate as returned by the directions service, already parsed from JSON."""

    legs: List[RawLeg] = Field(default_factory=list)
    overview_polyline: str = ""
    summary: Optional[str] = None
    warnings: List[str] = Field(default_factory=list)
    waypoint_order: List[int] = Field(default_factory=list)


class RoutePreviewRequest(BaseModel):
    addresses: List[str] = Field(..., description="Origin, optional waypoints and destination, in visit order.")
    mode: Optional[Literal["driving", "walking", "bicycling", "transit"]] = None
    optimize_waypoints: bool = Field(default=False, description="Let the service reorder intermediate stops.")
    avoid_tolls: bool = False
    avoid_highways: bool = False
    avoid_ferries: bool = False
    selected_index: int = 0

    def avoid(self) -> list[str]:
        avoid: list[str] = []
        if self.avoid_ferries:
            avoid.append("ferries")
        if self.avoid_highways:
            avoid.append("highways")
        if self.avoid_tolls:
            avoid.append("tolls")
        return avoid


class AggregateRequest(BaseModel):
    candidates: List[RawRoute]
    selected_index: int = 0


class RouteStepModel(BaseModel):
    instruction: str
    distance_meters: float
    distance_text: str
    duration_seconds: float
    duration_text: str
    maneuver: Optional[str] = None


class RouteLegModel(BaseModel):
    start_address: str
    end_address: str
    start_coordinate: Optional[LatLng] = None
    end_coordinate: Optional[LatLng] = None
    distance_meters: float
    distance_text: str
    duration_seconds: float
    duration_text: str
    steps: List[RouteStepModel]


class RouteAlternativeModel(BaseModel):
    index: int
    summary: str
    distance_meters: float
    duration_seconds: float
    distance_miles: float
    distance_rounded_text: str
    distance_detailed_text: str
    duration_text: str
    traffic_condition: str


class RoutePreviewResponse(BaseModel):
    selected_index: int
    alternatives: List[RouteAlternativeModel]
    legs: List[RouteLegModel]
    overview_path: List[Tuple[float, float]]
    region: RegionModel
    warnings: List[str] = Field(default_factory=list)
