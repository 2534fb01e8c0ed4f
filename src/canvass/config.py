"""Application configuration and settings management."""

from typing import Any, Literal, Optional

import json
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime configuration loaded from environment variables or defaults."""

    model_config = SettingsConfigDict(
        env_prefix="CANVASS_",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
    )

    app_name: str = "Canvass Geospatial Core API"
    api_prefix: str = "/api"

    # Map framing
    region_padding_factor: float = Field(
        default=0.3,
        ge=0.0,
        description="Extra span added around the framed geometry, as a fraction of its extent.",
    )
    region_min_span: float = Field(
        default=0.01,
        gt=0.0,
        description="Smallest latitude/longitude span (degrees) a computed region may have.",
    )
    fallback_latitude: float = Field(default=37.7749, description="Center latitude used when nothing can be framed.")
    fallback_longitude: float = Field(default=-122.4194, description="Center longitude used when nothing can be framed.")
    fallback_span: float = Field(default=0.05, gt=0.0, description="Span (degrees) of the fallback region.")

    # Directions service
    directions_base_url: str = Field(
        default="https://maps.googleapis.com/maps/api/directions/json",
        description="Endpoint of the third-party directions service.",
    )
    directions_api_key: Optional[str] = Field(
        default=None,
        description="API key for the directions service.",
    )
    directions_mode: Literal["driving", "walking", "bicycling", "transit"] = Field(
        default="driving",
        description="Default travel mode when a request does not specify one.",
    )
    directions_timeout_seconds: float = Field(default=15.0, gt=0.0)
    directions_max_retries: int = Field(default=2, ge=0)
    directions_backoff_seconds: float = Field(default=0.5, ge=0.0)
    directions_max_addresses: int = Field(
        default=25,
        ge=2,
        description="Maximum number of stops (origin, waypoints and destination) in one request.",
    )

    frontend_allowed_origins: tuple[str, ...] = Field(
        default=(
            "http://localhost:8081",
            "http://127.0.0.1:8081",
            "http://localhost:19006",
        ),
        description="Permitted web origins for browser clients (CORS).",
    )

    @field_validator("frontend_allowed_origins", mode="before")
    @classmethod
    def _parse_str_tuple_from_env(cls, value: Any) -> tuple[str, ...]:
        """Parse string tuple from environment variable (comma-separated or JSON array)."""
        if isinstance(value, tuple):
            return value
        if isinstance(value, list):
            return tuple(str(item) for item in value)
        if isinstance(value, str):
            try:
                parsed = json.loads(value)
                if isinstance(parsed, list):
                    return tuple(str(item) for item in parsed)
            except (json.JSONDecodeError, TypeError):
                pass
            if "," in value:
                return tuple(item.strip() for item in value.split(",") if item.strip())
            if value.strip():
                return (value.strip(),)
        return tuple()


settings = Settings()
