"""Route planning endpoints."""

from __future__ import annotations

import logging

import httpx
from fastapi import APIRouter, HTTPException, status

from ...exceptions import DirectionsError, MalformedPolyline, NoRoutesAvailable
from ...schemas.routing import AggregateRequest, RoutePreviewRequest, RoutePreviewResponse
from ...services.routing import service as routing_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/routes", tags=["routes"])


@router.post("/aggregate", response_model=RoutePreviewResponse, status_code=status.HTTP_200_OK)
def aggregate(payload: AggregateRequest) -> RoutePreviewResponse:
    """Build a route preview from candidates the client already fetched."""
    try:
        return routing_service.preview_from_candidates(payload.candidates, payload.selected_index)
    except NoRoutesAvailable as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    except MalformedPolyline as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc


@router.post("/preview", response_model=RoutePreviewResponse, status_code=status.HTTP_200_OK)
def preview(payload: RoutePreviewRequest) -> RoutePreviewResponse:
    """Calculate directions through the given addresses and return the ranked alternatives."""
    try:
        return routing_service.preview_routes(payload)
    except NoRoutesAvailable as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    except MalformedPolyline as exc:
        logger.error(f"Directions service returned corrupt geometry: {exc}")
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(exc)) from exc
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except DirectionsError as exc:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(exc)) from exc
    except httpx.HTTPStatusError as exc:
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail=f"Directions service responded with HTTP {exc.response.status_code}",
        ) from exc
    except (ConnectionError, httpx.TimeoutException) as exc:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(exc)) from exc
    except Exception as exc:
        logger.exception(f"Error calculating route preview: {exc}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to calculate route: {str(exc)}",
        ) from exc
