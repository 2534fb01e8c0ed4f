"""Health endpoints."""

from __future__ import annotations

from fastapi import APIRouter, status

router = APIRouter(tags=["health"])


@router.get("/health", status_code=status.HTTP_200_OK)
def health_root() -> dict:
    """Simple health check endpoint that doesn't require any dependencies."""
    return {"status": "ok"}


def _get_directions_check():
    """Lazy import to avoid startup failures."""
    from ...services.routing.directions_client import is_configured
    return is_configured


@router.get("/health/directions", status_code=status.HTTP_200_OK)
def health_directions() -> dict:
    """Report whether the directions service can be called."""
    try:
        configured = _get_directions_check()()
        return {"service": "directions", "configured": configured}
    except Exception as e:
        return {"service": "directions", "configured": False, "error": str(e)}
