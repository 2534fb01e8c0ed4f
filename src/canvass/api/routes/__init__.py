"""Route group exports."""

from . import geometry, health, routes

__all__ = ["geometry", "routes", "health"]
