"""HTTP client for the third-party directions service."""

from __future__ import annotations

import logging
import time
from typing import Any, Sequence

import httpx

from ...config import settings
from ...exceptions import DirectionsError
from ...schemas.routing import RawLeg, RawRoute, RawStep

logger = logging.getLogger(__name__)


def _value(block: Any) -> float:
    """Read ``{"value": n}`` blocks (distance/duration) defensively."""
    if isinstance(block, dict):
        value = block.get("value")
        if isinstance(value, (int, float)):
            return float(value)
    return 0.0


def _points(block: Any) -> str | None:
    if isinstance(block, dict):
        return block.get("points") or None
    return None


def _parse_step(step: dict) -> RawStep:
    return RawStep(
        instruction=step.get("html_instructions") or "",
        distance_meters=_value(step.get("distance")),
        duration_seconds=_value(step.get("duration")),
        start_coordinate=step.get("start_location"),
        end_coordinate=step.get("end_location"),
        maneuver=step.get("maneuver"),
        polyline=_points(step.get("polyline")),
    )


def _parse_leg(leg: dict) -> RawLeg:
    return RawLeg(
        distance_meters=_value(leg.get("distance")),
        duration_seconds=_value(leg.get("duration")),
        start_address=leg.get("start_address") or "",
        end_address=leg.get("end_address") or "",
        start_coordinate=leg.get("start_location"),
        end_coordinate=leg.get("end_location"),
        steps=[_parse_step(step) for step in leg.get("steps") or [] if isinstance(step, dict)],
    )


def parse_directions_payload(payload: dict) -> list[RawRoute]:
    """Map a directions JSON payload onto raw route candidates.

    Args:
        payload: Parsed JSON body of a directions response

    Returns:
        Raw candidates in the order the service returned them; empty when
        the service found no route between the addresses

    Raises:
        DirectionsError: if the payload status is neither "OK" nor "ZERO_RESULTS"
    """
    status = payload.get("status")
    if status == "ZERO_RESULTS":
        logger.info("Directions service found no route between the requested addresses")
        return []
    if status != "OK":
        message = payload.get("error_message") or status or "Directions request failed"
        raise DirectionsError(str(message), status=status)

    routes = payload.get("routes")
    if not isinstance(routes, list):
        return []

    candidates: list[RawRoute] = []
    for route in routes:
        if not isinstance(route, dict):
            continue
        candidates.append(
            RawRoute(
                legs=[_parse_leg(leg) for leg in route.get("legs") or [] if isinstance(leg, dict)],
                overview_polyline=_points(route.get("overview_polyline")) or "",
                summary=route.get("summary") or None,
                warnings=list(route.get("warnings") or []),
                waypoint_order=list(route.get("waypoint_order") or []),
            )
        )
    return candidates


class DirectionsClient:
    def __init__(
        self,
        api_key: str | None = None,
        base_url: str | None = None,
        timeout: float | None = None,
        max_retries: int | None = None,
        backoff_seconds: float | None = None,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.api_key = api_key or settings.directions_api_key
        if not self.api_key:
            raise ValueError("Directions API key is not configured.")
        self.base_url = base_url or settings.directions_base_url
        self.timeout = timeout if timeout is not None else settings.directions_timeout_seconds
        self.max_retries = max_retries if max_retries is not None else settings.directions_max_retries
        self.backoff_seconds = backoff_seconds if backoff_seconds is not None else settings.directions_backoff_seconds
        self._transport = transport

    def _get_client(self) -> httpx.Client:
        return httpx.Client(
            timeout=httpx.Timeout(self.timeout, connect=10.0),
            transport=self._transport,
        )

    def build_params(
        self,
        addresses: Sequence[str],
        *,
        mode: str | None = None,
        optimize_waypoints: bool = False,
        avoid: Sequence[str] = (),
    ) -> dict[str, str]:
        """Query parameters for an origin -> waypoints -> destination request."""
        stops = [address.strip() for address in addresses if address and address.strip()]
        if len(stops) < 2:
            raise ValueError("At least two addresses are required to calculate a route.")
        if len(stops) > settings.directions_max_addresses:
            raise ValueError(
                f"Too many addresses ({len(stops)}); at most {settings.directions_max_addresses} are supported."
            )

        params = {
            "key": self.api_key,
            "origin": stops[0],
            "destination": stops[-1],
            "mode": (mode or settings.directions_mode).lower(),
            "units": "metric",
            "alternatives": "true",
        }
        waypoints = stops[1:-1]
        if waypoints:
            prefix = "optimize:true|" if optimize_waypoints else ""
            params["waypoints"] = prefix + "|".join(waypoints)
        if avoid:
            params["avoid"] = "|".join(avoid)
        return params

    def directions(
        self,
        addresses: Sequence[str],
        *,
        mode: str | None = None,
        optimize_waypoints: bool = False,
        avoid: Sequence[str] = (),
    ) -> list[RawRoute]:
        """Request route candidates through the given addresses.

        Returns:
            Raw route candidates, in the service's order
        """
        params = self.build_params(addresses, mode=mode, optimize_waypoints=optimize_waypoints, avoid=avoid)
        logger.info(
            f"Requesting directions: origin={params['origin']!r}, destination={params['destination']!r}, "
            f"waypoints={params.get('waypoints', '')!r}, mode={params['mode']}"
        )

        client = self._get_client()
        try:
            attempt = 0
            while True:
                try:
                    response = client.get(self.base_url, params=params)
                    response.raise_for_status()
                    return parse_directions_payload(response.json())
                except httpx.HTTPStatusError as e:
                    attempt += 1
                    if e.response.status_code < 500 or attempt > self.max_retries:
                        raise
                    time.sleep(self.backoff_seconds * attempt)
                except (httpx.TimeoutException, httpx.ReadTimeout) as e:
                    attempt += 1
                    if attempt > self.max_retries:
                        logger.warning(f"Directions request timed out after {self.max_retries} retries: {e}")
                        raise
                    wait_time = self.backoff_seconds * (2 ** (attempt - 1))
                    logger.debug(f"Directions timeout, retrying in {wait_time:.1f}s (attempt {attempt}/{self.max_retries})")
                    time.sleep(wait_time)
                except (httpx.ConnectError, httpx.NetworkError) as e:
                    attempt += 1
                    if attempt > self.max_retries:
                        raise ConnectionError(
                            f"Failed to connect to directions service at {self.base_url}: {e}"
                        ) from e
                    wait_time = self.backoff_seconds * (2 ** (attempt - 1))
                    logger.debug(f"Directions network error, retrying in {wait_time:.1f}s (attempt {attempt}/{self.max_retries}): {e}")
                    time.sleep(wait_time)
        finally:
            client.close()


def is_configured() -> bool:
    """True when a directions API key is available."""
    return bool(settings.directions_api_key)
