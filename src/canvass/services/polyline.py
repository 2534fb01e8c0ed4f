"""Encoded polyline codec (Google's signed-varint polyline format)."""

from __future__ import annotations

import math
from typing import Iterable, Sequence

from ..exceptions import MalformedPolyline
from ..models.domain import Coordinate

DEFAULT_PRECISION = 5

# Each character carries 5 payload bits offset by 63; 0x20 flags that more chunks follow.
_CHUNK_MASK = 0x1F
_CONTINUATION = 0x20
_ASCII_OFFSET = 63


def _read_varint(encoded: str, index: int) -> tuple[int, int]:
    """Read one zig-zag varint starting at ``index``; return (value, next_index)."""
    result = 0
    shift = 0
    while True:
        if index >= len(encoded):
            raise MalformedPolyline(
                f"Polyline ends inside a value at position {index}.",
                position=index,
            )
        b = ord(encoded[index]) - _ASCII_OFFSET
        if b < 0 or b > 0x3F:
            raise MalformedPolyline(
                f"Invalid polyline character {encoded[index]!r} at position {index}.",
                position=index,
            )
        index += 1
        result |= (b & _CHUNK_MASK) << shift
        shift += 5
        if b < _CONTINUATION:
            break
    delta = ~(result >> 1) if (result & 1) else (result >> 1)
    return delta, index


def decode_polyline(encoded: str, precision: int = DEFAULT_PRECISION) -> list[Coordinate]:
    """Decode an encoded polyline string to a list of (latitude, longitude) coordinates.

    Directions services return route geometry in Google's polyline encoding.
    The whole string must be consumed: a truncated value, a latitude without
    its longitude, or a character outside the encoding alphabet raises
    ``MalformedPolyline`` instead of returning a partial path.

    Args:
        encoded: Encoded polyline string
        precision: Number of decimal digits encoded (5 for the standard format)

    Returns:
        List of Coordinate tuples
    """
    factor = 10 ** precision
    coordinates: list[Coordinate] = []
    index = 0
    lat = 0
    lng = 0

    while index < len(encoded):
        dlat, index = _read_varint(encoded, index)
        if index >= len(encoded):
            raise MalformedPolyline(
                f"Polyline has a latitude without a longitude at position {index}.",
                position=index,
            )
        dlng, index = _read_varint(encoded, index)
        lat += dlat
        lng += dlng
        coordinates.append(Coordinate(lat / factor, lng / factor))

    return coordinates


def _round_half_away(value: float) -> int:
    return int(math.copysign(math.floor(abs(value) + 0.5), value))


def _write_varint(value: int, out: list[str]) -> None:
    value = ~(value << 1) if value < 0 else value << 1
    while value >= _CONTINUATION:
        out.append(chr((_CONTINUATION | (value & _CHUNK_MASK)) + _ASCII_OFFSET))
        value >>= 5
    out.append(chr(value + _ASCII_OFFSET))


def encode_polyline(
    coordinates: Iterable[Sequence[float]],
    precision: int = DEFAULT_PRECISION,
) -> str:
    """Encode (latitude, longitude) pairs into a polyline string.

    Raises:
        ValueError: if a coordinate is NaN or infinite
    """
    factor = 10 ** precision
    out: list[str] = []
    prev_lat = 0
    prev_lng = 0
    for lat, lng in coordinates:
        if not (math.isfinite(lat) and math.isfinite(lng)):
            raise ValueError(f"Cannot encode non-finite coordinate ({lat}, {lng}).")
        lat_e = _round_half_away(lat * factor)
        lng_e = _round_half_away(lng * factor)
        _write_varint(lat_e - prev_lat, out)
        _write_varint(lng_e - prev_lng, out)
        prev_lat, prev_lng = lat_e, lng_e
    return "".join(out)
