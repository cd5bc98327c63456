"""
Coordinate adjustment helpers.

Stored and displayed locations are displaced a fixed distance east of the
geocoded point. The distance and an on/off switch come from the environment
and are read on every call so that a running service picks up changes.
"""
from __future__ import annotations

import logging
import math
import os
from typing import Any, Mapping, Union

from ..parsing.models import Coordinates

logger = logging.getLogger(__name__)

DEFAULT_EAST_SHIFT_METERS = 171
METERS_PER_DEGREE_AT_EQUATOR = 111320

SHIFT_DISTANCE_ENV = "COORDINATE_EAST_SHIFT_METERS"
SHIFT_ENABLED_ENV = "COORDINATE_SHIFT_ENABLED"


CoordinatesLike = Union[Coordinates, Mapping[str, Any]]


def _numeric_pair(coords: object) -> tuple[float, float] | None:
    """Return ``(lat, lng)`` for a Coordinates or ``{"lat", "lng"}`` mapping."""
    if isinstance(coords, Mapping):
        lat, lng = coords.get("lat"), coords.get("lng")
    else:
        lat, lng = getattr(coords, "lat", None), getattr(coords, "lng", None)
    for value in (lat, lng):
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            return None
        if not math.isfinite(value):
            return None
    # cos(lat) is zero at the poles
    if abs(lat) >= 90:
        return None
    return float(lat), float(lng)


def shift_coordinates_east(
    coords: CoordinatesLike,
    meters_east: float = DEFAULT_EAST_SHIFT_METERS,
) -> Coordinates:
    """
    Shift ``coords`` ``meters_east`` metres to the east.

    Accepts a Coordinates or any object or mapping with numeric ``lat`` and
    ``lng``, and returns a new Coordinates. Uses the small-distance
    approximation of 111320 * cos(lat) metres per degree of longitude.
    Latitude is left unchanged. Invalid input is logged and returned as is.
    """
    pair = _numeric_pair(coords)
    if pair is None:
        logger.warning("Invalid coordinates passed to shift_coordinates_east: %r", coords)
        return coords

    lat, lng = pair
    meters_per_degree_lng = METERS_PER_DEGREE_AT_EQUATOR * math.cos(math.radians(lat))
    shifted = Coordinates(lat=lat, lng=lng + meters_east / meters_per_degree_lng)

    logger.debug(
        "Shifted coordinates %sm east: (%s, %s) -> (%s, %s)",
        meters_east, lat, lng, shifted.lat, shifted.lng,
    )
    return shifted


def get_east_shift_distance() -> int:
    """Return the configured eastward shift in metres (default 171)."""
    raw = os.environ.get(SHIFT_DISTANCE_ENV)
    if raw:
        try:
            value = int(raw.strip())
        except ValueError:
            logger.warning("Ignoring non-integer %s=%r", SHIFT_DISTANCE_ENV, raw)
        else:
            if value >= 0:
                return value
            logger.warning("Ignoring negative %s=%r", SHIFT_DISTANCE_ENV, raw)
    return DEFAULT_EAST_SHIFT_METERS


def is_coordinate_shift_enabled() -> bool:
    """Shifting is on unless explicitly set to ``false`` or ``0``."""
    raw = os.environ.get(SHIFT_ENABLED_ENV)
    if raw is None:
        return True
    return raw.strip().lower() not in ("false", "0")


def apply_configured_shift(coords: CoordinatesLike | None) -> CoordinatesLike | None:
    """
    Shift ``coords`` by the configured distance when shifting is enabled.

    Returns the input object itself when it is ``None`` or shifting is off.
    Otherwise behaves like :func:`shift_coordinates_east`.
    """
    if coords is None or not is_coordinate_shift_enabled():
        return coords
    return shift_coordinates_east(coords, get_east_shift_distance())
