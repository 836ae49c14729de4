"""Shared request/response pieces."""

from __future__ import annotations

import math
from typing import Annotated

from pydantic import AfterValidator

from ..models.domain import Coordinate


def _check_lng_lat(value: tuple[float, float]) -> tuple[float, float]:
    longitude, latitude = value
    if not (math.isfinite(longitude) and math.isfinite(latitude)):
        raise ValueError("coordinates must be finite numbers")
    if not -180 <= longitude <= 180:
        raise ValueError("longitude must be within [-180, 180]")
    if not -90 <= latitude <= 90:
        raise ValueError("latitude must be within [-90, 90]")
    return value


LngLat = Annotated[tuple[float, float], AfterValidator(_check_lng_lat)]
"""A ``[longitude, latitude]`` pair as sent over the wire."""


def to_coordinate(pair: tuple[float, float]) -> Coordinate:
    return Coordinate.from_pair(pair)
