"""Geospatial helper functions."""

from __future__ import annotations

import math
from typing import Sequence

from shapely.geometry import Point, Polygon

from ..models.domain import Coordinate

EARTH_RADIUS_KM = 6371.0


def to_radians(degrees: float) -> float:
    return degrees * (math.pi / 180)


def haversine_km(a: Coordinate, b: Coordinate) -> float:
    """Compute great-circle distance between two coordinates using the Haversine formula."""

    phi1, phi2 = to_radians(a.latitude), to_radians(b.latitude)
    d_phi = to_radians(b.latitude - a.latitude)
    d_lambda = to_radians(b.longitude - a.longitude)

    h = math.sin(d_phi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(d_lambda / 2) ** 2
    c = 2 * math.atan2(math.sqrt(h), math.sqrt(1 - h))
    return EARTH_RADIUS_KM * c


def midpoint(a: Coordinate, b: Coordinate) -> Coordinate:
    """Arithmetic midpoint of two coordinates, used as a lookup key for nearby hubs."""

    return Coordinate(
        longitude=(a.longitude + b.longitude) / 2,
        latitude=(a.latitude + b.latitude) / 2,
    )


def within_radius_km(center: Coordinate, point: Coordinate, radius_km: float) -> bool:
    return haversine_km(center, point) <= radius_km


def point_in_polygon(point: Coordinate, polygon: Sequence[Coordinate]) -> bool:
    """Return True if the point lies inside the polygon (boundary excluded)."""

    if len(polygon) < 3:
        return False
    shape = Polygon([vertex.as_pair() for vertex in polygon])
    return shape.contains(Point(point.longitude, point.latitude))
