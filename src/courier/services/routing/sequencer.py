"""Nearest-neighbour sequencing of delivery stops."""

from __future__ import annotations

import logging
from typing import Sequence

from ...config import settings
from ...models.domain import Coordinate, DeliveryStop, RouteSequence
from ..estimation import estimate_pickup_time_minutes
from ..geospatial import haversine_km

logger = logging.getLogger(__name__)


def nearest_neighbor_sequence(
    stops: Sequence[DeliveryStop],
    start: Coordinate,
) -> tuple[list[DeliveryStop], list[float]]:
    """Greedy visiting order starting from ``start``.

    Each step moves to the closest unvisited stop; on equal distances the stop
    that appears first in the input wins. Returns the ordered stops and the
    length of each leg in kilometers.
    """
    remaining = list(stops)
    ordered: list[DeliveryStop] = []
    legs: list[float] = []
    current = start

    while remaining:
        nearest_index = 0
        nearest_distance = haversine_km(current, remaining[0].location)
        for index in range(1, len(remaining)):
            distance = haversine_km(current, remaining[index].location)
            if distance < nearest_distance:
                nearest_distance = distance
                nearest_index = index

        nearest = remaining.pop(nearest_index)
        ordered.append(nearest)
        legs.append(nearest_distance)
        current = nearest.location

    return ordered, legs


class RouteSequencer:
    """Orders delivery stops into a visiting sequence from a depot point."""

    def __init__(
        self,
        maps_api_key: str | None = None,
        nearest_neighbor_ceiling: int | None = None,
        average_speed_kmh: float | None = None,
        preparation_minutes: float | None = None,
    ) -> None:
        self.maps_api_key = maps_api_key
        self.nearest_neighbor_ceiling = (
            nearest_neighbor_ceiling
            if nearest_neighbor_ceiling is not None
            else settings.route_nearest_neighbor_ceiling
        )
        self.average_speed_kmh = average_speed_kmh
        self.preparation_minutes = preparation_minutes

    def sequence(self, stops: Sequence[DeliveryStop], start: Coordinate) -> RouteSequence:
        if len(stops) > self.nearest_neighbor_ceiling:
            # TODO: call a directions API when maps_api_key is set; nearest neighbour until then.
            logger.debug(
                f"{len(stops)} stops exceeds nearest-neighbour ceiling of "
                f"{self.nearest_neighbor_ceiling}; no directions integration configured, using fallback"
            )

        ordered, legs = nearest_neighbor_sequence(stops, start)
        total_distance = sum(legs)
        estimated_minutes = 0
        if ordered:
            estimated_minutes = estimate_pickup_time_minutes(
                total_distance,
                average_speed_kmh=self.average_speed_kmh,
                preparation_minutes=self.preparation_minutes,
            )
        return RouteSequence(
            ordered_stops=ordered,
            total_distance_km=total_distance,
            estimated_minutes=estimated_minutes,
            leg_distances_km=legs,
        )


def sequence_stops(stops: Sequence[DeliveryStop], start: Coordinate) -> RouteSequence:
    return RouteSequencer().sequence(stops, start)
