"""Hub ranking by distance to the pickup/delivery pair and spare capacity."""

from __future__ import annotations

import logging
from typing import Sequence

from ...errors import InvalidCandidate
from ...models.domain import CandidateHub, Coordinate, HubRecommendation, HubScore
from ..geospatial import haversine_km, point_in_polygon, within_radius_km

logger = logging.getLogger(__name__)

DISTANCE_WEIGHT = 0.7
CAPACITY_WEIGHT = 0.3
DISTANCE_PENALTY_PER_KM = 3.0


def validate_hub(hub: CandidateHub) -> None:
    if hub.max_orders <= 0:
        raise InvalidCandidate(hub.hub_id, "max_orders must be greater than zero")


def score_hub(hub: CandidateHub, pickup: Coordinate, delivery: Coordinate) -> HubScore:
    validate_hub(hub)
    to_pickup = haversine_km(hub.location, pickup)
    to_delivery = haversine_km(hub.location, delivery)
    average = (to_pickup + to_delivery) / 2

    distance_score = max(0.0, 100 - average * DISTANCE_PENALTY_PER_KM)
    capacity_score = hub.available_capacity / hub.max_orders * 100
    return HubScore(
        hub=hub,
        score=distance_score * DISTANCE_WEIGHT + capacity_score * CAPACITY_WEIGHT,
        distance_to_pickup_km=to_pickup,
        distance_to_delivery_km=to_delivery,
        average_distance_km=average,
    )


def rank_hubs(
    pickup: Coordinate,
    delivery: Coordinate,
    candidates: Sequence[CandidateHub],
) -> list[HubScore]:
    scored: list[HubScore] = []
    for hub in candidates:
        try:
            scored.append(score_hub(hub, pickup, delivery))
        except InvalidCandidate as exc:
            logger.warning(f"Excluding hub from ranking: {exc}")
    scored.sort(key=lambda item: (-item.score, item.average_distance_km, item.hub.hub_id))
    return scored


def select_best_hub(
    pickup: Coordinate,
    delivery: Coordinate,
    candidates: Sequence[CandidateHub],
    *,
    max_alternatives: int = 2,
) -> HubRecommendation | None:
    """Best hub plus up to ``max_alternatives`` runners-up, or None without candidates."""
    ranked = rank_hubs(pickup, delivery, candidates)
    if not ranked:
        return None
    return HubRecommendation(best=ranked[0], alternatives=ranked[1 : 1 + max_alternatives])


def is_in_service_area(hub: CandidateHub, point: Coordinate) -> bool:
    """Check a point against the hub's service radius or polygon.

    A hub without either restriction serves every point.
    """
    if hub.service_radius_km is not None:
        return within_radius_km(hub.location, point, hub.service_radius_km)
    if hub.service_polygon:
        return point_in_polygon(point, hub.service_polygon)
    return True
