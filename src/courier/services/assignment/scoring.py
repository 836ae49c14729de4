"""Multi-factor suitability scoring of candidate drivers for an order."""

from __future__ import annotations

import logging
from typing import Sequence

from ...errors import InvalidCandidate
from ...models.domain import CandidateDriver, OrderShippingRequest, ScoredResult, Vehicle
from ..estimation import round_half_up
from ..geospatial import haversine_km

logger = logging.getLogger(__name__)

DISTANCE_WEIGHT = 0.40
RATING_WEIGHT = 0.25
CAPACITY_WEIGHT = 0.20
VEHICLE_WEIGHT = 0.10
SUCCESS_RATE_WEIGHT = 0.05

DISTANCE_PENALTY_PER_KM = 5.0
HIGH_UTILIZATION_THRESHOLD = 0.8
HIGH_UTILIZATION_PENALTY = 20
FRAGILE_FRIENDLY_VEHICLES = frozenset({"car", "van"})
FRAGILE_BONUS = 10
FRAGILE_MOTORCYCLE_PENALTY = 30
DEFAULT_SUCCESS_RATE = 100.0


def distance_score(distance_km: float) -> float:
    return max(0.0, 100 - distance_km * DISTANCE_PENALTY_PER_KM)


def rating_score(driver: CandidateDriver) -> float:
    return driver.rating / 5 * 100


def capacity_score(driver: CandidateDriver) -> float:
    # Negative once a driver is over their limit; that is not an error.
    return driver.available_capacity / driver.max_deliveries * 100


def vehicle_compatibility_score(vehicle: Vehicle, order: OrderShippingRequest) -> float:
    """Score how well a vehicle suits the order's weight and fragility.

    An order heavier than the vehicle's capacity scores 0. Otherwise the score
    starts at 100, loses 20 above 80% weight utilization, gains 10 for fragile
    items in a car or van and loses 30 for fragile items on a motorcycle. The
    bonus may lift the score above 100; only the floor at 0 is enforced.
    """
    if order.total_weight > vehicle.weight_capacity:
        return 0.0

    score = 100.0
    utilization = order.total_weight / vehicle.weight_capacity if vehicle.weight_capacity > 0 else 0.0
    if utilization > HIGH_UTILIZATION_THRESHOLD:
        score -= HIGH_UTILIZATION_PENALTY

    if order.has_fragile_items and vehicle.type in FRAGILE_FRIENDLY_VEHICLES:
        score += FRAGILE_BONUS
    if order.has_fragile_items and vehicle.type == "motorcycle":
        score -= FRAGILE_MOTORCYCLE_PENALTY

    return max(0.0, score)


def success_rate_score(driver: CandidateDriver) -> float:
    if driver.success_rate is None:
        return DEFAULT_SUCCESS_RATE
    return driver.success_rate


def validate_candidate(driver: CandidateDriver) -> None:
    if driver.max_deliveries <= 0:
        raise InvalidCandidate(driver.driver_id, "max_deliveries must be greater than zero")


def score_breakdown(
    driver: CandidateDriver,
    order: OrderShippingRequest,
    *,
    distance_km: float | None = None,
) -> dict[str, float]:
    """Unweighted sub-scores for a driver, keyed by factor name."""
    validate_candidate(driver)
    if distance_km is None:
        distance_km = haversine_km(driver.location, order.pickup)
    return {
        "distance": distance_score(distance_km),
        "rating": rating_score(driver),
        "capacity": capacity_score(driver),
        "vehicle": vehicle_compatibility_score(driver.vehicle, order),
        "success_rate": success_rate_score(driver),
    }


def weighted_total(breakdown: dict[str, float]) -> float:
    return (
        breakdown["distance"] * DISTANCE_WEIGHT
        + breakdown["rating"] * RATING_WEIGHT
        + breakdown["capacity"] * CAPACITY_WEIGHT
        + breakdown["vehicle"] * VEHICLE_WEIGHT
        + breakdown["success_rate"] * SUCCESS_RATE_WEIGHT
    )


def score_driver(
    driver: CandidateDriver,
    order: OrderShippingRequest,
    *,
    distance_km: float | None = None,
) -> int:
    """Rounded weighted score. Not clamped to 100: the fragile bonus can push it above."""
    return round_half_up(weighted_total(score_breakdown(driver, order, distance_km=distance_km)))


def rank_drivers(
    drivers: Sequence[CandidateDriver],
    order: OrderShippingRequest,
) -> list[ScoredResult[CandidateDriver]]:
    """Score every valid candidate and sort best first.

    Ties on score are broken by ascending distance to the pickup point, then by
    driver id. Invalid candidates are logged and left out.
    """
    scored: list[ScoredResult[CandidateDriver]] = []
    for driver in drivers:
        distance = haversine_km(driver.location, order.pickup)
        try:
            score = score_driver(driver, order, distance_km=distance)
        except InvalidCandidate as exc:
            logger.warning(f"Excluding driver from ranking for order {order.order_id}: {exc}")
            continue
        scored.append(ScoredResult(subject=driver, score=score, distance_km=distance))

    scored.sort(key=lambda result: (-result.score, result.distance_km, result.subject.driver_id))
    return scored
