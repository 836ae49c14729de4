"""Pickup and delivery time estimates."""

from __future__ import annotations

import math
from datetime import datetime, timedelta, timezone

from ..config import settings
from ..models.domain import Coordinate, DeliveryEstimate
from .geospatial import haversine_km

SERVICE_TYPE_MULTIPLIERS: dict[str, float] = {
    "same_day": 0.5,
    "express": 0.7,
    "next_day": 1.0,
    "standard": 1.5,
}

PRIORITY_MULTIPLIERS: dict[str, float] = {
    "urgent": 0.5,
    "high": 0.7,
    "normal": 1.0,
    "low": 1.3,
}


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def estimate_pickup_time_minutes(
    distance_km: float,
    *,
    average_speed_kmh: float | None = None,
    preparation_minutes: float | None = None,
) -> int:
    """Travel time at the average urban speed plus a fixed preparation overhead."""
    speed = average_speed_kmh if average_speed_kmh is not None else settings.average_speed_kmh
    overhead = preparation_minutes if preparation_minutes is not None else settings.preparation_minutes
    return round_half_up(distance_km / speed * 60 + overhead)


def estimate_delivery_window(
    pickup: Coordinate,
    delivery: Coordinate,
    service_type: str = "standard",
    priority: str = "normal",
    *,
    now: datetime | None = None,
    average_speed_kmh: float | None = None,
    preparation_minutes: float | None = None,
) -> DeliveryEstimate:
    """Scale the pickup-time formula by service type and priority.

    Unrecognised service types or priorities use a multiplier of 1.0.
    """
    distance = haversine_km(pickup, delivery)
    base_minutes = estimate_pickup_time_minutes(
        distance,
        average_speed_kmh=average_speed_kmh,
        preparation_minutes=preparation_minutes,
    )
    service_multiplier = SERVICE_TYPE_MULTIPLIERS.get(service_type, 1.0)
    priority_multiplier = PRIORITY_MULTIPLIERS.get(priority, 1.0)
    minutes = round_half_up(base_minutes * service_multiplier * priority_multiplier)

    now = now or datetime.now(timezone.utc)
    return DeliveryEstimate(
        distance_km=round(distance, 2),
        estimated_minutes=minutes,
        estimated_delivery=now + timedelta(minutes=minutes),
        service_type=service_type,
        priority=priority,
    )
