from datetime import datetime, timedelta, timezone

import pytest

from src.courier.models.domain import Coordinate
from src.courier.services.estimation import estimate_delivery_window, estimate_pickup_time_minutes
from src.courier.services.geospatial import haversine_km

NOW = datetime(2026, 1, 15, 9, 30, tzinfo=timezone.utc)
SAME_POINT = Coordinate(39.2, 21.5)


@pytest.mark.parametrize(
    ("distance_km", "expected"),
    [(15, 40), (0, 10), (30, 70), (45, 100)],
)
def test_pickup_time(distance_km, expected):
    assert estimate_pickup_time_minutes(distance_km, average_speed_kmh=30, preparation_minutes=10) == expected


@pytest.mark.parametrize(
    ("service_type", "priority", "expected"),
    [
        ("standard", "normal", 15),
        ("next_day", "normal", 10),
        ("next_day", "low", 13),
        ("standard", "urgent", 8),
        ("low", "low", 13),
        ("overnight", "whenever", 10),
    ],
)
def test_delivery_window_multipliers(service_type, priority, expected):
    estimate = estimate_delivery_window(
        SAME_POINT,
        SAME_POINT,
        service_type,
        priority,
        now=NOW,
        average_speed_kmh=30,
        preparation_minutes=10,
    )

    assert estimate.estimated_minutes == expected
    assert estimate.service_type == service_type
    assert estimate.priority == priority


def test_half_minutes_round_up():
    # 10 base minutes * 0.5 * 1.3 = 6.5
    estimate = estimate_delivery_window(
        SAME_POINT, SAME_POINT, "same_day", "low", now=NOW, average_speed_kmh=30, preparation_minutes=10
    )

    assert estimate.estimated_minutes == 7


def test_delivery_timestamp_is_now_plus_minutes():
    pickup = Coordinate(39.20, 21.50)
    delivery = Coordinate(39.30, 21.60)

    estimate = estimate_delivery_window(
        pickup, delivery, "express", "high", now=NOW, average_speed_kmh=30, preparation_minutes=10
    )

    assert estimate.distance_km == round(haversine_km(pickup, delivery), 2)
    assert estimate.estimated_delivery == NOW + timedelta(minutes=estimate.estimated_minutes)


def test_default_clock_is_timezone_aware():
    estimate = estimate_delivery_window(SAME_POINT, SAME_POINT)

    assert estimate.estimated_delivery.tzinfo is not None
