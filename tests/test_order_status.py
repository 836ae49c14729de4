import pytest

from src.courier.errors import InvalidStatusTransition
from src.courier.services.orders.status import ORDER_STATUSES, can_transition, validate_transition


@pytest.mark.parametrize(
    ("current", "requested"),
    [
        ("pending", "confirmed"),
        ("confirmed", "pickup_scheduled"),
        ("pickup_scheduled", "picked_up"),
        ("picked_up", "in_transit"),
        ("in_transit", "out_for_delivery"),
        ("out_for_delivery", "failed_delivery"),
        ("failed_delivery", "out_for_delivery"),
        ("delivered", "returned"),
    ],
)
def test_allowed_transitions(current, requested):
    assert can_transition(current, requested)
    validate_transition(current, requested)


@pytest.mark.parametrize(
    ("current", "requested"),
    [
        ("pending", "delivered"),
        ("cancelled", "pending"),
        ("returned", "in_transit"),
        ("unknown", "confirmed"),
    ],
)
def test_rejected_transitions(current, requested):
    assert not can_transition(current, requested)
    with pytest.raises(InvalidStatusTransition, match=f"Cannot change status from {current} to {requested}"):
        validate_transition(current, requested)


def test_terminal_statuses_have_no_exits():
    for status in ("returned", "cancelled", "refunded"):
        assert status in ORDER_STATUSES
        assert not any(can_transition(status, target) for target in ORDER_STATUSES)
