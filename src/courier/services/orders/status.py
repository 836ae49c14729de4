"""Allowed order status transitions."""

from __future__ import annotations

from ...errors import InvalidStatusTransition

VALID_TRANSITIONS: dict[str, tuple[str, ...]] = {
    "pending": ("confirmed", "cancelled"),
    "confirmed": ("pickup_scheduled", "cancelled"),
    "pickup_scheduled": ("picked_up", "cancelled"),
    "picked_up": ("in_transit", "returned"),
    "in_transit": ("out_for_delivery", "returned"),
    "out_for_delivery": ("delivered", "failed_delivery"),
    "failed_delivery": ("out_for_delivery", "returned"),
    # Only in case of issues after handover
    "delivered": ("returned",),
    "returned": (),
    "cancelled": (),
    "refunded": (),
}

ORDER_STATUSES: tuple[str, ...] = tuple(VALID_TRANSITIONS)


def can_transition(current: str, requested: str) -> bool:
    return requested in VALID_TRANSITIONS.get(current, ())


def validate_transition(current: str, requested: str) -> None:
    if not can_transition(current, requested):
        raise InvalidStatusTransition(current, requested)
