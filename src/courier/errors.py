"""Exception types shared by the dispatch services and the API layer."""

from __future__ import annotations


class CourierError(Exception):
    """Base class for dispatch errors."""


class InvalidCandidate(CourierError, ValueError):
    """A driver or hub snapshot cannot be scored (e.g. zero capacity)."""

    def __init__(self, candidate_id: str, reason: str) -> None:
        super().__init__(f"Candidate '{candidate_id}' is invalid: {reason}")
        self.candidate_id = candidate_id
        self.reason = reason


class DependencyUnavailable(CourierError):
    """An external data lookup (orders, drivers, hubs) failed or is not configured."""

    def __init__(self, dependency: str, detail: str) -> None:
        super().__init__(f"{dependency} lookup unavailable: {detail}")
        self.dependency = dependency
        self.detail = detail


class OrderNotFound(CourierError, LookupError):
    def __init__(self, order_id: str) -> None:
        super().__init__("Order not found")
        self.order_id = order_id


class InvalidStatusTransition(CourierError, ValueError):
    def __init__(self, current: str, requested: str) -> None:
        super().__init__(f"Cannot change status from {current} to {requested}")
        self.current = current
        self.requested = requested
