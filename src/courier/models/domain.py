"""Domain models for dispatch candidates, orders, stops and scoring results."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Generic, Iterable, Literal, Optional, TypeVar

VehicleType = Literal["motorcycle", "car", "van", "truck"]

T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class Coordinate:
    """A (longitude, latitude) pair in degrees."""

    longitude: float
    latitude: float

    @classmethod
    def from_pair(cls, pair: Iterable[float]) -> "Coordinate":
        longitude, latitude = pair
        return cls(longitude=float(longitude), latitude=float(latitude))

    def as_pair(self) -> tuple[float, float]:
        return (self.longitude, self.latitude)


@dataclass(slots=True)
class Vehicle:
    type: VehicleType
    weight_capacity: float


@dataclass(slots=True)
class CandidateDriver:
    """Snapshot of a driver eligible for scoring against an order."""

    driver_id: str
    location: Coordinate
    rating: float
    active_deliveries: int
    max_deliveries: int
    vehicle: Vehicle
    success_rate: Optional[float] = None
    name: Optional[str] = None

    @property
    def available_capacity(self) -> int:
        return self.max_deliveries - self.active_deliveries


@dataclass(slots=True)
class OrderItem:
    weight: float
    quantity: int = 1
    is_fragile: bool = False


@dataclass(slots=True)
class OrderShippingRequest:
    """The projection of an order that the assignment logic needs."""

    order_id: str
    pickup: Coordinate
    total_weight: float
    has_fragile_items: bool = False
    delivery: Optional[Coordinate] = None
    service_type: str = "standard"
    priority: str = "normal"

    @classmethod
    def from_items(
        cls,
        *,
        order_id: str,
        pickup: Coordinate,
        items: Iterable[OrderItem],
        delivery: Optional[Coordinate] = None,
        service_type: str = "standard",
        priority: str = "normal",
    ) -> "OrderShippingRequest":
        items = list(items)
        return cls(
            order_id=order_id,
            pickup=pickup,
            total_weight=sum(item.weight * item.quantity for item in items),
            has_fragile_items=any(item.is_fragile for item in items),
            delivery=delivery,
            service_type=service_type,
            priority=priority,
        )


@dataclass(slots=True)
class DeliveryStop:
    stop_id: str
    location: Coordinate
    payload: Any = None


@dataclass(slots=True)
class CandidateHub:
    """Snapshot of a hub with its order capacity and optional service area."""

    hub_id: str
    location: Coordinate
    max_orders: int
    current_load: int
    name: Optional[str] = None
    service_radius_km: Optional[float] = None
    service_polygon: Optional[list[Coordinate]] = None

    @property
    def available_capacity(self) -> int:
        return self.max_orders - self.current_load

    @property
    def utilization(self) -> float:
        if self.max_orders <= 0:
            return 0.0
        return self.current_load / self.max_orders * 100


@dataclass(slots=True)
class ScoredResult(Generic[T]):
    subject: T
    score: float
    distance_km: float


@dataclass(slots=True)
class DriverMatch:
    """Outcome of a best-driver search for one order."""

    order_id: str
    success: bool
    message: Optional[str] = None
    best: Optional[ScoredResult[CandidateDriver]] = None
    estimated_pickup_minutes: Optional[int] = None
    alternatives: list[ScoredResult[CandidateDriver]] = field(default_factory=list)
    breakdown: dict[str, float] = field(default_factory=dict)


@dataclass(slots=True)
class HubScore:
    hub: CandidateHub
    score: float
    distance_to_pickup_km: float
    distance_to_delivery_km: float
    average_distance_km: float


@dataclass(slots=True)
class HubRecommendation:
    best: HubScore
    alternatives: list[HubScore] = field(default_factory=list)


@dataclass(slots=True)
class RouteSequence:
    ordered_stops: list[DeliveryStop]
    total_distance_km: float
    estimated_minutes: int
    leg_distances_km: list[float] = field(default_factory=list)
    strategy: str = "nearest_neighbor"


@dataclass(slots=True)
class DeliveryEstimate:
    distance_km: float
    estimated_minutes: int
    estimated_delivery: datetime
    service_type: str
    priority: str


@dataclass(slots=True)
class BatchItemResult:
    order_id: str
    assigned: bool
    driver_id: Optional[str] = None
    driver_name: Optional[str] = None
    score: Optional[float] = None
    distance_km: Optional[float] = None
    reason: Optional[str] = None


@dataclass(slots=True)
class BatchAssignmentResult:
    items: list[BatchItemResult]

    @property
    def total(self) -> int:
        return len(self.items)

    @property
    def assigned(self) -> int:
        return sum(1 for item in self.items if item.assigned)

    @property
    def unassigned(self) -> int:
        return self.total - self.assigned

    @property
    def successful(self) -> list[BatchItemResult]:
        return [item for item in self.items if item.assigned]

    @property
    def failed(self) -> list[BatchItemResult]:
        return [item for item in self.items if not item.assigned]
