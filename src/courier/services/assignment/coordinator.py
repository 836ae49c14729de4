"""Assignment orchestration over externally supplied order, driver and hub snapshots."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Callable, Optional, Sequence

from ...config import Settings, settings as default_settings
from ...errors import CourierError, DependencyUnavailable, OrderNotFound
from ...models.domain import (
    BatchAssignmentResult,
    BatchItemResult,
    CandidateDriver,
    CandidateHub,
    Coordinate,
    DeliveryEstimate,
    DeliveryStop,
    DriverMatch,
    HubRecommendation,
    OrderShippingRequest,
    RouteSequence,
)
from ..estimation import estimate_delivery_window, estimate_pickup_time_minutes
from ..geospatial import midpoint
from ..hubs.selector import select_best_hub
from ..routing.sequencer import RouteSequencer
from .scoring import rank_drivers, score_breakdown

logger = logging.getLogger(__name__)

OrderLookup = Callable[[str], Optional[OrderShippingRequest]]
DriverPoolLookup = Callable[[Coordinate, int], Sequence[CandidateDriver]]
HubPoolLookup = Callable[[Coordinate, int], Sequence[CandidateHub]]

NO_DRIVERS_MESSAGE = "No available drivers found in the area"


class AssignmentCoordinator:
    """Fetches snapshots through injected lookups and delegates to the scorers.

    The lookups are plain callables so hosts can back them with a database and
    tests can pass in-memory fakes. Any exception raised by a lookup surfaces
    as ``DependencyUnavailable``.
    """

    def __init__(
        self,
        *,
        order_lookup: OrderLookup,
        driver_pool_lookup: DriverPoolLookup,
        hub_pool_lookup: HubPoolLookup,
        settings: Settings | None = None,
        sequencer: RouteSequencer | None = None,
    ) -> None:
        self.order_lookup = order_lookup
        self.driver_pool_lookup = driver_pool_lookup
        self.hub_pool_lookup = hub_pool_lookup
        self.settings = settings or default_settings
        self.sequencer = sequencer or RouteSequencer(
            maps_api_key=self.settings.maps_api_key,
            nearest_neighbor_ceiling=self.settings.route_nearest_neighbor_ceiling,
            average_speed_kmh=self.settings.average_speed_kmh,
            preparation_minutes=self.settings.preparation_minutes,
        )

    def _fetch(self, dependency: str, lookup: Callable[..., Any], *args: Any) -> Any:
        try:
            return lookup(*args)
        except DependencyUnavailable:
            raise
        except Exception as exc:
            logger.error(f"{dependency} lookup failed: {exc}")
            raise DependencyUnavailable(dependency, str(exc)) from exc

    def estimate_pickup(self, distance_km: float) -> int:
        return estimate_pickup_time_minutes(
            distance_km,
            average_speed_kmh=self.settings.average_speed_kmh,
            preparation_minutes=self.settings.preparation_minutes,
        )

    def find_best_driver(self, order_id: str) -> DriverMatch:
        order = self._fetch("order", self.order_lookup, order_id)
        if order is None:
            raise OrderNotFound(order_id)

        pool = self._fetch(
            "driver pool",
            self.driver_pool_lookup,
            order.pickup,
            self.settings.driver_search_radius_m,
        )
        ranked = rank_drivers(pool or [], order)
        if not ranked:
            logger.info(f"No candidate drivers for order {order_id}")
            return DriverMatch(order_id=order_id, success=False, message=NO_DRIVERS_MESSAGE)

        best = ranked[0]
        return DriverMatch(
            order_id=order_id,
            success=True,
            best=best,
            estimated_pickup_minutes=self.estimate_pickup(best.distance_km),
            alternatives=ranked[1 : 1 + self.settings.max_alternatives],
            breakdown=score_breakdown(best.subject, order, distance_km=best.distance_km),
        )

    def batch_assign(self, order_ids: Sequence[str]) -> BatchAssignmentResult:
        """Run ``find_best_driver`` for each order in turn.

        Every order id yields exactly one item, in input order; a failure is
        recorded on that item and the batch carries on.
        """
        items: list[BatchItemResult] = []
        for order_id in order_ids:
            try:
                match = self.find_best_driver(order_id)
            except CourierError as exc:
                logger.warning(f"Batch assignment failed for order {order_id}: {exc}")
                items.append(BatchItemResult(order_id=order_id, assigned=False, reason=str(exc)))
                continue
            except Exception as exc:
                logger.exception(f"Unexpected error assigning order {order_id}: {exc}")
                items.append(BatchItemResult(order_id=order_id, assigned=False, reason=str(exc)))
                continue

            if match.success and match.best is not None:
                driver = match.best.subject
                items.append(
                    BatchItemResult(
                        order_id=order_id,
                        assigned=True,
                        driver_id=driver.driver_id,
                        driver_name=driver.name,
                        score=match.best.score,
                        distance_km=match.best.distance_km,
                    )
                )
            else:
                items.append(BatchItemResult(order_id=order_id, assigned=False, reason=match.message))

        result = BatchAssignmentResult(items=items)
        logger.info(
            f"Batch assignment complete: {result.assigned} assigned, "
            f"{result.unassigned} unassigned of {result.total}"
        )
        return result

    def optimal_hub(self, pickup: Coordinate, delivery: Coordinate) -> HubRecommendation | None:
        center = midpoint(pickup, delivery)
        hubs = self._fetch(
            "hub pool",
            self.hub_pool_lookup,
            center,
            self.settings.hub_required_capacity,
        )
        recommendation = select_best_hub(
            pickup,
            delivery,
            hubs or [],
            max_alternatives=self.settings.max_alternatives,
        )
        if recommendation is None:
            logger.info("No available hubs found near the pickup/delivery midpoint")
        return recommendation

    def plan_route(self, stops: Sequence[DeliveryStop], start: Coordinate) -> RouteSequence:
        return self.sequencer.sequence(stops, start)

    def estimate_delivery(
        self,
        pickup: Coordinate,
        delivery: Coordinate,
        service_type: str = "standard",
        priority: str = "normal",
        *,
        now: datetime | None = None,
    ) -> DeliveryEstimate:
        return estimate_delivery_window(
            pickup,
            delivery,
            service_type,
            priority,
            now=now,
            average_speed_kmh=self.settings.average_speed_kmh,
            preparation_minutes=self.settings.preparation_minutes,
        )
