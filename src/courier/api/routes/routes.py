"""Route sequencing endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, status

from ...models.domain import DeliveryStop
from ...schemas.common import to_coordinate
from ...schemas.routing import RouteSequenceRequest, RouteSequenceResponse, SequencedStopModel
from ...services.assignment.coordinator import AssignmentCoordinator
from ..dependencies import get_coordinator

router = APIRouter(prefix="/routes", tags=["routes"])


@router.post("/sequence", response_model=RouteSequenceResponse, status_code=status.HTTP_200_OK)
def sequence(
    payload: RouteSequenceRequest,
    coordinator: AssignmentCoordinator = Depends(get_coordinator),
) -> RouteSequenceResponse:
    stops = [
        DeliveryStop(stop_id=stop.stop_id, location=to_coordinate(stop.location), payload=stop.payload)
        for stop in payload.stops
    ]
    route = coordinator.plan_route(stops, to_coordinate(payload.start))
    return RouteSequenceResponse(
        strategy=route.strategy,
        total_distance_km=round(route.total_distance_km, 2),
        estimated_minutes=route.estimated_minutes,
        stops=[
            SequencedStopModel(
                sequence=index,
                stop_id=stop.stop_id,
                location=stop.location.as_pair(),
                distance_from_prev_km=round(leg, 2),
                payload=stop.payload,
            )
            for index, (stop, leg) in enumerate(zip(route.ordered_stops, route.leg_distances_km), start=1)
        ],
    )
