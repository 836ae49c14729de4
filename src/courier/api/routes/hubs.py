"""Hub selection endpoints."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from ...errors import DependencyUnavailable
from ...models.domain import CandidateHub, HubScore
from ...schemas.common import to_coordinate
from ...schemas.hubs import (
    HubModel,
    OptimalHubRequest,
    OptimalHubResponse,
    ScoredHubModel,
    ServiceAreaRequest,
    ServiceAreaResponse,
)
from ...services.assignment.coordinator import AssignmentCoordinator
from ...services.geospatial import haversine_km
from ...services.hubs.selector import is_in_service_area
from ..dependencies import get_coordinator

router = APIRouter(prefix="/hubs", tags=["hubs"])


def _hub_from_model(model: HubModel) -> CandidateHub:
    return CandidateHub(
        hub_id=model.hub_id,
        name=model.name,
        location=to_coordinate(model.location),
        max_orders=model.max_orders,
        current_load=model.current_load,
        service_radius_km=model.service_radius_km,
        service_polygon=[to_coordinate(vertex) for vertex in model.service_polygon]
        if model.service_polygon
        else None,
    )


def _hub_model(hub: CandidateHub) -> HubModel:
    return HubModel(
        hub_id=hub.hub_id,
        name=hub.name,
        location=hub.location.as_pair(),
        max_orders=hub.max_orders,
        current_load=hub.current_load,
        service_radius_km=hub.service_radius_km,
        service_polygon=[vertex.as_pair() for vertex in hub.service_polygon] if hub.service_polygon else None,
    )


def _scored_hub(item: HubScore) -> ScoredHubModel:
    return ScoredHubModel(
        hub=_hub_model(item.hub),
        score=round(item.score, 2),
        distance_to_pickup_km=round(item.distance_to_pickup_km, 2),
        distance_to_delivery_km=round(item.distance_to_delivery_km, 2),
        average_distance_km=round(item.average_distance_km, 2),
        utilization=round(item.hub.utilization, 2),
    )


@router.post("/optimal", response_model=OptimalHubResponse, status_code=status.HTTP_200_OK)
def optimal_hub(
    payload: OptimalHubRequest,
    coordinator: AssignmentCoordinator = Depends(get_coordinator),
) -> OptimalHubResponse:
    try:
        recommendation = coordinator.optimal_hub(to_coordinate(payload.pickup), to_coordinate(payload.delivery))
    except DependencyUnavailable as exc:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(exc)) from exc
    except Exception as exc:
        logging.exception(f"Error selecting optimal hub: {exc}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to select hub: {str(exc)}",
        ) from exc

    if recommendation is None:
        return OptimalHubResponse(success=False, message="No available hubs found")
    return OptimalHubResponse(
        success=True,
        recommended=_scored_hub(recommendation.best),
        alternatives=[_scored_hub(item) for item in recommendation.alternatives],
    )


@router.post("/service-area", response_model=ServiceAreaResponse, status_code=status.HTTP_200_OK)
def service_area(payload: ServiceAreaRequest) -> ServiceAreaResponse:
    hub = _hub_from_model(payload.hub)
    point = to_coordinate(payload.point)
    return ServiceAreaResponse(
        hub_id=hub.hub_id,
        in_service_area=is_in_service_area(hub, point),
        distance_km=round(haversine_km(hub.location, point), 2),
    )
