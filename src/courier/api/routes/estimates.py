"""Pickup and delivery time estimate endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, status

from ...schemas.common import to_coordinate
from ...schemas.estimates import (
    DeliveryEstimateRequest,
    DeliveryEstimateResponse,
    PickupEstimateRequest,
    PickupEstimateResponse,
)
from ...services.assignment.coordinator import AssignmentCoordinator
from ..dependencies import get_coordinator

router = APIRouter(prefix="/estimates", tags=["estimates"])


@router.post("/pickup", response_model=PickupEstimateResponse, status_code=status.HTTP_200_OK)
def pickup_estimate(
    payload: PickupEstimateRequest,
    coordinator: AssignmentCoordinator = Depends(get_coordinator),
) -> PickupEstimateResponse:
    return PickupEstimateResponse(
        distance_km=payload.distance_km,
        estimated_minutes=coordinator.estimate_pickup(payload.distance_km),
    )


@router.post("/delivery", response_model=DeliveryEstimateResponse, status_code=status.HTTP_200_OK)
def delivery_estimate(
    payload: DeliveryEstimateRequest,
    coordinator: AssignmentCoordinator = Depends(get_coordinator),
) -> DeliveryEstimateResponse:
    estimate = coordinator.estimate_delivery(
        to_coordinate(payload.pickup),
        to_coordinate(payload.delivery),
        payload.service_type,
        payload.priority,
    )
    return DeliveryEstimateResponse(
        distance_km=estimate.distance_km,
        estimated_minutes=estimate.estimated_minutes,
        estimated_delivery=estimate.estimated_delivery,
        service_type=estimate.service_type,
        priority=estimate.priority,
    )
