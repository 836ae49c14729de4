"""Hub selection request/response schemas."""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field

from .common import LngLat


class OptimalHubRequest(BaseModel):
    pickup: LngLat
    delivery: LngLat


class HubModel(BaseModel):
    hub_id: str
    name: Optional[str] = None
    location: LngLat
    max_orders: int = Field(..., ge=0)
    current_load: int = Field(..., ge=0)
    service_radius_km: Optional[float] = Field(default=None, ge=0)
    service_polygon: Optional[List[LngLat]] = None


class ScoredHubModel(BaseModel):
    hub: HubModel
    score: float
    distance_to_pickup_km: float
    distance_to_delivery_km: float
    average_distance_km: float
    utilization: float


class OptimalHubResponse(BaseModel):
    success: bool
    message: Optional[str] = None
    recommended: Optional[ScoredHubModel] = None
    alternatives: List[ScoredHubModel] = Field(default_factory=list)


class ServiceAreaRequest(BaseModel):
    hub: HubModel
    point: LngLat


class ServiceAreaResponse(BaseModel):
    hub_id: str
    in_service_area: bool
    distance_km: float
