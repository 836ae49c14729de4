"""Driver assignment request/response schemas."""

from __future__ import annotations

from typing import Dict, List, Optional

from pydantic import BaseModel, Field

from .common import LngLat


class BestDriverRequest(BaseModel):
    order_id: str = Field(..., min_length=1)


class BatchAssignRequest(BaseModel):
    order_ids: List[str] = Field(..., description="Orders to assign, processed in the given order.")
    persist: bool = Field(default=False, description="Whether to persist the run summary to files.")


class VehicleModel(BaseModel):
    type: str
    weight_capacity: float


class DriverModel(BaseModel):
    driver_id: str
    name: Optional[str] = None
    location: LngLat
    rating: float
    active_deliveries: int
    max_deliveries: int
    vehicle: VehicleModel
    success_rate: Optional[float] = None


class ScoredDriverModel(BaseModel):
    driver: DriverModel
    score: float
    distance_km: float


class BestDriverResponse(BaseModel):
    order_id: str
    success: bool
    message: Optional[str] = None
    driver: Optional[DriverModel] = None
    score: Optional[float] = None
    distance_km: Optional[float] = None
    estimated_pickup_minutes: Optional[int] = None
    breakdown: Dict[str, float] = Field(default_factory=dict)
    alternatives: List[ScoredDriverModel] = Field(default_factory=list)


class BatchItemModel(BaseModel):
    order_id: str
    assigned: bool
    driver_id: Optional[str] = None
    driver_name: Optional[str] = None
    score: Optional[float] = None
    distance_km: Optional[float] = None
    reason: Optional[str] = None


class BatchSummaryModel(BaseModel):
    total: int
    assigned: int
    unassigned: int


class BatchAssignResponse(BaseModel):
    summary: BatchSummaryModel
    results: List[BatchItemModel]
    run_directory: Optional[str] = None
