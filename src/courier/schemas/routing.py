"""Route sequencing request/response schemas."""

from __future__ import annotations

from typing import Any, List, Optional

from pydantic import BaseModel, Field

from .common import LngLat


class StopModel(BaseModel):
    stop_id: str
    location: LngLat
    payload: Optional[Any] = None


class RouteSequenceRequest(BaseModel):
    start: LngLat = Field(..., description="Depot or driver position the route starts from.")
    stops: List[StopModel] = Field(default_factory=list)


class SequencedStopModel(BaseModel):
    sequence: int
    stop_id: str
    location: LngLat
    distance_from_prev_km: float
    payload: Optional[Any] = None


class RouteSequenceResponse(BaseModel):
    strategy: str
    total_distance_km: float
    estimated_minutes: int
    stops: List[SequencedStopModel]
