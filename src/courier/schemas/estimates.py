"""Time estimate request/response schemas."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

from .common import LngLat


class PickupEstimateRequest(BaseModel):
    distance_km: float = Field(..., ge=0)


class PickupEstimateResponse(BaseModel):
    distance_km: float
    estimated_minutes: int


class DeliveryEstimateRequest(BaseModel):
    pickup: LngLat
    delivery: LngLat
    service_type: str = Field(default="standard", description="same_day, express, next_day or standard.")
    priority: str = Field(default="normal", description="urgent, high, normal or low.")


class DeliveryEstimateResponse(BaseModel):
    distance_km: float
    estimated_minutes: int
    estimated_delivery: datetime
    service_type: str
    priority: str
