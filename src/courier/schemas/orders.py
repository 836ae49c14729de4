"""Order status schemas."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, field_validator

from ..services.orders.status import ORDER_STATUSES


class StatusUpdateRequest(BaseModel):
    status: str
    notes: Optional[str] = None

    @field_validator("status")
    @classmethod
    def validate_status(cls, value: str) -> str:
        if value not in ORDER_STATUSES:
            raise ValueError(f"Unknown order status '{value}'")
        return value


class StatusUpdateResponse(BaseModel):
    order_id: str
    previous_status: str
    status: str
    updated_at: str
