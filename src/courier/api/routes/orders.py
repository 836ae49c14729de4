"""Order status endpoints."""

from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException, status

from ...errors import DependencyUnavailable, InvalidStatusTransition, OrderNotFound
from ...persistence.database import update_order_status
from ...schemas.orders import StatusUpdateRequest, StatusUpdateResponse

router = APIRouter(prefix="/orders", tags=["orders"])


@router.post("/{order_id}/status", response_model=StatusUpdateResponse, status_code=status.HTTP_200_OK)
def change_status(order_id: str, payload: StatusUpdateRequest) -> StatusUpdateResponse:
    try:
        updated = update_order_status(order_id, payload.status, notes=payload.notes)
    except OrderNotFound as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    except InvalidStatusTransition as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except DependencyUnavailable as exc:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(exc)) from exc
    except Exception as exc:
        logging.exception(f"Error updating order status: {exc}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to update order status: {str(exc)}",
        ) from exc
    return StatusUpdateResponse(**updated)
