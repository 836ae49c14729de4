"""Driver assignment endpoints."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from ...errors import DependencyUnavailable, OrderNotFound
from ...models.domain import CandidateDriver, ScoredResult
from ...persistence.filesystem import FileStorage
from ...schemas.assignment import (
    BatchAssignRequest,
    BatchAssignResponse,
    BatchItemModel,
    BatchSummaryModel,
    BestDriverRequest,
    BestDriverResponse,
    DriverModel,
    ScoredDriverModel,
    VehicleModel,
)
from ...services.assignment.coordinator import AssignmentCoordinator
from ...services.outputs.assignment_formatter import batch_result_to_csv, batch_result_to_json
from ..dependencies import get_coordinator

router = APIRouter(prefix="/assignments", tags=["assignments"])


def _driver_model(driver: CandidateDriver) -> DriverModel:
    return DriverModel(
        driver_id=driver.driver_id,
        name=driver.name,
        location=driver.location.as_pair(),
        rating=driver.rating,
        active_deliveries=driver.active_deliveries,
        max_deliveries=driver.max_deliveries,
        vehicle=VehicleModel(type=driver.vehicle.type, weight_capacity=driver.vehicle.weight_capacity),
        success_rate=driver.success_rate,
    )


def _scored_driver(result: ScoredResult[CandidateDriver]) -> ScoredDriverModel:
    return ScoredDriverModel(
        driver=_driver_model(result.subject),
        score=result.score,
        distance_km=round(result.distance_km, 2),
    )


@router.post("/best-driver", response_model=BestDriverResponse, status_code=status.HTTP_200_OK)
def best_driver(
    payload: BestDriverRequest,
    coordinator: AssignmentCoordinator = Depends(get_coordinator),
) -> BestDriverResponse:
    try:
        match = coordinator.find_best_driver(payload.order_id)
    except OrderNotFound as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    except DependencyUnavailable as exc:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(exc)) from exc
    except Exception as exc:
        logging.exception(f"Error finding best driver: {exc}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to find best driver: {str(exc)}",
        ) from exc

    if not match.success or match.best is None:
        return BestDriverResponse(order_id=match.order_id, success=False, message=match.message)

    return BestDriverResponse(
        order_id=match.order_id,
        success=True,
        driver=_driver_model(match.best.subject),
        score=match.best.score,
        distance_km=round(match.best.distance_km, 2),
        estimated_pickup_minutes=match.estimated_pickup_minutes,
        breakdown=match.breakdown,
        alternatives=[_scored_driver(alternative) for alternative in match.alternatives],
    )


@router.post("/batch", response_model=BatchAssignResponse, status_code=status.HTTP_200_OK)
def batch_assign(
    payload: BatchAssignRequest,
    coordinator: AssignmentCoordinator = Depends(get_coordinator),
) -> BatchAssignResponse:
    result = coordinator.batch_assign(payload.order_ids)

    run_directory = None
    if payload.persist:
        try:
            storage = FileStorage()
            run_dir = storage.make_run_directory(prefix="batch")
            storage.write_json(run_dir / "summary.json", batch_result_to_json(result))
            storage.write_csv(run_dir / "assignments.csv", batch_result_to_csv(result))
            run_directory = str(run_dir)
        except OSError as exc:
            # Assignments are still valid; only the file copy failed.
            logging.warning(f"Failed to persist batch assignment outputs: {exc}")

    return BatchAssignResponse(
        summary=BatchSummaryModel(total=result.total, assigned=result.assigned, unassigned=result.unassigned),
        results=[
            BatchItemModel(
                order_id=item.order_id,
                assigned=item.assigned,
                driver_id=item.driver_id,
                driver_name=item.driver_name,
                score=item.score,
                distance_km=round(item.distance_km, 2) if item.distance_km is not None else None,
                reason=item.reason,
            )
            for item in result.items
        ],
        run_directory=run_directory,
    )
