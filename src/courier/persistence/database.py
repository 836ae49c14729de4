"""Supabase-backed lookups for orders, candidate drivers and candidate hubs.

These functions are the host-side data collaborators handed to
``AssignmentCoordinator``. Rows are mapped into domain snapshots here so the
services never see database shapes.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any

from ..config import settings
from ..db.supabase import get_supabase_client
from ..errors import DependencyUnavailable, OrderNotFound
from ..models.domain import (
    CandidateDriver,
    CandidateHub,
    Coordinate,
    OrderItem,
    OrderShippingRequest,
    Vehicle,
)
from ..services.orders.status import validate_transition

logger = logging.getLogger(__name__)


def _require_client(dependency: str):
    supabase = get_supabase_client()
    if not supabase:
        raise DependencyUnavailable(
            dependency,
            "Supabase not configured. Set COURIER_SUPABASE_URL and COURIER_SUPABASE_KEY environment variables.",
        )
    return supabase


def _coordinate(value: Any) -> Coordinate:
    """Accept ``[lng, lat]``, a GeoJSON point or a ``{longitude, latitude}`` mapping."""
    if isinstance(value, dict):
        if "coordinates" in value:
            return Coordinate.from_pair(value["coordinates"])
        return Coordinate(longitude=float(value["longitude"]), latitude=float(value["latitude"]))
    return Coordinate.from_pair(value)


def row_to_order_request(row: dict[str, Any]) -> OrderShippingRequest:
    items = [
        OrderItem(
            weight=float(item.get("weight") or 0.0),
            quantity=int(item["quantity"]) if item.get("quantity") is not None else 1,
            is_fragile=bool(item.get("is_fragile", False)),
        )
        for item in (row.get("items") or [])
    ]
    delivery = row.get("delivery_coordinates")
    return OrderShippingRequest.from_items(
        order_id=str(row["id"]),
        pickup=_coordinate(row["pickup_coordinates"]),
        items=items,
        delivery=_coordinate(delivery) if delivery is not None else None,
        service_type=row.get("service_type") or "standard",
        priority=row.get("priority") or "normal",
    )


def row_to_driver(row: dict[str, Any]) -> CandidateDriver:
    active = row.get("active_deliveries") or 0
    if isinstance(active, list):
        active = len(active)

    total = int(row.get("total_deliveries") or 0)
    successful = int(row.get("successful_deliveries") or 0)
    success_rate = successful / total * 100 if total > 0 else None

    name_parts = [part for part in (row.get("first_name"), row.get("last_name")) if part]
    return CandidateDriver(
        driver_id=str(row["id"]),
        location=_coordinate(row["current_location"]),
        rating=float(row.get("rating") or 0.0),
        active_deliveries=int(active),
        max_deliveries=int(row["max_deliveries"]),
        vehicle=Vehicle(
            type=row["vehicle_type"],
            weight_capacity=float(row["vehicle_weight_capacity"]),
        ),
        success_rate=success_rate,
        name=" ".join(name_parts) or None,
    )


def row_to_hub(row: dict[str, Any]) -> CandidateHub:
    polygon = row.get("service_polygon")
    radius = row.get("service_radius_km")
    return CandidateHub(
        hub_id=str(row["id"]),
        name=row.get("name"),
        location=_coordinate(row["coordinates"]),
        max_orders=int(row["max_orders"]),
        current_load=int(row.get("current_load") or 0),
        service_radius_km=float(radius) if radius is not None else None,
        service_polygon=[_coordinate(vertex) for vertex in polygon] if polygon else None,
    )


def get_order_request(order_id: str) -> OrderShippingRequest | None:
    supabase = _require_client("order")
    try:
        response = supabase.table("orders").select("*").eq("id", order_id).limit(1).execute()
    except Exception as exc:
        logger.error(f"Failed to load order {order_id}: {exc}")
        raise DependencyUnavailable("order", str(exc)) from exc

    rows = response.data or []
    if not rows:
        return None
    return row_to_order_request(rows[0])


def find_available_drivers(pickup: Coordinate, radius_m: int) -> list[CandidateDriver]:
    """Available, approved drivers within ``radius_m`` meters of the pickup point."""
    supabase = _require_client("driver pool")
    try:
        response = supabase.rpc(
            "drivers_within_radius",
            {"lng": pickup.longitude, "lat": pickup.latitude, "radius_m": radius_m},
        ).execute()
    except Exception as exc:
        logger.error(f"Driver radius query failed: {exc}")
        raise DependencyUnavailable("driver pool", str(exc)) from exc

    drivers: list[CandidateDriver] = []
    for row in response.data or []:
        try:
            drivers.append(row_to_driver(row))
        except (KeyError, ValueError, TypeError) as e:
            logger.warning(f"Skipping invalid driver row: {e}")
    return drivers


def find_available_hubs(
    center: Coordinate,
    required_capacity: int = 1,
    limit: int | None = None,
) -> list[CandidateHub]:
    """Active hubs nearest to ``center`` with at least ``required_capacity`` spare slots."""
    supabase = _require_client("hub pool")
    try:
        response = supabase.rpc(
            "hubs_with_capacity",
            {
                "lng": center.longitude,
                "lat": center.latitude,
                "required_capacity": required_capacity,
                "max_results": limit or settings.hub_search_limit,
            },
        ).execute()
    except Exception as exc:
        logger.error(f"Hub capacity query failed: {exc}")
        raise DependencyUnavailable("hub pool", str(exc)) from exc

    hubs: list[CandidateHub] = []
    for row in response.data or []:
        try:
            hubs.append(row_to_hub(row))
        except (KeyError, ValueError, TypeError) as e:
            logger.warning(f"Skipping invalid hub row: {e}")
    return hubs


def get_order_status(order_id: str) -> str | None:
    supabase = _require_client("order")
    try:
        response = supabase.table("orders").select("id,status").eq("id", order_id).limit(1).execute()
    except Exception as exc:
        raise DependencyUnavailable("order", str(exc)) from exc
    rows = response.data or []
    return rows[0]["status"] if rows else None


def update_order_status(order_id: str, status: str, notes: str | None = None) -> dict[str, Any]:
    """Move an order to ``status`` if the transition table allows it and record the history entry."""
    current = get_order_status(order_id)
    if current is None:
        raise OrderNotFound(order_id)
    validate_transition(current, status)

    supabase = _require_client("order")
    timestamp = datetime.now(timezone.utc).isoformat()
    try:
        supabase.table("orders").update({"status": status, "updated_at": timestamp}).eq("id", order_id).execute()
        supabase.table("order_status_history").insert(
            {"order_id": order_id, "status": status, "notes": notes, "timestamp": timestamp}
        ).execute()
    except Exception as exc:
        logger.error(f"Failed to update status for order {order_id}: {exc}")
        raise DependencyUnavailable("order", str(exc)) from exc

    logger.info(f"Order {order_id} status changed from {current} to {status}")
    return {"order_id": order_id, "previous_status": current, "status": status, "updated_at": timestamp}
