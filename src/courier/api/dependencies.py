"""FastAPI dependency providers."""

from __future__ import annotations

from ..config import settings
from ..persistence.database import find_available_drivers, find_available_hubs, get_order_request
from ..services.assignment.coordinator import AssignmentCoordinator


def get_coordinator() -> AssignmentCoordinator:
    """Coordinator wired to the Supabase lookups. Tests override this provider."""
    return AssignmentCoordinator(
        order_lookup=get_order_request,
        driver_pool_lookup=find_available_drivers,
        hub_pool_lookup=find_available_hubs,
        settings=settings,
    )
