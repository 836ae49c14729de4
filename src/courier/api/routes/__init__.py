"""Route group exports."""

from . import assignments, estimates, health, hubs, orders, routes

__all__ = ["assignments", "estimates", "health", "hubs", "orders", "routes"]
