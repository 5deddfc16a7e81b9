"""API routers."""

from . import health, orders

__all__ = ["health", "orders"]
