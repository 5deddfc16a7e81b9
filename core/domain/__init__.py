"""Domain layer - pure domain models and interfaces."""

from .entities import LineItem, Order
from .repositories import FindAllPage, FindResult, OrderRepository
from .value_objects import generate_order_id, validate_order_id

__all__ = [
    "FindAllPage",
    "FindResult",
    "LineItem",
    "Order",
    "OrderRepository",
    "generate_order_id",
    "validate_order_id",
]
