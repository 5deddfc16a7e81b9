"""Domain value objects."""

from .order_id import MAX_ORDER_ID, generate_order_id, validate_order_id

__all__ = [
    "MAX_ORDER_ID",
    "generate_order_id",
    "validate_order_id",
]
