"""Store key layout for orders."""
from core.domain.value_objects import validate_order_id

# Set holding the record key of every stored order; used for listing.
ORDERS_INDEX = "orders"

ORDER_KEY_PREFIX = "order:"


def order_key(order_id: int) -> str:
    """Return the record key for an order id, e.g. ``order:42``."""
    return f"{ORDER_KEY_PREFIX}{validate_order_id(order_id)}"
