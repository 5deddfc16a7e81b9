"""Order persistence adapters."""

from .keys import ORDERS_INDEX, order_key
from .redis_order_repository import RedisOrderRepository

__all__ = ["ORDERS_INDEX", "RedisOrderRepository", "order_key"]
