"""Application DTOs."""

from .order_dto import (
    CreateOrderRequest,
    LineItemDTO,
    OrderDTO,
    OrderListDTO,
    UpdateOrderStatusRequest,
)

__all__ = [
    "CreateOrderRequest",
    "LineItemDTO",
    "OrderDTO",
    "OrderListDTO",
    "UpdateOrderStatusRequest",
]
