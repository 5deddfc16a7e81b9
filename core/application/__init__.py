"""Application layer - services and DTOs."""

from .dtos import (
    CreateOrderRequest,
    LineItemDTO,
    OrderDTO,
    OrderListDTO,
    UpdateOrderStatusRequest,
)
from .services import OrderApplicationService

__all__ = [
    # DTOs
    "CreateOrderRequest",
    "LineItemDTO",
    "OrderDTO",
    "OrderListDTO",
    "UpdateOrderStatusRequest",
    # Services
    "OrderApplicationService",
]
