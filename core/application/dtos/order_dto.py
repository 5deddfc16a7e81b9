"""Application DTOs for Order operations."""

from datetime import datetime
from typing import List, Literal, Optional
from uuid import UUID

from pydantic import BaseModel, Field

from core.domain.entities.order import LineItem, Order


class LineItemDTO(BaseModel):
    """DTO for order line item."""

    item_id: UUID = Field(..., description="Catalogue item identifier")
    quantity: int = Field(..., ge=0, description="Quantity ordered")
    price: int = Field(..., ge=0, description="Unit price in minor currency units")

    model_config = {"frozen": True}

    def to_domain(self) -> LineItem:
        return LineItem(item_id=self.item_id, quantity=self.quantity, price=self.price)


class CreateOrderRequest(BaseModel):
    """Request DTO for creating an order."""

    customer_id: UUID = Field(..., description="Customer placing the order")
    line_items: List[LineItemDTO] = Field(default_factory=list, description="Order line items")

    model_config = {"frozen": True}


class UpdateOrderStatusRequest(BaseModel):
    """Request DTO for moving an order to shipped or completed."""

    status: Literal["shipped", "completed"] = Field(..., description="Target status")

    model_config = {"frozen": True}


class OrderDTO(BaseModel):
    """Response DTO for order details."""

    order_id: int = Field(..., description="Order identifier")
    customer_id: UUID = Field(..., description="Customer identifier")
    line_items: List[LineItemDTO] = Field(default_factory=list, description="Order line items")
    created_at: datetime = Field(..., description="Creation time")
    shipped_at: Optional[datetime] = Field(None, description="Shipping time")
    completed_at: Optional[datetime] = Field(None, description="Completion time")
    status: Literal["created", "shipped", "completed"] = Field(..., description="Current order status")

    model_config = {"frozen": True}

    @classmethod
    def from_domain(cls, order: Order) -> "OrderDTO":
        return cls(
            order_id=order.order_id,
            customer_id=order.customer_id,
            line_items=[
                LineItemDTO(item_id=item.item_id, quantity=item.quantity, price=item.price)
                for item in order.line_items
            ],
            created_at=order.created_at,
            shipped_at=order.shipped_at,
            completed_at=order.completed_at,
            status=order.status,
        )


class OrderListDTO(BaseModel):
    """DTO for one page of listed orders."""

    items: List[OrderDTO] = Field(default_factory=list, description="Orders on this page")
    next: Optional[int] = Field(None, description="Cursor for the next page; absent when exhausted")

    model_config = {"frozen": True}
