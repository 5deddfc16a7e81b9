"""
Order aggregate root.

CRITICAL: This file must contain ZERO imports from:
- redis
- pydantic
- fastapi
"""
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import List, Optional
from uuid import UUID

from ..errors import InvalidOrderTransitionError


@dataclass(frozen=True)
class LineItem:
    """Individual line item within an order."""
    item_id: UUID
    quantity: int
    price: int


@dataclass
class Order:
    """
    Order aggregate root.

    created_at is set once at creation. shipped_at and completed_at are
    each set at most once, and completed_at only after shipped_at.
    """
    order_id: int
    customer_id: UUID
    created_at: datetime
    line_items: List[LineItem] = field(default_factory=list)
    shipped_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None

    @classmethod
    def create(
        cls,
        order_id: int,
        customer_id: UUID,
        line_items: List[LineItem],
        now: Optional[datetime] = None,
    ) -> "Order":
        """Factory for a brand-new order stamped with its creation time."""
        return cls(
            order_id=order_id,
            customer_id=customer_id,
            line_items=list(line_items),
            created_at=now or datetime.now(timezone.utc),
        )

    def mark_shipped(self, now: Optional[datetime] = None) -> None:
        """Business rule: an order ships once."""
        if self.shipped_at is not None:
            raise InvalidOrderTransitionError(
                f"Order {self.order_id} was already shipped at {self.shipped_at.isoformat()}"
            )
        self.shipped_at = now or datetime.now(timezone.utc)

    def mark_completed(self, now: Optional[datetime] = None) -> None:
        """Business rule: an order completes once, and only after shipping."""
        if self.shipped_at is None:
            raise InvalidOrderTransitionError(
                f"Order {self.order_id} cannot be completed before it is shipped"
            )
        if self.completed_at is not None:
            raise InvalidOrderTransitionError(
                f"Order {self.order_id} was already completed at {self.completed_at.isoformat()}"
            )
        self.completed_at = now or datetime.now(timezone.utc)

    @property
    def status(self) -> str:
        if self.completed_at is not None:
            return "completed"
        if self.shipped_at is not None:
            return "shipped"
        return "created"
