"""
Persisted order record.

This is the JSON payload stored under ``order:<id>``. Field names are
explicit, unknown fields are ignored on read, timestamps are ISO-8601 with
a UTC offset, and unset optional timestamps are left out of the payload.
"""
from typing import List, Optional
from uuid import UUID

from pydantic import AwareDatetime, BaseModel, ConfigDict, Field, model_validator

from core.domain.value_objects import MAX_ORDER_ID


class LineItemRecord(BaseModel):
    """Stored line item."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    item_id: UUID
    quantity: int = Field(..., ge=0)
    price: int = Field(..., ge=0)


class OrderRecord(BaseModel):
    """Stored order."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    order_id: int = Field(..., ge=0, le=MAX_ORDER_ID)
    customer_id: UUID
    line_items: List[LineItemRecord] = Field(default_factory=list)
    created_at: AwareDatetime
    shipped_at: Optional[AwareDatetime] = None
    completed_at: Optional[AwareDatetime] = None

    @model_validator(mode="after")
    def _completed_after_shipped(self) -> "OrderRecord":
        if self.completed_at is not None and self.shipped_at is None:
            raise ValueError("completed_at is set but shipped_at is not")
        return self
