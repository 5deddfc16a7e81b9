"""Shared fixtures for order storage tests."""
from datetime import datetime, timezone
from typing import Callable
from uuid import UUID

import pytest

from core.domain.entities.order import LineItem, Order
from core.infrastructure.adapters.kv.memory_store import InMemoryKeyValueStore
from core.infrastructure.adapters.persistence.redis_order_repository import RedisOrderRepository


CUSTOMER_ID = UUID("9a7b2c1e-4d3f-4a5b-8c6d-7e8f9a0b1c2d")
ITEM_ID = UUID("1f2e3d4c-5b6a-4789-9abc-def012345678")
CREATED_AT = datetime(2025, 1, 13, 10, 30, tzinfo=timezone.utc)


@pytest.fixture
def store() -> InMemoryKeyValueStore:
    """Fresh in-memory key-value store."""
    return InMemoryKeyValueStore()


@pytest.fixture
def repository(store) -> RedisOrderRepository:
    """Order repository over the in-memory store."""
    return RedisOrderRepository(store)


@pytest.fixture
def make_order() -> Callable[..., Order]:
    """Factory for orders with sensible defaults."""

    def _make(order_id: int, **overrides) -> Order:
        fields = {
            "order_id": order_id,
            "customer_id": CUSTOMER_ID,
            "line_items": [LineItem(item_id=ITEM_ID, quantity=2, price=1250)],
            "created_at": CREATED_AT,
        }
        fields.update(overrides)
        return Order(**fields)

    return _make
