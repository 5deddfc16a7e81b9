"""Tests for Order status transitions and id helpers."""
from datetime import datetime, timedelta, timezone
from uuid import uuid4

import pytest

from core.domain.entities.order import LineItem, Order
from core.domain.errors import InvalidOrderTransitionError
from core.domain.value_objects import MAX_ORDER_ID, generate_order_id, validate_order_id


NOW = datetime(2025, 1, 13, 10, 30, tzinfo=timezone.utc)


@pytest.fixture
def order():
    return Order.create(
        order_id=1,
        customer_id=uuid4(),
        line_items=[LineItem(item_id=uuid4(), quantity=1, price=999)],
        now=NOW,
    )


def test_create_sets_created_at_only(order):
    assert order.created_at == NOW
    assert order.shipped_at is None
    assert order.completed_at is None
    assert order.status == "created"


def test_create_defaults_to_utc_now():
    order = Order.create(order_id=2, customer_id=uuid4(), line_items=[])

    assert order.created_at.tzinfo is not None


def test_ship_then_complete(order):
    order.mark_shipped(NOW + timedelta(days=1))
    order.mark_completed(NOW + timedelta(days=3))

    assert order.shipped_at == NOW + timedelta(days=1)
    assert order.completed_at == NOW + timedelta(days=3)
    assert order.status == "completed"


def test_complete_before_ship_is_rejected(order):
    with pytest.raises(InvalidOrderTransitionError):
        order.mark_completed(NOW)

    assert order.completed_at is None


def test_ship_twice_is_rejected_and_keeps_first_timestamp(order):
    order.mark_shipped(NOW)

    with pytest.raises(InvalidOrderTransitionError):
        order.mark_shipped(NOW + timedelta(hours=1))

    assert order.shipped_at == NOW


def test_complete_twice_is_rejected(order):
    order.mark_shipped(NOW)
    order.mark_completed(NOW + timedelta(hours=1))

    with pytest.raises(InvalidOrderTransitionError):
        order.mark_completed(NOW + timedelta(hours=2))

    assert order.completed_at == NOW + timedelta(hours=1)


def test_transition_error_is_a_value_error():
    assert issubclass(InvalidOrderTransitionError, ValueError)


def test_generate_order_id_fits_unsigned_64_bits():
    for _ in range(100):
        assert 0 <= generate_order_id() <= MAX_ORDER_ID


@pytest.mark.parametrize("value", [-1, MAX_ORDER_ID + 1, "7", True, 1.5])
def test_validate_order_id_rejects_invalid(value):
    with pytest.raises(ValueError):
        validate_order_id(value)
