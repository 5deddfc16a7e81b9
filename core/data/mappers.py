"""Static mappers for domain entities ↔ stored records."""

from core.domain.entities.order import LineItem, Order

from .models.order_record import LineItemRecord, OrderRecord


class LineItemMapper:
    """Static mapper for LineItem ↔ LineItemRecord transformation."""

    @staticmethod
    def to_domain(record: LineItemRecord) -> LineItem:
        return LineItem(
            item_id=record.item_id,
            quantity=record.quantity,
            price=record.price,
        )

    @staticmethod
    def to_persistence(entity: LineItem) -> LineItemRecord:
        return LineItemRecord(
            item_id=entity.item_id,
            quantity=entity.quantity,
            price=entity.price,
        )


class OrderMapper:
    """Static mapper for Order ↔ OrderRecord transformation with nested items."""

    @staticmethod
    def to_domain(record: OrderRecord) -> Order:
        """Convert stored record to domain aggregate (with nested items).

        Args:
            record: OrderRecord instance

        Returns:
            Order domain aggregate
        """
        return Order(
            order_id=record.order_id,
            customer_id=record.customer_id,
            line_items=[LineItemMapper.to_domain(item) for item in record.line_items],
            created_at=record.created_at,
            shipped_at=record.shipped_at,
            completed_at=record.completed_at,
        )

    @staticmethod
    def to_persistence(entity: Order) -> OrderRecord:
        """Convert domain aggregate to stored record.

        Raises:
            ValidationError: If the entity does not fit the record shape
                (e.g. naive timestamps or an out-of-range id)
        """
        return OrderRecord(
            order_id=entity.order_id,
            customer_id=entity.customer_id,
            line_items=[LineItemMapper.to_persistence(item) for item in entity.line_items],
            created_at=entity.created_at,
            shipped_at=entity.shipped_at,
            completed_at=entity.completed_at,
        )

    @staticmethod
    def to_json(entity: Order) -> str:
        """Encode an order as its stored JSON payload."""
        return OrderMapper.to_persistence(entity).model_dump_json(exclude_none=True)

    @staticmethod
    def from_json(payload: str) -> Order:
        """Decode a stored JSON payload.

        Raises:
            ValidationError: If the payload is not a valid order record
        """
        return OrderMapper.to_domain(OrderRecord.model_validate_json(payload))
