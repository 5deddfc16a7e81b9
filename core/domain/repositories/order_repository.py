"""Repository interfaces for Order aggregate."""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import List

from ..entities.order import Order


@dataclass(frozen=True)
class FindAllPage:
    """
    Listing request.

    offset is an opaque scan cursor (0 starts a new listing); size is the
    number of index entries to scan per call.
    """
    size: int
    offset: int = 0


@dataclass
class FindResult:
    """One page of orders plus the cursor to resume from (0 when exhausted)."""
    orders: List[Order] = field(default_factory=list)
    cursor: int = 0


class OrderRepository(ABC):
    """Abstract repository for Order aggregate persistence."""

    @abstractmethod
    async def insert(self, order: Order) -> None:
        """Persist a new order and add it to the listing index.

        Raises:
            OrderAlreadyExistsError: If a record already exists for the id
            OrderEncodingError: If the order cannot be serialized (including
                completed_at set without shipped_at)
            StoreError: On store transport/transaction failure
            ValueError: If order_id is outside 0..2**64-1
        """
        pass

    @abstractmethod
    async def find_by_id(self, order_id: int) -> Order:
        """Retrieve order by unique identifier.

        Raises:
            OrderNotFoundError: If no record exists
            OrderEncodingError: If the stored payload is corrupt
            StoreError: On store failure
            ValueError: If order_id is outside 0..2**64-1
        """
        pass

    @abstractmethod
    async def update(self, order: Order) -> None:
        """Overwrite an existing order record. Never creates.

        Timestamps already set on the stored record are never replaced.

        Raises:
            OrderNotFoundError: If no record exists
            InvalidOrderTransitionError: If a stored timestamp would change
            OrderConflictError: If the record changed since it was read
            OrderEncodingError: If the order cannot be serialized
            StoreError: On store failure
            ValueError: If order_id is outside 0..2**64-1
        """
        pass

    @abstractmethod
    async def delete_by_id(self, order_id: int) -> None:
        """Delete an order record and its index membership.

        Raises:
            OrderNotFoundError: If no record exists
            StoreError: On store failure
            ValueError: If order_id is outside 0..2**64-1
        """
        pass

    @abstractmethod
    async def find_all(self, page: FindAllPage) -> FindResult:
        """List orders one scan page at a time.

        Raises:
            StoreError: On store failure
            ValueError: If page.size is less than 1
        """
        pass
