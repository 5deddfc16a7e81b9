"""
Key-value backed Order Repository.

Each order is a JSON record under ``order:<id>``; the ``orders`` set holds
the key of every stored order and backs listing. Insert and delete change
the record and the set in one atomic group, so the set contains a key if
and only if its record exists.
"""
import logging
from typing import List

from pydantic import ValidationError

from core.data.mappers import OrderMapper
from core.domain.entities.order import Order
from core.domain.errors import (
    InvalidOrderTransitionError,
    OrderAlreadyExistsError,
    OrderConflictError,
    OrderEncodingError,
    OrderNotFoundError,
    StoreError,
)
from core.domain.repositories.order_repository import FindAllPage, FindResult, OrderRepository
from core.infrastructure.adapters.kv.store import (
    AddToSet,
    AtomicGroupAborted,
    Delete,
    KeyValueStore,
    KeyValueStoreError,
    RemoveFromSet,
    SetIfAbsent,
    SetIfPresent,
)

from .keys import ORDERS_INDEX, order_key


logger = logging.getLogger(__name__)

MATCH_ALL = "*"


class RedisOrderRepository(OrderRepository):
    """
    OrderRepository on top of a KeyValueStore.

    Holds no locks: every multi-step write is a single atomic group, and the
    store serializes groups touching the same key. Failures are raised
    immediately; nothing is retried.

    Usage:
        repository = RedisOrderRepository(store)
        await repository.insert(order)
        page = await repository.find_all(FindAllPage(size=50))
    """

    def __init__(self, store: KeyValueStore):
        """
        Initialize repository.

        Args:
            store: Shared key-value store, owned by the caller
        """
        self._store = store

    async def insert(self, order: Order) -> None:
        key = order_key(order.order_id)
        payload = self._encode("insert", key, order)

        try:
            await self._store.execute_atomically([
                SetIfAbsent(key, payload),
                AddToSet(ORDERS_INDEX, key),
            ])
        except AtomicGroupAborted:
            raise OrderAlreadyExistsError(key) from None
        except KeyValueStoreError as e:
            logger.error(f"Failed to insert order {key}: {e}", exc_info=True)
            raise StoreError("insert", key, str(e)) from e

        logger.info(f"Order inserted: {key}")

    async def find_by_id(self, order_id: int) -> Order:
        key = order_key(order_id)

        try:
            payload = await self._store.get(key)
        except KeyValueStoreError as e:
            logger.error(f"Failed to get order {key}: {e}", exc_info=True)
            raise StoreError("get order", key, str(e)) from e

        if payload is None:
            logger.debug(f"Order not found: {key}")
            raise OrderNotFoundError(key)

        return self._decode("find_by_id", key, payload)

    async def update(self, order: Order) -> None:
        """
        Overwrite the stored record, keeping every timestamp it already has.

        The write is a compare-and-set against the record read here, so a
        concurrent writer makes one of the two fail instead of silently
        replacing a timestamp.
        """
        key = order_key(order.order_id)
        payload = self._encode("update", key, order)

        try:
            current_payload = await self._store.get(key)
        except KeyValueStoreError as e:
            logger.error(f"Failed to get order {key}: {e}", exc_info=True)
            raise StoreError("update order", key, str(e)) from e

        if current_payload is None:
            raise OrderNotFoundError(key)

        current = self._decode("update", key, current_payload)
        self._check_timestamps_kept(current, order)

        try:
            await self._store.execute_atomically([
                SetIfPresent(key, payload, expected=current_payload),
            ])
        except AtomicGroupAborted:
            logger.warning(f"Order changed while updating: {key}")
            raise OrderConflictError(key) from None
        except KeyValueStoreError as e:
            logger.error(f"Failed to update order {key}: {e}", exc_info=True)
            raise StoreError("update order", key, str(e)) from e

        logger.info(f"Order updated: {key}")

    async def delete_by_id(self, order_id: int) -> None:
        key = order_key(order_id)

        try:
            await self._store.execute_atomically([
                Delete(key),
                RemoveFromSet(ORDERS_INDEX, key),
            ])
        except AtomicGroupAborted:
            raise OrderNotFoundError(key) from None
        except KeyValueStoreError as e:
            logger.error(f"Failed to delete order {key}: {e}", exc_info=True)
            raise StoreError("delete order", key, str(e)) from e

        logger.info(f"Order deleted: {key}")

    async def find_all(self, page: FindAllPage) -> FindResult:
        """
        Return the orders found by one SSCAN step over the index.

        An empty scan page returns cursor 0 even if the scan itself reported
        a continuation cursor. Otherwise the scan's cursor is returned as is;
        0 means the index has been fully traversed.
        """
        if page.size < 1:
            raise ValueError(f"Page size must be positive: {page.size}")

        try:
            cursor, keys = await self._store.scan_set(
                ORDERS_INDEX, page.offset, MATCH_ALL, page.size
            )
        except KeyValueStoreError as e:
            logger.error(f"Failed to get order ids: {e}", exc_info=True)
            raise StoreError("scan", ORDERS_INDEX, str(e)) from e

        if not keys:
            return FindResult(orders=[], cursor=0)

        try:
            payloads = await self._store.multi_get(keys)
        except KeyValueStoreError as e:
            logger.error(f"Failed to get orders: {e}", exc_info=True)
            raise StoreError("get orders", ORDERS_INDEX, str(e)) from e

        orders: List[Order] = []
        for key, payload in zip(keys, payloads):
            if payload is None:
                # deleted between the scan and the MGET
                logger.debug(f"Skipping vanished order: {key}")
                continue
            orders.append(self._decode("find_all", key, payload))

        return FindResult(orders=orders, cursor=cursor)

    @staticmethod
    def _check_timestamps_kept(stored: Order, order: Order) -> None:
        for name in ("created_at", "shipped_at", "completed_at"):
            before = getattr(stored, name)
            if before is not None and getattr(order, name) != before:
                raise InvalidOrderTransitionError(
                    f"Order {order.order_id}: {name} is already set to {before.isoformat()}"
                )

    @staticmethod
    def _encode(operation: str, key: str, order: Order) -> str:
        try:
            return OrderMapper.to_json(order)
        except ValidationError as e:
            raise OrderEncodingError(operation, key, str(e)) from e

    @staticmethod
    def _decode(operation: str, key: str, payload: str) -> Order:
        try:
            return OrderMapper.from_json(payload)
        except ValidationError as e:
            logger.error(f"Failed to decode order json {key}: {e}")
            raise OrderEncodingError(operation, key, str(e)) from e
