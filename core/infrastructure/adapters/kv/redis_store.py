"""
Redis key-value store adapter.

Implements the KeyValueStore port on top of redis.asyncio. Atomic groups
use optimistic locking: the guarded keys are WATCHed, their preconditions
checked, and the whole group queued inside MULTI/EXEC. If another client
touches a watched key before EXEC, the transaction is rejected by Redis
and reported as a store error; it is not retried here.
"""
import logging
from contextlib import contextmanager
from typing import Iterator, List, Optional, Sequence, Tuple

import redis.asyncio as aioredis
from redis.exceptions import RedisError, WatchError

from .store import (
    AddToSet,
    AtomicGroupAborted,
    Delete,
    KeyValueStoreError,
    RemoveFromSet,
    SetIfAbsent,
    SetIfPresent,
    StoreOp,
    guarded_keys,
)


logger = logging.getLogger(__name__)


@contextmanager
def _redis_errors(command: str) -> Iterator[None]:
    try:
        yield
    except WatchError as e:
        raise KeyValueStoreError(f"{command}: transaction aborted, watched key modified") from e
    except RedisError as e:
        raise KeyValueStoreError(f"{command}: {e}") from e


class RedisKeyValueStore:
    """
    KeyValueStore backed by a single Redis client.

    The client is created once and shared by every caller; redis-py's
    connection pool handles concurrent use.

    Usage:
        store = RedisKeyValueStore.from_url("redis://localhost:6379/0")
        await store.ping()
        ...
        await store.close()
    """

    def __init__(self, client: aioredis.Redis):
        """
        Initialize Redis store.

        Args:
            client: redis.asyncio client created with decode_responses=True
        """
        self._client = client

    @classmethod
    def from_url(
        cls,
        redis_url: str = "redis://localhost:6379/0",
        socket_timeout: Optional[float] = None,
    ) -> "RedisKeyValueStore":
        """Create a store with its own client from a Redis URL."""
        client = aioredis.from_url(
            redis_url,
            encoding="utf-8",
            decode_responses=True,
            socket_timeout=socket_timeout,
        )
        return cls(client)

    async def ping(self) -> None:
        with _redis_errors("PING"):
            await self._client.ping()

    async def get(self, key: str) -> Optional[str]:
        with _redis_errors("GET"):
            return await self._client.get(key)

    async def set_if_absent(self, key: str, value: str) -> bool:
        with _redis_errors("SET NX"):
            return bool(await self._client.set(key, value, nx=True))

    async def set_if_present(self, key: str, value: str) -> bool:
        with _redis_errors("SET XX"):
            return bool(await self._client.set(key, value, xx=True))

    async def delete(self, key: str) -> bool:
        with _redis_errors("DEL"):
            return await self._client.delete(key) > 0

    async def add_to_set(self, name: str, member: str) -> None:
        with _redis_errors("SADD"):
            await self._client.sadd(name, member)

    async def remove_from_set(self, name: str, member: str) -> None:
        with _redis_errors("SREM"):
            await self._client.srem(name, member)

    async def scan_set(
        self, name: str, cursor: int, match: str, count: int
    ) -> Tuple[int, List[str]]:
        with _redis_errors("SSCAN"):
            next_cursor, members = await self._client.sscan(
                name, cursor=cursor, match=match, count=count
            )
        return int(next_cursor), list(members)

    async def multi_get(self, keys: Sequence[str]) -> List[Optional[str]]:
        if not keys:
            return []
        with _redis_errors("MGET"):
            return list(await self._client.mget(list(keys)))

    async def execute_atomically(self, ops: Sequence[StoreOp]) -> None:
        """
        Apply ops as one MULTI/EXEC transaction.

        Raises:
            AtomicGroupAborted: A guard failed; nothing was queued
            KeyValueStoreError: Transport failure or EXEC rejected
        """
        watched = guarded_keys(ops)
        with _redis_errors("MULTI/EXEC"):
            async with self._client.pipeline(transaction=True) as pipe:
                if watched:
                    await pipe.watch(*watched)
                    for index, op in enumerate(ops):
                        if isinstance(op, SetIfAbsent) and await pipe.exists(op.key):
                            raise AtomicGroupAborted(index, op)
                        if isinstance(op, SetIfPresent) and op.expected is not None:
                            if await pipe.get(op.key) != op.expected:
                                raise AtomicGroupAborted(index, op)
                        elif isinstance(op, (SetIfPresent, Delete)) and not await pipe.exists(op.key):
                            raise AtomicGroupAborted(index, op)

                pipe.multi()
                for op in ops:
                    self._queue(pipe, op)
                await pipe.execute()

    @staticmethod
    def _queue(pipe, op: StoreOp) -> None:
        if isinstance(op, SetIfAbsent):
            pipe.set(op.key, op.value, nx=True)
        elif isinstance(op, SetIfPresent):
            pipe.set(op.key, op.value, xx=True)
        elif isinstance(op, Delete):
            pipe.delete(op.key)
        elif isinstance(op, AddToSet):
            pipe.sadd(op.name, op.member)
        elif isinstance(op, RemoveFromSet):
            pipe.srem(op.name, op.member)
        else:
            raise TypeError(f"Unsupported store operation: {op!r}")

    async def close(self) -> None:
        """Close Redis connection."""
        await self._client.aclose()
        logger.info("Disconnected from Redis")
