"""Key-value store port and adapters."""

from .memory_store import InMemoryKeyValueStore
from .redis_store import RedisKeyValueStore
from .store import (
    AddToSet,
    AtomicGroupAborted,
    Delete,
    KeyValueStore,
    KeyValueStoreError,
    RemoveFromSet,
    SetIfAbsent,
    SetIfPresent,
    StoreOp,
)

__all__ = [
    "AddToSet",
    "AtomicGroupAborted",
    "Delete",
    "InMemoryKeyValueStore",
    "KeyValueStore",
    "KeyValueStoreError",
    "RedisKeyValueStore",
    "RemoveFromSet",
    "SetIfAbsent",
    "SetIfPresent",
    "StoreOp",
]
