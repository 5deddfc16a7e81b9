"""
In-memory key-value store.

Implementation of the KeyValueStore port for tests and local runs without
Redis. Set scans mimic SSCAN: the cursor is an opaque position, 0 is
returned once the set is exhausted, and mutations between calls may cause
an element to be seen twice or skipped.
"""
from fnmatch import fnmatchcase
from typing import Dict, List, Optional, Sequence, Tuple
import logging

from .store import (
    AddToSet,
    AtomicGroupAborted,
    Delete,
    KeyValueStoreError,
    RemoveFromSet,
    SetIfAbsent,
    SetIfPresent,
    StoreOp,
)


logger = logging.getLogger(__name__)


class InMemoryKeyValueStore:
    """
    Dictionary-backed KeyValueStore.

    Every method runs without awaiting in between its checks and writes, so
    each call (including a whole atomic group) is atomic on the event loop.
    """

    def __init__(self):
        """Initialize empty storage."""
        self._values: Dict[str, str] = {}
        # dict keys keep insertion order, which gives scans a stable order
        self._sets: Dict[str, Dict[str, None]] = {}
        self._closed = False
        logger.info("InMemoryKeyValueStore initialized")

    @property
    def closed(self) -> bool:
        return self._closed

    def _ensure_open(self) -> None:
        if self._closed:
            raise KeyValueStoreError("store is closed")

    async def ping(self) -> None:
        self._ensure_open()

    async def get(self, key: str) -> Optional[str]:
        self._ensure_open()
        return self._values.get(key)

    async def set_if_absent(self, key: str, value: str) -> bool:
        self._ensure_open()
        if key in self._values:
            return False
        self._values[key] = value
        return True

    async def set_if_present(self, key: str, value: str) -> bool:
        self._ensure_open()
        if key not in self._values:
            return False
        self._values[key] = value
        return True

    async def delete(self, key: str) -> bool:
        self._ensure_open()
        return self._values.pop(key, None) is not None

    async def add_to_set(self, name: str, member: str) -> None:
        self._ensure_open()
        self._sets.setdefault(name, {})[member] = None

    async def remove_from_set(self, name: str, member: str) -> None:
        self._ensure_open()
        members = self._sets.get(name)
        if members is not None:
            members.pop(member, None)
            if not members:
                del self._sets[name]

    async def scan_set(
        self, name: str, cursor: int, match: str, count: int
    ) -> Tuple[int, List[str]]:
        self._ensure_open()
        members = list(self._sets.get(name, {}))
        window = members[cursor:cursor + max(count, 1)]
        next_cursor = cursor + len(window)
        if next_cursor >= len(members):
            next_cursor = 0
        return next_cursor, [m for m in window if fnmatchcase(m, match)]

    async def multi_get(self, keys: Sequence[str]) -> List[Optional[str]]:
        self._ensure_open()
        return [self._values.get(key) for key in keys]

    async def execute_atomically(self, ops: Sequence[StoreOp]) -> None:
        self._ensure_open()
        for index, op in enumerate(ops):
            if isinstance(op, SetIfAbsent) and op.key in self._values:
                raise AtomicGroupAborted(index, op)
            if isinstance(op, (SetIfPresent, Delete)) and op.key not in self._values:
                raise AtomicGroupAborted(index, op)
            if (
                isinstance(op, SetIfPresent)
                and op.expected is not None
                and self._values[op.key] != op.expected
            ):
                raise AtomicGroupAborted(index, op)

        for op in ops:
            if isinstance(op, (SetIfAbsent, SetIfPresent)):
                self._values[op.key] = op.value
            elif isinstance(op, Delete):
                del self._values[op.key]
            elif isinstance(op, AddToSet):
                self._sets.setdefault(op.name, {})[op.member] = None
            elif isinstance(op, RemoveFromSet):
                await self.remove_from_set(op.name, op.member)
            else:
                raise TypeError(f"Unsupported store operation: {op!r}")

    async def close(self) -> None:
        self._closed = True
        logger.info("InMemoryKeyValueStore closed")

    def members(self, name: str) -> List[str]:
        """Return set members (for demo/testing)."""
        return list(self._sets.get(name, {}))

