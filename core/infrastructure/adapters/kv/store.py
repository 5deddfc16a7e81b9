"""
Key-value store port.

The repository talks to the store only through this interface. Multi-step
writes are described as a declarative list of operations and submitted to
``execute_atomically``: either every operation is applied, or none is.
"""
from dataclasses import dataclass
from typing import List, Optional, Protocol, Sequence, Tuple, Union


@dataclass(frozen=True)
class SetIfAbsent:
    """Create key with value. Guard: key must not exist."""
    key: str
    value: str


@dataclass(frozen=True)
class SetIfPresent:
    """
    Overwrite key with value. Guard: key must exist.

    With ``expected``, the stored value must also still equal it (compare
    and set against the value read earlier).
    """
    key: str
    value: str
    expected: Optional[str] = None


@dataclass(frozen=True)
class Delete:
    """Delete key. Guard: key must exist."""
    key: str


@dataclass(frozen=True)
class AddToSet:
    """Add member to set. Unguarded."""
    name: str
    member: str


@dataclass(frozen=True)
class RemoveFromSet:
    """Remove member from set. Unguarded."""
    name: str
    member: str


StoreOp = Union[SetIfAbsent, SetIfPresent, Delete, AddToSet, RemoveFromSet]


class KeyValueStoreError(Exception):
    """Transport or transaction failure reported by a store adapter."""
    pass


class AtomicGroupAborted(Exception):
    """
    Raised by execute_atomically when a guarded step's precondition fails.

    Nothing in the group has been applied when this is raised.
    """

    def __init__(self, index: int, op: StoreOp):
        self.index = index
        self.op = op
        super().__init__(f"atomic group aborted at step {index}: {op!r}")


def guarded_keys(ops: Sequence[StoreOp]) -> List[str]:
    """Keys whose existence decides whether the group may be applied."""
    return [op.key for op in ops if isinstance(op, (SetIfAbsent, SetIfPresent, Delete))]


class KeyValueStore(Protocol):
    """Capabilities the order repository and lifecycle controller need from a store."""

    async def ping(self) -> None: ...

    async def get(self, key: str) -> Optional[str]: ...

    async def set_if_absent(self, key: str, value: str) -> bool: ...

    async def set_if_present(self, key: str, value: str) -> bool: ...

    async def delete(self, key: str) -> bool: ...

    async def add_to_set(self, name: str, member: str) -> None: ...

    async def remove_from_set(self, name: str, member: str) -> None: ...

    async def scan_set(
        self, name: str, cursor: int, match: str, count: int
    ) -> Tuple[int, List[str]]: ...

    async def multi_get(self, keys: Sequence[str]) -> List[Optional[str]]: ...

    async def execute_atomically(self, ops: Sequence[StoreOp]) -> None: ...

    async def close(self) -> None: ...
