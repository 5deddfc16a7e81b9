"""
Order storage error taxonomy.

Every error raised by the repository or the lifecycle controller derives
from OrderStorageError so callers can map them in one place (see
api/main.py for the HTTP mapping).
"""
from typing import Optional


class OrderStorageError(Exception):
    """Base class for all order storage errors."""
    pass


class OrderNotFoundError(OrderStorageError):
    """Raised when no record exists for an order key."""

    def __init__(self, key: str):
        self.key = key
        super().__init__(f"order does not exist: {key}")


class OrderAlreadyExistsError(OrderStorageError):
    """Raised when insert collides with an existing record."""

    def __init__(self, key: str):
        self.key = key
        super().__init__(f"order already exists: {key}")


class OrderConflictError(OrderStorageError):
    """Raised when a stored order changed between reading it and writing it back."""

    def __init__(self, key: str):
        self.key = key
        super().__init__(f"order was modified concurrently: {key}")


class OrderEncodingError(OrderStorageError):
    """Raised when an order cannot be serialized or a stored payload cannot be decoded."""

    def __init__(self, operation: str, key: str, reason: Optional[str] = None):
        self.operation = operation
        self.key = key
        message = f"{operation}: failed to encode/decode order {key}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class StoreError(OrderStorageError):
    """
    Transport or transaction failure reported by the key-value store.

    The original store exception is available as ``__cause__``.
    """

    def __init__(self, operation: str, key: str, reason: str):
        self.operation = operation
        self.key = key
        super().__init__(f"{operation} {key}: {reason}")


class ConnectivityError(OrderStorageError):
    """Raised when the startup probe cannot reach the key-value store."""
    pass


class InvalidOrderTransitionError(ValueError):
    """Raised when a shipped/completed transition breaks the order lifecycle rules."""
    pass
