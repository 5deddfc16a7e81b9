"""Server process lifecycle."""

from .lifecycle import (
    DEFAULT_SHUTDOWN_GRACE_SECONDS,
    LifecycleState,
    ServiceLifecycle,
    ShutdownTimeoutError,
)
from .listener import Listener, ListenerError, UvicornListener

__all__ = [
    "DEFAULT_SHUTDOWN_GRACE_SECONDS",
    "LifecycleState",
    "Listener",
    "ListenerError",
    "ServiceLifecycle",
    "ShutdownTimeoutError",
    "UvicornListener",
]
