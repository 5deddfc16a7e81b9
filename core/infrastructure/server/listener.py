"""
HTTP listener.

Wraps a uvicorn server so ServiceLifecycle can start it as a task, ask it
to drain, and force it down when the grace period runs out.
"""
import contextlib
import logging
from typing import Iterator, Protocol

import uvicorn


logger = logging.getLogger(__name__)


class ListenerError(Exception):
    """Raised when the listener fails to start or exits with an error."""
    pass


class Listener(Protocol):
    """What ServiceLifecycle needs from a network listener."""

    async def serve(self) -> None:
        """Accept and serve connections until stopped."""
        ...

    def request_stop(self) -> None:
        """Stop accepting connections and drain in-flight ones."""
        ...

    def force_stop(self) -> None:
        """Abandon draining and exit as soon as possible."""
        ...


class _ManagedServer(uvicorn.Server):
    """uvicorn server that leaves signal handling to the process entry point."""

    @contextlib.contextmanager
    def capture_signals(self) -> Iterator[None]:
        yield


class UvicornListener:
    """Listener serving an ASGI app with uvicorn."""

    def __init__(self, app, host: str = "0.0.0.0", port: int = 3000, log_level: str = "info"):
        """
        Initialize listener.

        Args:
            app: ASGI application
            host: Interface to bind
            port: Port to bind
            log_level: uvicorn log level
        """
        self.host = host
        self.port = port
        config = uvicorn.Config(app, host=host, port=port, log_level=log_level.lower())
        self._server = _ManagedServer(config)
        self._stop_requested = False

    @property
    def started(self) -> bool:
        return self._server.started

    async def serve(self) -> None:
        try:
            await self._server.serve()
        except SystemExit as e:
            # uvicorn exits the process when the socket cannot be bound
            raise ListenerError(f"Failed to start server on {self.host}:{self.port}") from e

        if not self._server.started and not self._stop_requested:
            raise ListenerError(f"Server on {self.host}:{self.port} exited before startup completed")

    def request_stop(self) -> None:
        logger.info(f"Stopping listener on {self.host}:{self.port}")
        self._stop_requested = True
        self._server.should_exit = True

    def force_stop(self) -> None:
        logger.warning(f"Forcing listener on {self.host}:{self.port} to exit")
        self._stop_requested = True
        self._server.should_exit = True
        self._server.force_exit = True
