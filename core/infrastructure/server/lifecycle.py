"""
Service Lifecycle Controller.

Owns process-wide startup and shutdown:

    INITIALIZING -> PROBING -> SERVING -> SHUTTING_DOWN -> STOPPED
    PROBING -> STOPPED (store unreachable)

The listener runs in its own task and reports its outcome through a
single-resolution future. The controller waits for whichever comes first,
that outcome or the shutdown signal. The store connection is closed last
on every exit path.
"""
import asyncio
import contextlib
from enum import Enum
from typing import Optional

from core.domain.errors import ConnectivityError
from core.infrastructure.adapters.kv.store import KeyValueStore
from core.infrastructure.logging import get_logger

from .listener import Listener, ListenerError


logger = get_logger(__name__)

DEFAULT_SHUTDOWN_GRACE_SECONDS = 10.0


class LifecycleState(str, Enum):
    INITIALIZING = "initializing"
    PROBING = "probing"
    SERVING = "serving"
    SHUTTING_DOWN = "shutting_down"
    STOPPED = "stopped"


class ShutdownTimeoutError(Exception):
    """Raised when in-flight requests did not drain within the grace period."""

    def __init__(self, grace_seconds: float):
        self.grace_seconds = grace_seconds
        super().__init__(f"listener did not stop within {grace_seconds}s; forced shutdown")


class ServiceLifecycle:
    """
    Start/stop controller for the listener and the shared store connection.

    Usage:
        lifecycle = ServiceLifecycle(store, listener)
        shutdown = asyncio.Event()
        loop.add_signal_handler(signal.SIGINT, shutdown.set)
        await lifecycle.start(shutdown)
    """

    def __init__(
        self,
        store: KeyValueStore,
        listener: Listener,
        shutdown_grace_seconds: float = DEFAULT_SHUTDOWN_GRACE_SECONDS,
    ):
        """
        Initialize lifecycle controller.

        Args:
            store: Store connection; closed by this controller when it stops
            listener: Network listener to run
            shutdown_grace_seconds: How long in-flight requests may drain
        """
        self._store = store
        self._listener = listener
        self._grace = shutdown_grace_seconds
        self._state = LifecycleState.INITIALIZING
        self._shutdown = asyncio.Event()
        self._stopped = asyncio.Event()
        self._started = False
        self._store_released = False

    @property
    def state(self) -> LifecycleState:
        return self._state

    async def start(self, shutdown: Optional[asyncio.Event] = None) -> None:
        """
        Probe the store, serve, and block until the service has stopped.

        Args:
            shutdown: Event set by the caller (e.g. a signal handler) to
                request a graceful shutdown

        Raises:
            ConnectivityError: The store did not answer the probe
            ListenerError: The listener failed
            ShutdownTimeoutError: Draining exceeded the grace period
        """
        if self._started:
            raise RuntimeError("ServiceLifecycle can only be started once")
        self._started = True

        if shutdown is not None:
            if self._shutdown.is_set():
                shutdown.set()
            self._shutdown = shutdown

        try:
            await self._probe()
            await self._serve_until_stopped()
        finally:
            await self._release_store()
            self._state = LifecycleState.STOPPED
            self._stopped.set()
            logger.info("Service stopped")

    async def stop(self) -> None:
        """Request a graceful shutdown and wait until start() has returned."""
        self._shutdown.set()
        if self._started:
            await self._stopped.wait()

    async def _probe(self) -> None:
        self._state = LifecycleState.PROBING
        try:
            await self._store.ping()
        except Exception as e:
            logger.error(f"Failed to connect to store: {e}")
            raise ConnectivityError(f"Failed to connect to store: {e}") from e
        logger.info("Store connection verified")

    async def _serve_until_stopped(self) -> None:
        outcome: asyncio.Future = asyncio.get_running_loop().create_future()

        self._state = LifecycleState.SERVING
        serve_task = asyncio.create_task(self._run_listener(outcome), name="listener")
        shutdown_task = asyncio.create_task(self._shutdown.wait(), name="shutdown-signal")
        logger.info("Server is running ...")

        try:
            await asyncio.wait({outcome, shutdown_task}, return_when=asyncio.FIRST_COMPLETED)

            if outcome.done():
                await serve_task
                outcome.result()
                return

            await self._shut_down(serve_task, outcome)
        finally:
            shutdown_task.cancel()
            if not serve_task.done():
                self._listener.force_stop()
                serve_task.cancel()
                with contextlib.suppress(asyncio.CancelledError):
                    await serve_task

    async def _run_listener(self, outcome: asyncio.Future) -> None:
        try:
            await self._listener.serve()
        except Exception as e:
            logger.error(f"Listener failed: {e}", exc_info=True)
            if not isinstance(e, ListenerError):
                error = ListenerError(f"Failed to start server: {e}")
                error.__cause__ = e
                e = error
            if not outcome.done():
                outcome.set_exception(e)
            return

        if not outcome.done():
            outcome.set_result(None)

    async def _shut_down(self, serve_task: asyncio.Task, outcome: asyncio.Future) -> None:
        self._state = LifecycleState.SHUTTING_DOWN
        logger.info(f"Shutdown requested; draining for up to {self._grace}s")
        self._listener.request_stop()

        try:
            await asyncio.wait_for(asyncio.shield(serve_task), timeout=self._grace)
        except asyncio.TimeoutError:
            logger.error(f"Listener did not stop within {self._grace}s, forcing shutdown")
            raise ShutdownTimeoutError(self._grace) from None

        # a failure while draining is still reported
        outcome.result()

    async def _release_store(self) -> None:
        if self._store_released:
            return
        self._store_released = True
        try:
            await self._store.close()
        except Exception as e:
            logger.error(f"Failed to close store connection: {e}")
