"""
Orders Service - Main FastAPI Application.

This is the REST API layer over the order repository, plus the process
entry point that wires the Redis store, the HTTP listener and the
service lifecycle together.
"""
import asyncio
import signal
import time
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from api.routes import health, orders
from core.domain.errors import (
    OrderAlreadyExistsError,
    OrderConflictError,
    OrderNotFoundError,
    OrderStorageError,
)
from core.infrastructure.adapters.kv.redis_store import RedisKeyValueStore
from core.infrastructure.adapters.kv.store import KeyValueStore
from core.infrastructure.adapters.persistence.redis_order_repository import RedisOrderRepository
from core.infrastructure.logging import configure_logging, get_logger
from core.infrastructure.server import ServiceLifecycle, UvicornListener
from core.settings import AppSettings, get_app_settings


logger = get_logger(__name__)


# =============================================================================
# CREATE FASTAPI APP
# =============================================================================

def create_app(store: KeyValueStore, page_size: int = 50) -> FastAPI:
    """
    Build the FastAPI application around a store.

    Args:
        store: Key-value store shared by every request
        page_size: Index entries scanned per listing call

    Returns:
        Configured FastAPI app
    """
    app = FastAPI(
        title="Orders Service",
        description="Order records persisted in Redis with a listing index.",
        version="1.0.0",
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
    )

    app.state.store = store
    app.state.order_repository = RedisOrderRepository(store)
    app.state.page_size = page_size

    # =========================================================================
    # REQUEST LOGGING MIDDLEWARE
    # =========================================================================

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        """Log all requests with timing."""
        start_time = time.time()
        response = await call_next(request)
        duration = time.time() - start_time
        logger.info(
            f"{request.method} {request.url.path} "
            f"[{response.status_code}] ({duration:.3f}s)"
        )
        return response

    # =========================================================================
    # EXCEPTION HANDLERS
    # =========================================================================

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        """Malformed ids, cursors and bodies are client errors."""
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"detail": jsonable_encoder(exc.errors())},
        )

    @app.exception_handler(OrderNotFoundError)
    async def not_found_handler(request: Request, exc: OrderNotFoundError) -> JSONResponse:
        return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content={"detail": str(exc)})

    @app.exception_handler(OrderAlreadyExistsError)
    async def already_exists_handler(request: Request, exc: OrderAlreadyExistsError) -> JSONResponse:
        return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"detail": str(exc)})

    @app.exception_handler(OrderConflictError)
    async def conflict_handler(request: Request, exc: OrderConflictError) -> JSONResponse:
        return JSONResponse(status_code=status.HTTP_409_CONFLICT, content={"detail": str(exc)})

    @app.exception_handler(OrderStorageError)
    async def storage_error_handler(request: Request, exc: OrderStorageError) -> JSONResponse:
        logger.error(f"Storage error on {request.method} {request.url.path}: {exc}")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"detail": "Internal server error"},
        )

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        """Handle all uncaught exceptions."""
        logger.error(f"Unhandled exception: {exc}", exc_info=True)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"detail": "Internal server error"},
        )

    # =========================================================================
    # INCLUDE ROUTERS
    # =========================================================================

    app.include_router(health.router, tags=["Health"])
    app.include_router(orders.router, prefix="/orders", tags=["Orders"])

    @app.get("/", tags=["Root"])
    async def root():
        """API root endpoint."""
        return {"message": "Orders Service", "version": "1.0.0", "docs": "/docs"}

    return app


# =============================================================================
# PROCESS ENTRY POINT
# =============================================================================

def build_lifecycle(settings: AppSettings) -> ServiceLifecycle:
    """Create the store, the app and the listener, owned by one lifecycle."""
    store = RedisKeyValueStore.from_url(
        settings.redis.url,
        socket_timeout=settings.redis.socket_timeout,
    )
    app = create_app(store, page_size=settings.server.page_size)
    listener = UvicornListener(
        app,
        host=settings.server.host,
        port=settings.server.port,
        log_level=settings.server.log_level,
    )
    return ServiceLifecycle(
        store,
        listener,
        shutdown_grace_seconds=settings.server.shutdown_grace_seconds,
    )


async def serve(settings: Optional[AppSettings] = None) -> None:
    """Run the service until SIGINT/SIGTERM, then shut down gracefully."""
    settings = settings or get_app_settings()
    lifecycle = build_lifecycle(settings)

    shutdown = asyncio.Event()
    loop = asyncio.get_running_loop()
    for sig in (signal.SIGINT, signal.SIGTERM):
        loop.add_signal_handler(sig, shutdown.set)

    logger.info(f"Starting orders service on {settings.server.host}:{settings.server.port}")
    try:
        await lifecycle.start(shutdown)
    finally:
        for sig in (signal.SIGINT, signal.SIGTERM):
            loop.remove_signal_handler(sig)


def run() -> None:
    """Console script entry point."""
    settings = get_app_settings()
    configure_logging(settings.server.log_level)
    try:
        asyncio.run(serve(settings))
    except Exception as e:
        logger.error(f"Failed to start application: {e}")
        raise SystemExit(1) from e


if __name__ == "__main__":
    run()
