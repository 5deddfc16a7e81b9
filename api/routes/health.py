"""
Health check endpoints.

Used for monitoring and load balancer health checks.
"""
from datetime import datetime, timezone
import logging
import platform

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from api.dependencies import get_store
from core.infrastructure.adapters.kv.store import KeyValueStore, KeyValueStoreError


logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("/health")
async def health_check():
    """
    Health check endpoint.

    Returns system health status.
    """
    return {
        "status": "healthy",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "service": "orders-service",
        "version": "1.0.0",
        "python_version": platform.python_version(),
    }


@router.get("/health/ready")
async def readiness_check(store: KeyValueStore = Depends(get_store)):
    """
    Readiness check endpoint.

    Returns whether the service can reach its store; 503 otherwise.
    """
    try:
        await store.ping()
    except KeyValueStoreError as e:
        logger.warning(f"Readiness check failed: {e}")
        return JSONResponse(
            status_code=503,
            content={
                "status": "unavailable",
                "timestamp": datetime.now(timezone.utc).isoformat(),
                "checks": {"api": "ok", "store": "unreachable"},
            },
        )

    return {
        "status": "ready",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "checks": {"api": "ok", "store": "ok"},
    }
