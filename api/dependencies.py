"""
FastAPI Dependencies.

Provides dependency injection for the order service. The store and the
repository are created by the process entry point and attached to
``app.state``; nothing here holds a module-level client.
"""
from __future__ import annotations

import logging
from pathlib import Path

from dotenv import load_dotenv
from fastapi import Request

# Load environment variables ONCE before any settings objects are created
_PROJECT_ROOT = Path(__file__).resolve().parents[1]
load_dotenv(dotenv_path=_PROJECT_ROOT / ".env")

from core.application.services.order_service import OrderApplicationService  # noqa: E402
from core.domain.repositories.order_repository import OrderRepository  # noqa: E402
from core.infrastructure.adapters.kv.store import KeyValueStore  # noqa: E402

logger = logging.getLogger(__name__)


# =============================================================================
# DEPENDENCIES
# =============================================================================

def get_store(request: Request) -> KeyValueStore:
    return request.app.state.store


def get_order_repository(request: Request) -> OrderRepository:
    return request.app.state.order_repository


def get_order_service(request: Request) -> OrderApplicationService:
    return OrderApplicationService(
        repository=get_order_repository(request),
        page_size=request.app.state.page_size,
    )
