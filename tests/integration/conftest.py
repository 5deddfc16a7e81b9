"""Pytest configuration and fixtures for API integration tests."""

from typing import Generator

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from api.main import create_app
from core.infrastructure.adapters.kv.memory_store import InMemoryKeyValueStore


@pytest.fixture
def memory_store() -> InMemoryKeyValueStore:
    """Store shared by the app under test."""
    return InMemoryKeyValueStore()


@pytest.fixture
def app(memory_store) -> FastAPI:
    return create_app(memory_store, page_size=50)


@pytest.fixture
def test_client(app) -> Generator[TestClient, None, None]:
    """Create FastAPI test client over the in-memory store."""
    client = TestClient(app)
    yield client

    # Cleanup
    app.dependency_overrides.clear()
