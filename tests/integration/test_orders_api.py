"""Integration tests for Orders API endpoints."""

from unittest.mock import AsyncMock, MagicMock

from fastapi.testclient import TestClient

from api.dependencies import get_order_service
from api.main import create_app
from core.application.services.order_service import OrderApplicationService
from core.domain.errors import OrderConflictError
from core.infrastructure.adapters.kv.memory_store import InMemoryKeyValueStore
from core.infrastructure.adapters.kv.store import KeyValueStoreError


CUSTOMER_ID = "9a7b2c1e-4d3f-4a5b-8c6d-7e8f9a0b1c2d"
ITEM_ID = "1f2e3d4c-5b6a-4789-9abc-def012345678"


def _order_payload() -> dict:
    return {
        "customer_id": CUSTOMER_ID,
        "line_items": [
            {"item_id": ITEM_ID, "quantity": 2, "price": 1250},
        ],
    }


def _create_order(client: TestClient) -> dict:
    response = client.post("/orders", json=_order_payload())
    assert response.status_code == 201, f"Expected 201, got {response.status_code}: {response.text}"
    return response.json()


# =============================================================================
# CREATE / GET
# =============================================================================

def test_create_order_success(test_client: TestClient, memory_store):
    """Test POST /orders - order is stored and indexed."""
    created = _create_order(test_client)

    assert created["customer_id"] == CUSTOMER_ID
    assert created["line_items"] == [{"item_id": ITEM_ID, "quantity": 2, "price": 1250}]
    assert created["created_at"] is not None
    assert created["shipped_at"] is None
    assert created["completed_at"] is None
    assert created["status"] == "created"
    assert memory_store.members("orders") == [f"order:{created['order_id']}"]


def test_get_order_by_id(test_client: TestClient):
    """Test GET /orders/{order_id} endpoint."""
    created = _create_order(test_client)

    response = test_client.get(f"/orders/{created['order_id']}")

    assert response.status_code == 200
    assert response.json() == created


def test_get_order_not_found(test_client: TestClient):
    response = test_client.get("/orders/999")

    assert response.status_code == 404
    assert "999" in response.json()["detail"]


def test_malformed_order_id_is_bad_request(test_client: TestClient):
    assert test_client.get("/orders/abc").status_code == 400
    assert test_client.get("/orders/-1").status_code == 400
    assert test_client.get(f"/orders/{2**64}").status_code == 400


def test_create_order_missing_customer_is_bad_request(test_client: TestClient):
    response = test_client.post("/orders", json={"line_items": []})

    assert response.status_code == 400


def test_create_order_id_collision_is_bad_request(app, test_client: TestClient):
    """A generated id that already exists is rejected, not overwritten."""
    app.dependency_overrides[get_order_service] = lambda: OrderApplicationService(
        repository=app.state.order_repository,
        id_factory=lambda: 7,
    )

    first = test_client.post("/orders", json=_order_payload())
    second = test_client.post("/orders", json=_order_payload())

    assert first.status_code == 201
    assert first.json()["order_id"] == 7
    assert second.status_code == 400
    assert test_client.get("/orders/7").json() == first.json()


# =============================================================================
# UPDATE STATUS
# =============================================================================

def test_ship_then_complete_order(test_client: TestClient):
    created = _create_order(test_client)
    url = f"/orders/{created['order_id']}"

    shipped = test_client.put(url, json={"status": "shipped"})
    assert shipped.status_code == 200
    assert shipped.json()["shipped_at"] is not None
    assert shipped.json()["completed_at"] is None
    assert shipped.json()["status"] == "shipped"

    completed = test_client.put(url, json={"status": "completed"})
    assert completed.status_code == 200
    assert completed.json()["completed_at"] is not None
    assert completed.json()["status"] == "completed"
    assert completed.json()["shipped_at"] == shipped.json()["shipped_at"]


def test_complete_before_ship_is_bad_request(test_client: TestClient):
    created = _create_order(test_client)

    response = test_client.put(f"/orders/{created['order_id']}", json={"status": "completed"})

    assert response.status_code == 400
    assert test_client.get(f"/orders/{created['order_id']}").json()["completed_at"] is None


def test_ship_twice_is_bad_request(test_client: TestClient):
    created = _create_order(test_client)
    url = f"/orders/{created['order_id']}"

    test_client.put(url, json={"status": "shipped"})
    response = test_client.put(url, json={"status": "shipped"})

    assert response.status_code == 400


def test_unknown_status_is_bad_request(test_client: TestClient):
    created = _create_order(test_client)

    response = test_client.put(f"/orders/{created['order_id']}", json={"status": "lost"})

    assert response.status_code == 400


def test_update_missing_order_is_not_found(test_client: TestClient):
    response = test_client.put("/orders/12345", json={"status": "shipped"})

    assert response.status_code == 404


# =============================================================================
# DELETE
# =============================================================================

def test_delete_order(test_client: TestClient, memory_store):
    created = _create_order(test_client)
    url = f"/orders/{created['order_id']}"

    response = test_client.delete(url)
    assert response.status_code == 200
    assert response.json() == {"status": "success"}

    assert test_client.get(url).status_code == 404
    assert test_client.delete(url).status_code == 404
    assert memory_store.members("orders") == []


# =============================================================================
# LIST
# =============================================================================

def test_list_orders_single_page_has_no_next(test_client: TestClient):
    ids = {_create_order(test_client)["order_id"] for _ in range(3)}

    response = test_client.get("/orders")

    assert response.status_code == 200
    body = response.json()
    assert {item["order_id"] for item in body["items"]} == ids
    assert "next" not in body


def test_list_orders_empty(test_client: TestClient):
    response = test_client.get("/orders")

    assert response.status_code == 200
    assert response.json() == {"items": []}


def test_list_orders_follows_next_cursor():
    client = TestClient(create_app(InMemoryKeyValueStore(), page_size=2))
    ids = {_create_order(client)["order_id"] for _ in range(5)}

    seen = []
    params = {}
    pages = 0
    while True:
        body = client.get("/orders", params=params).json()
        seen.extend(item["order_id"] for item in body["items"])
        pages += 1
        if "next" not in body:
            break
        params = {"cursor": body["next"]}

    assert pages == 3
    assert sorted(seen) == sorted(ids)


def test_list_orders_negative_cursor_is_bad_request(test_client: TestClient):
    assert test_client.get("/orders", params={"cursor": -1}).status_code == 400


# =============================================================================
# STORE FAILURES / HEALTH
# =============================================================================

def _failing_store() -> MagicMock:
    store = MagicMock()
    store.ping = AsyncMock(side_effect=KeyValueStoreError("PING: Connection refused"))
    store.get = AsyncMock(side_effect=KeyValueStoreError("GET: Connection refused"))
    return store


def test_store_failure_is_internal_server_error():
    client = TestClient(create_app(_failing_store()))

    response = client.get("/orders/1")

    assert response.status_code == 500
    assert response.json() == {"detail": "Internal server error"}


def test_health(test_client: TestClient):
    response = test_client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


def test_readiness_ok(test_client: TestClient):
    response = test_client.get("/health/ready")

    assert response.status_code == 200
    assert response.json()["checks"]["store"] == "ok"


def test_readiness_store_unreachable():
    client = TestClient(create_app(_failing_store()))

    response = client.get("/health/ready")

    assert response.status_code == 503
    assert response.json()["checks"]["store"] == "unreachable"


def test_root(test_client: TestClient):
    assert test_client.get("/").json()["message"] == "Orders Service"


def test_concurrent_update_conflict_is_409(app, test_client: TestClient):
    service = MagicMock()
    service.update_status = AsyncMock(side_effect=OrderConflictError("order:1"))
    app.dependency_overrides[get_order_service] = lambda: service

    response = test_client.put("/orders/1", json={"status": "shipped"})

    assert response.status_code == 409
    assert "order:1" in response.json()["detail"]
