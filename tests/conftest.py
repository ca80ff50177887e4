"""Shared test fixtures.

API tests run the real app over ASGITransport; the remote CMS is replaced
by an in-memory FakeBackend served through httpx.MockTransport.
"""

import json
from datetime import UTC, datetime, timedelta

import httpx
import pytest
from httpx import ASGITransport, AsyncClient
from jose import jwt

from src.main import app
from src.ta_order.application.state import OrderStore
from src.ta_order.infrastructure.backend_client import create_http_client

BACKEND_URL = "https://cms.test/wp-json/custom/v1"
AUTH_URL = "https://cms.test/wp-json"


def make_token(expires_in: timedelta = timedelta(days=7)) -> str:
    exp = datetime.now(UTC) + expires_in
    return jwt.encode({"exp": int(exp.timestamp())}, "backend-secret", algorithm="HS256")


class FakeBackend:
    """Just enough of the CMS custom namespace for API flows."""

    def __init__(self) -> None:
        self.orders: list[dict] = []
        self.client_updates: list[dict] = []
        self.requests: list[httpx.Request] = []
        self.fail_status_update = False
        self.fail_client_update = False
        self.token = make_token()
        self._next_id = 100

    def add_order(self, **fields) -> dict:
        self._next_id += 1
        record = {
            "id": self._next_id,
            "order_code": f"ORD250101{self._next_id:03d}",
            "client_id": 1,
            "client_code": "CLI25010101",
            "client_first_name": "Sara",
            "client_last_name": "Ahmadi",
            "translation_type": "certified",
            "number_of_pages": "2",
            "order_status": "acceptance",
            "order_history": "[]",
            "created_at": "2025-01-01 10:00:00",
            "updated_at": "2025-01-01 10:00:00",
        }
        record.update(fields)
        # newest first, like the backend
        self.orders.insert(0, record)
        return record

    def _find(self, order_id: str) -> dict | None:
        return next((o for o in self.orders if str(o["id"]) == order_id), None)

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path
        method = request.method

        if path == "/wp-json/jwt-auth/v1/token":
            body = json.loads(request.content)
            if body.get("password") != "secret":
                return httpx.Response(403, json={"message": "incorrect password"})
            return httpx.Response(200, json={"token": self.token})
        if path == "/wp-json/wp/v2/users/me":
            return httpx.Response(200, json={"id": 3, "name": "Maryam", "username": "maryam",
                                             "roles": ["editor"]})

        prefix = "/wp-json/custom/v1"
        route = path[len(prefix):]
        parts = route.strip("/").split("/")

        if route == "/unified-orders" and method == "GET":
            return httpx.Response(200, json={
                "orders": self.orders, "total": len(self.orders), "pages": 1,
                "current_page": 1, "per_page": 100,
            })
        if route == "/unified-orders" and method == "POST":
            body = json.loads(request.content)
            record = self.add_order(
                order_code=body["orderCode"], client_id=77, client_code=body["clientCode"],
                client_first_name=body["clientFirstName"], client_last_name=body["clientLastName"],
            )
            return httpx.Response(201, json={
                "success": True, "order_id": record["id"], "order_code": record["order_code"],
                "client_id": 77, "client_code": record["client_code"],
            })
        if parts[0] == "unified-orders" and method == "PUT":
            order = self._find(parts[1])
            if order is None:
                return httpx.Response(404, json={"message": "Order not found"})
            order.update(json.loads(request.content))
            return httpx.Response(200, json={"success": True})
        if parts[0] == "unified-orders" and method == "DELETE":
            order = self._find(parts[1])
            if order is None:
                return httpx.Response(404, json={"message": "Order not found"})
            self.orders.remove(order)
            return httpx.Response(200, json={"success": True})
        if parts[0] == "orders" and parts[-1] == "status":
            if self.fail_status_update:
                return httpx.Response(
                    500, text="<html><b>Fatal error</b>: Uncaught PDOException in /var/www/wp/x.php:42</html>"
                )
            order = self._find(parts[1])
            if order is None:
                return httpx.Response(404, json={"message": "Order not found"})
            order["order_status"] = json.loads(request.content)["status"]
            return httpx.Response(200, json={"success": True})
        if parts[0] == "clients" and method == "PUT":
            if self.fail_client_update:
                return httpx.Response(503, text="Service Unavailable")
            self.client_updates.append({"client_id": parts[1], **json.loads(request.content)})
            return httpx.Response(200, json={"success": True})
        if parts[0] == "clients" and method == "DELETE":
            return httpx.Response(200, json={"success": True})
        return httpx.Response(404, json={"message": "No route"})

    def calls(self, method: str, fragment: str) -> list[httpx.Request]:
        return [r for r in self.requests if r.method == method and fragment in r.url.path]


@pytest.fixture
def fake_backend() -> FakeBackend:
    return FakeBackend()


@pytest.fixture
async def client(fake_backend: FakeBackend) -> AsyncClient:
    """Async HTTP client for testing FastAPI endpoints.

    ASGITransport does not run the lifespan, so app.state is wired here.
    """
    transport = httpx.MockTransport(fake_backend)
    app.state.backend_http = create_http_client(base_url=BACKEND_URL, transport=transport)
    app.state.auth_http = create_http_client(base_url=AUTH_URL, transport=transport)
    app.state.order_store = OrderStore()
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    await app.state.backend_http.aclose()
    await app.state.auth_http.aclose()


@pytest.fixture
async def auth_client(client: AsyncClient, fake_backend: FakeBackend) -> AsyncClient:
    """Authenticated client: logs in and injects the Bearer token."""
    resp = await client.post("/api/v1/auth/login", json={"username": "maryam", "password": "secret"})
    token = resp.json()["data"]["access_token"]
    client.headers.update({"Authorization": f"Bearer {token}"})
    return client
