"""Order API flows against the in-memory backend."""

from httpx import AsyncClient

from tests.conftest import FakeBackend


async def test_health(client: AsyncClient) -> None:
    resp = await client.get("/health")
    assert resp.status_code == 200
    assert resp.json()["status"] == "ok"


async def test_requires_token(client: AsyncClient) -> None:
    resp = await client.get("/api/v1/orders")
    assert resp.status_code == 401
    assert resp.json()["code"] == 1001


async def test_list_orders(auth_client: AsyncClient, fake_backend: FakeBackend) -> None:
    fake_backend.add_order(order_status="translation")
    fake_backend.add_order(order_status="office")

    resp = await auth_client.get("/api/v1/orders")

    assert resp.status_code == 200
    body = resp.json()
    assert body["code"] == 0
    assert body["data"]["total"] == 2
    assert [o["status"] for o in body["data"]["items"]] == ["office", "translating"]
    assert body["data"]["items"][0]["allowed_statuses"] == ["editing", "office", "ready", "archived"]
    assert resp.headers["X-Request-ID"] == body["request_id"]


async def test_full_lifecycle_to_ready(auth_client: AsyncClient, fake_backend: FakeBackend) -> None:
    record = fake_backend.add_order(client_id=9, order_status="office")
    url = f"/api/v1/orders/{record['id']}/status"

    resp = await auth_client.post(url, json={"status": "ready", "notes": "signed"})

    assert resp.status_code == 200
    data = resp.json()["data"]
    assert data["order"]["status"] == "ready"
    assert data["client_archived"] is True
    assert fake_backend.client_updates == [
        {"client_id": "9", "field": "client_status", "value": "archived"},
    ]


async def test_illegal_transition(auth_client: AsyncClient, fake_backend: FakeBackend) -> None:
    record = fake_backend.add_order(order_status="office")

    resp = await auth_client.post(f"/api/v1/orders/{record['id']}/status",
                                  json={"status": "translating"})

    assert resp.status_code == 422
    assert resp.json()["code"] == 3001
    assert fake_backend.calls("POST", "/status") == []


async def test_status_update_failure(auth_client: AsyncClient, fake_backend: FakeBackend) -> None:
    record = fake_backend.add_order(order_status="editing")
    fake_backend.fail_status_update = True

    resp = await auth_client.post(f"/api/v1/orders/{record['id']}/status", json={"status": "office"})
    assert resp.status_code == 502
    assert resp.json()["code"] == 3002
    assert "PDOException" not in resp.text

    resp = await auth_client.get(f"/api/v1/orders/{record['id']}")
    assert resp.json()["data"]["status"] == "editing"


async def test_archive_failure_is_soft(auth_client: AsyncClient, fake_backend: FakeBackend) -> None:
    record = fake_backend.add_order(order_status="office")
    fake_backend.fail_client_update = True

    resp = await auth_client.post(f"/api/v1/orders/{record['id']}/status", json={"status": "ready"})

    assert resp.status_code == 200
    body = resp.json()
    assert body["data"]["order"]["status"] == "ready"
    assert body["data"]["client_archived"] is False
    assert body["data"]["archive_error"] == "Archiving client 1 failed"


async def test_create_order(auth_client: AsyncClient, fake_backend: FakeBackend) -> None:
    resp = await auth_client.post("/api/v1/orders", json={
        "client_first_name": "Reza", "client_last_name": "Karimi",
        "client_phone": "۰۹۳۵۱۱۱۲۲۳۳",
        "translation_type": "sworn", "document_type": "birth certificate",
        "language_from": "fa", "language_to": "de", "number_of_pages": "۴",
    })

    assert resp.status_code == 201
    data = resp.json()["data"]
    assert data["status"] == "acceptance"
    assert data["client_phone"] == "09351112233"
    assert data["number_of_pages"] == 4
    assert data["history"][0]["notes"] == "سفارش ایجاد شد"
    assert fake_backend.orders[0]["client_first_name"] == "Reza"


async def test_create_order_validation(auth_client: AsyncClient, fake_backend: FakeBackend) -> None:
    resp = await auth_client.post("/api/v1/orders", json={
        "client_type": "company", "client_company": "",
        "translation_type": "simple", "document_type": "contract",
        "language_from": "fa", "language_to": "en", "number_of_pages": 1,
    })
    assert resp.status_code == 422
    assert resp.json()["code"] == 2001
    assert fake_backend.calls("POST", "/unified-orders") == []


async def test_patch_field(auth_client: AsyncClient, fake_backend: FakeBackend) -> None:
    record = fake_backend.add_order()

    resp = await auth_client.patch(f"/api/v1/orders/{record['id']}",
                                   json={"field": "numberOfPages", "value": "۷"})

    assert resp.status_code == 200
    assert resp.json()["data"]["number_of_pages"] == 7
    assert record["number_of_pages"] == 7


async def test_patch_forbidden_field(auth_client: AsyncClient, fake_backend: FakeBackend) -> None:
    record = fake_backend.add_order()

    resp = await auth_client.patch(f"/api/v1/orders/{record['id']}",
                                   json={"field": "orderCode", "value": "X"})

    assert resp.status_code == 422
    assert resp.json()["code"] == 2002
    assert fake_backend.calls("PUT", "/unified-orders") == []


async def test_delete_twice(auth_client: AsyncClient, fake_backend: FakeBackend) -> None:
    record = fake_backend.add_order()
    url = f"/api/v1/orders/{record['id']}"

    first = await auth_client.delete(url)
    second = await auth_client.delete(url)

    assert first.json()["data"]["existed"] is True
    assert second.status_code == 200
    assert second.json()["data"]["existed"] is False


async def test_unknown_order(auth_client: AsyncClient) -> None:
    resp = await auth_client.get("/api/v1/orders/999")
    assert resp.status_code == 404
    assert resp.json()["code"] == 4001
