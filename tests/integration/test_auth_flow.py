"""Auth API flows against the in-memory backend."""

from datetime import timedelta

from httpx import AsyncClient

from tests.conftest import FakeBackend, make_token


async def test_login_success(client: AsyncClient, fake_backend: FakeBackend) -> None:
    resp = await client.post("/api/v1/auth/login", json={"username": "maryam", "password": "secret"})

    assert resp.status_code == 200
    body = resp.json()
    assert body["code"] == 0
    assert body["data"]["access_token"] == fake_backend.token
    assert body["data"]["token_type"] == "Bearer"
    assert body["data"]["expires_at"]
    assert body["data"]["user"]["role"] == "editor"


async def test_login_wrong_password(client: AsyncClient) -> None:
    resp = await client.post("/api/v1/auth/login", json={"username": "maryam", "password": "nope"})
    assert resp.status_code == 401
    assert resp.json()["code"] == 1002
    assert resp.json()["data"] is None


async def test_login_missing_fields(client: AsyncClient) -> None:
    resp = await client.post("/api/v1/auth/login", json={"username": "maryam"})
    assert resp.status_code == 422


async def test_me(auth_client: AsyncClient) -> None:
    resp = await auth_client.get("/api/v1/auth/me")
    assert resp.status_code == 200
    assert resp.json()["data"]["username"] == "maryam"


async def test_nonce_is_forwarded(auth_client: AsyncClient, fake_backend: FakeBackend) -> None:
    fake_backend.add_order()
    await auth_client.get("/api/v1/orders", headers={"X-WP-Nonce": "n0nce"})

    sent = fake_backend.calls("GET", "/unified-orders")[-1]
    assert sent.headers["X-WP-Nonce"] == "n0nce"
    assert sent.headers["Authorization"] == f"Bearer {fake_backend.token}"


async def test_expired_token_makes_no_backend_call(client: AsyncClient, fake_backend: FakeBackend) -> None:
    token = make_token(expires_in=timedelta(minutes=-1))

    resp = await client.get("/api/v1/orders", headers={"Authorization": f"Bearer {token}"})

    assert resp.status_code == 401
    assert resp.json()["code"] == 1001
    assert fake_backend.requests == []
