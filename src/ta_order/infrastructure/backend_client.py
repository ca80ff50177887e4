# src/ta_order/infrastructure/backend_client.py
"""BackendClient: httpx implementation of OrderBackendProtocol.

Talks to the CMS backend's custom REST namespace. Every call:
  1. asks the AuthHeadersProvider for headers (fails before any I/O when
     the staff session has no usable token),
  2. performs exactly one HTTP request (no retries),
  3. maps failures onto the AppError taxonomy:
       transport error / timeout  → BackendUnavailableError
       non-2xx                    → BackendRejectedError (body logged)
"""
import json
import logging
from typing import Any

import httpx

from config.settings import settings
from src.ta_common.errors import BackendRejectedError, BackendUnavailableError
from src.ta_order.domain.models import OrderPage
from src.ta_order.domain.repository import AuthHeadersProvider
from src.ta_order.infrastructure.transformer import payload_to_order

logger = logging.getLogger("ta.backend")


def create_http_client(
    base_url: str | None = None,
    timeout: float | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.AsyncClient:
    """Shared AsyncClient for the backend; owned by the app lifespan."""
    return httpx.AsyncClient(
        base_url=base_url or settings.BACKEND_BASE_URL,
        timeout=timeout or settings.BACKEND_TIMEOUT_SECONDS,
        transport=transport,
        headers={"Accept": "application/json"},
    )


def extract_error_message(body: str) -> str | None:
    """The backend's structured {"message": ...}, or None.

    Unstructured bodies (HTML error pages, stack traces) are never shown to
    staff; callers log them instead.
    """
    try:
        data = json.loads(body)
    except (json.JSONDecodeError, TypeError):
        return None
    if isinstance(data, dict) and data.get("message"):
        return str(data["message"])
    return None


class BackendClient:
    def __init__(self, http: httpx.AsyncClient, auth: AuthHeadersProvider) -> None:
        self._http = http
        self._auth = auth

    async def _request(
        self,
        method: str,
        path: str,
        *,
        params: dict[str, Any] | None = None,
        body: dict[str, Any] | None = None,
        not_found_ok: bool = False,
    ) -> httpx.Response | None:
        headers = self._auth.auth_headers()
        logger.debug("%s %s params=%s", method, path, params)
        try:
            resp = await self._http.request(
                method, path, params=params, json=body, headers=headers
            )
        except httpx.TimeoutException:
            logger.error("%s %s timed out", method, path)
            raise BackendUnavailableError("request timed out") from None
        except httpx.HTTPError as exc:
            logger.error("%s %s transport error: %s", method, path, exc)
            raise BackendUnavailableError("connection failed") from exc

        if not_found_ok and resp.status_code == 404:
            logger.info("%s %s → 404, treating as already gone", method, path)
            return None
        if not resp.is_success:
            text = resp.text
            logger.error("%s %s → %d: %s", method, path, resp.status_code, text)
            raise BackendRejectedError(resp.status_code, extract_error_message(text))
        return resp

    @staticmethod
    def _json_object(resp: httpx.Response) -> dict[str, Any]:
        try:
            data = resp.json()
        except ValueError:
            raise BackendUnavailableError("unreadable JSON response") from None
        if not isinstance(data, dict):
            raise BackendUnavailableError("expected a JSON object")
        return data

    async def list_orders(
        self,
        status: str | None = None,
        client_id: str | None = None,
        per_page: int | None = None,
        page: int | None = None,
    ) -> OrderPage:
        params: dict[str, Any] = {}
        if status:
            params["status"] = status
        if client_id:
            params["client_id"] = client_id
        if per_page:
            params["per_page"] = per_page
        if page:
            params["page"] = page

        resp = await self._request("GET", "/unified-orders", params=params)
        data = self._json_object(resp)
        raw_orders = data.get("orders") or []
        orders = [payload_to_order(o) for o in raw_orders if isinstance(o, dict)]
        return OrderPage(
            orders=orders,
            total=int(data.get("total") or len(orders)),
            pages=int(data.get("pages") or 1),
            current_page=int(data.get("current_page") or page or 1),
            per_page=int(data.get("per_page") or per_page or len(orders)),
        )

    async def create_order(self, payload: dict[str, Any]) -> dict[str, Any]:
        """POST /unified-orders: creates order and client atomically.

        Returns {"order_id", "order_code", "client_id", "client_code"} as strings.
        """
        resp = await self._request("POST", "/unified-orders", body=payload)
        data = self._json_object(resp)
        order_id = data.get("order_id")
        client_id = data.get("client_id")
        if order_id is None or client_id is None:
            raise BackendUnavailableError("create response is missing ids")
        return {
            "order_id": str(order_id),
            "order_code": str(data.get("order_code") or ""),
            "client_id": str(client_id),
            "client_code": str(data.get("client_code") or ""),
        }

    async def update_order_fields(self, order_id: str, fields: dict[str, Any]) -> None:
        await self._request("PUT", f"/unified-orders/{order_id}", body=fields)

    async def update_order_status(
        self, order_id: str, status: str, changed_by: str, notes: str
    ) -> None:
        await self._request(
            "POST",
            f"/orders/{order_id}/status",
            body={"status": status, "changed_by": changed_by, "notes": notes},
        )

    async def update_client_field(self, client_id: str, field: str, value: str) -> None:
        await self._request(
            "PUT",
            f"/clients/{client_id}/update",
            body={"field": field, "value": value},
        )

    async def delete_order(self, order_id: str, delete_client: bool = False) -> bool:
        """Returns False when the order was already gone (404)."""
        resp = await self._request(
            "DELETE",
            f"/unified-orders/{order_id}",
            params={"delete_client": "true" if delete_client else "false"},
            not_found_ok=True,
        )
        return resp is not None

    async def delete_client(self, client_id: str) -> bool:
        """Returns False when the client was already gone (404)."""
        resp = await self._request("DELETE", f"/clients/{client_id}", not_found_ok=True)
        return resp is not None
