# src/ta_order/domain/repository.py
"""Order backend Protocol: interface contract for the remote record store.

Unit tests inject a mock that conforms to this Protocol.
Infrastructure layer provides the real httpx implementation.
"""
from typing import Any, Protocol

from src.ta_order.domain.models import OrderPage


class OrderBackendProtocol(Protocol):
    async def list_orders(
        self,
        status: str | None = None,
        client_id: str | None = None,
        per_page: int | None = None,
        page: int | None = None,
    ) -> OrderPage: ...

    async def create_order(self, payload: dict[str, Any]) -> dict[str, Any]: ...

    async def update_order_fields(self, order_id: str, fields: dict[str, Any]) -> None: ...

    async def update_order_status(
        self, order_id: str, status: str, changed_by: str, notes: str
    ) -> None: ...

    async def update_client_field(self, client_id: str, field: str, value: str) -> None: ...

    async def delete_order(self, order_id: str, delete_client: bool = False) -> bool: ...

    async def delete_client(self, client_id: str) -> bool: ...


class AuthHeadersProvider(Protocol):
    def auth_headers(self) -> dict[str, str]:
        """Current request headers; raises NotAuthenticatedError when there are none."""
        ...
