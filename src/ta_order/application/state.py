"""OrderStore: in-memory application state for the full order list.

One store per process, injected into every WorkflowController. Projection
decisions (dedup, archive partition) need the whole list, so refresh()
always follows every backend page before replacing it.

Concurrency: `lock` serializes every read-modify-write against the list,
including the remote calls in between, the same guarantee a single-threaded
UI event loop gives. Plain (non-async) methods assume the caller holds
`lock`; reload() acquires it itself.
"""

import asyncio
import logging

from config.settings import settings
from src.ta_common.errors import OrderNotFoundError
from src.ta_order.domain.models import Order
from src.ta_order.domain.repository import OrderBackendProtocol

logger = logging.getLogger(__name__)


class OrderStore:
    def __init__(self, page_size: int | None = None) -> None:
        self._orders: list[Order] = []
        self._loaded = False
        self._page_size = page_size or settings.ORDERS_PAGE_SIZE
        self.lock = asyncio.Lock()

    @property
    def loaded(self) -> bool:
        return self._loaded

    @property
    def orders(self) -> list[Order]:
        """Current list in backend order (most recent first)."""
        return list(self._orders)

    async def refresh(self, backend: OrderBackendProtocol) -> list[Order]:
        """Fetch all pages and replace local state. Caller holds `lock`."""
        orders: list[Order] = []
        page = 1
        while True:
            result = await backend.list_orders(per_page=self._page_size, page=page)
            orders.extend(result.orders)
            if page >= result.pages or not result.orders:
                break
            page += 1
        self._orders = orders
        self._loaded = True
        logger.info("Loaded %d orders (%d pages)", len(orders), page)
        return list(orders)

    async def reload(self, backend: OrderBackendProtocol) -> list[Order]:
        async with self.lock:
            return await self.refresh(backend)

    async def ensure_loaded(self, backend: OrderBackendProtocol) -> None:
        """Caller holds `lock`."""
        if not self._loaded:
            await self.refresh(backend)

    def find(self, order_id: str) -> Order | None:
        return next((o for o in self._orders if o.id == order_id), None)

    def get(self, order_id: str) -> Order:
        order = self.find(order_id)
        if order is None:
            raise OrderNotFoundError(order_id)
        return order

    def orders_for_client(self, client_id: str) -> list[Order]:
        return [o for o in self._orders if o.client_id == client_id]

    def add(self, order: Order) -> None:
        # Newest first, matching the backend's list order
        self._orders.insert(0, order)

    def remove(self, order_id: str) -> None:
        self._orders = [o for o in self._orders if o.id != order_id]

    def remove_client(self, client_id: str) -> int:
        before = len(self._orders)
        self._orders = [o for o in self._orders if o.client_id != client_id]
        return before - len(self._orders)
