# src/ta_client/application/service.py
"""Client views over the order list.

Every read reloads the full order list first; clients are recomputed from
orders on each call and never cached.
"""
from src.ta_client.application.schemas import (
    ClientListResponse,
    ClientProfileResponse,
    ClientResponse,
)
from src.ta_client.domain.projection import (
    count_by_status,
    filter_by_status,
    paginate,
    project_archived_clients,
    project_client_profile,
    project_clients,
    search_clients,
)
from src.ta_common.errors import ClientNotFoundError
from src.ta_order.application.service import WorkflowController

DEFAULT_PER_PAGE = 10


class ClientService:
    def __init__(self, controller: WorkflowController) -> None:
        self._controller = controller

    async def list_clients(
        self,
        status: str | None = None,
        search: str | None = None,
        page: int = 1,
        per_page: int = DEFAULT_PER_PAGE,
    ) -> ClientListResponse:
        orders = await self._controller.load()
        clients = project_clients(orders)
        counts = count_by_status(clients)
        matched = search_clients(filter_by_status(clients, status), search or "")
        items, pages = paginate(matched, page, per_page)
        return ClientListResponse(
            items=[ClientResponse.from_domain(c) for c in items],
            total=len(matched),
            page=page,
            per_page=per_page,
            pages=pages,
            counts=counts,
        )

    async def list_archived_clients(
        self,
        search: str | None = None,
        page: int = 1,
        per_page: int = DEFAULT_PER_PAGE,
    ) -> ClientListResponse:
        orders = await self._controller.load()
        clients = project_archived_clients(orders)
        matched = search_clients(clients, search or "")
        items, pages = paginate(matched, page, per_page)
        return ClientListResponse(
            items=[ClientResponse.from_domain(c) for c in items],
            total=len(matched),
            page=page,
            per_page=per_page,
            pages=pages,
            counts=count_by_status(clients),
        )

    async def get_profile(self, identifier: str) -> ClientProfileResponse:
        """Look a client up by code, name, first/last name or company."""
        orders = await self._controller.load()
        profile = project_client_profile(orders, identifier)
        if profile is None:
            raise ClientNotFoundError(identifier)
        return ClientProfileResponse.from_domain(profile)
