# src/ta_client/api/router.py
from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request

from src.ta_client.application.schemas import ClientFieldUpdateRequest, ClientResponse
from src.ta_client.application.service import DEFAULT_PER_PAGE, ClientService
from src.ta_client.domain.projection import client_from_order
from src.ta_common.response import ApiResponse, success_response
from src.ta_gateway.auth.dependencies import get_client_service, get_controller
from src.ta_gateway.middleware.request_log import get_request_id
from src.ta_order.application.service import WorkflowController

router = APIRouter(prefix="/clients", tags=["clients"])


def _respond(request: Request, data: object, message: str = "success") -> ApiResponse:
    resp = success_response(data, message=message)
    resp.request_id = get_request_id(request)
    return resp


@router.get("", response_model=ApiResponse)
async def list_clients(
    request: Request,
    service: Annotated[ClientService, Depends(get_client_service)],
    status: str | None = Query(None, description="Filter by client status"),
    search: str | None = Query(None, description="Search name, code, phone, email"),
    page: int = Query(1, ge=1),
    per_page: int = Query(DEFAULT_PER_PAGE, ge=1, le=100),
) -> ApiResponse:
    data = await service.list_clients(status, search, page, per_page)
    return _respond(request, data.model_dump())


@router.get("/archived", response_model=ApiResponse)
async def list_archived_clients(
    request: Request,
    service: Annotated[ClientService, Depends(get_client_service)],
    search: str | None = Query(None),
    page: int = Query(1, ge=1),
    per_page: int = Query(DEFAULT_PER_PAGE, ge=1, le=100),
) -> ApiResponse:
    data = await service.list_archived_clients(search, page, per_page)
    return _respond(request, data.model_dump())


@router.get("/profile/{identifier}", response_model=ApiResponse)
async def get_client_profile(
    request: Request,
    identifier: str,
    service: Annotated[ClientService, Depends(get_client_service)],
) -> ApiResponse:
    data = await service.get_profile(identifier)
    return _respond(request, data.model_dump())


@router.patch("/{client_id}", response_model=ApiResponse)
async def update_client(
    request: Request,
    client_id: str,
    body: ClientFieldUpdateRequest,
    controller: Annotated[WorkflowController, Depends(get_controller)],
) -> ApiResponse:
    orders = await controller.update_client_info(client_id, body.field, body.value)
    client = client_from_order(orders[0])
    return _respond(request, ClientResponse.from_domain(client).model_dump(), "Client updated")


@router.delete("/{client_id}", response_model=ApiResponse)
async def delete_client(
    request: Request,
    client_id: str,
    controller: Annotated[WorkflowController, Depends(get_controller)],
) -> ApiResponse:
    existed = await controller.delete_client(client_id)
    return _respond(request, {"client_id": client_id, "existed": existed}, "Client deleted")
