# src/ta_order/api/router.py
from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request, status

from src.ta_common.response import ApiResponse, success_response
from src.ta_gateway.auth.dependencies import get_controller
from src.ta_gateway.middleware.request_log import get_request_id
from src.ta_order.application.schemas import (
    CreateOrderRequest,
    FieldUpdateRequest,
    OrderListResponse,
    OrderResponse,
    TransitionRequest,
    TransitionResponse,
)
from src.ta_order.application.service import WorkflowController
from src.ta_order.domain.workflow import parse_status

router = APIRouter(prefix="/orders", tags=["orders"])


def _respond(request: Request, data: object, message: str = "success") -> ApiResponse:
    resp = success_response(data, message=message)
    resp.request_id = get_request_id(request)
    return resp


@router.get("", response_model=ApiResponse)
async def list_orders(
    request: Request,
    controller: Annotated[WorkflowController, Depends(get_controller)],
    status_filter: str | None = Query(None, alias="status", description="Filter by stage"),
    client_id: str | None = Query(None, description="Filter by client ID"),
) -> ApiResponse:
    wanted = parse_status(status_filter).value if status_filter else None
    orders = await controller.list_orders(wanted, client_id)
    data = OrderListResponse(
        items=[OrderResponse.from_domain(o) for o in orders],
        total=len(orders),
    )
    return _respond(request, data.model_dump())


@router.get("/{order_id}", response_model=ApiResponse)
async def get_order(
    request: Request,
    order_id: str,
    controller: Annotated[WorkflowController, Depends(get_controller)],
) -> ApiResponse:
    order = await controller.get_order(order_id)
    return _respond(request, OrderResponse.from_domain(order).model_dump())


@router.post("", response_model=ApiResponse, status_code=status.HTTP_201_CREATED)
async def create_order(
    request: Request,
    body: CreateOrderRequest,
    controller: Annotated[WorkflowController, Depends(get_controller)],
) -> ApiResponse:
    order = await controller.create_order(body)
    return _respond(request, OrderResponse.from_domain(order).model_dump(), "Order created")


@router.post("/{order_id}/status", response_model=ApiResponse)
async def transition_order(
    request: Request,
    order_id: str,
    body: TransitionRequest,
    controller: Annotated[WorkflowController, Depends(get_controller)],
) -> ApiResponse:
    result = await controller.transition(order_id, body.status, body.changed_by, body.notes)
    data = TransitionResponse(
        order=OrderResponse.from_domain(result.order),
        client_archived=result.client_archived,
        archive_error=result.archive_error.message if result.archive_error else None,
    )
    message = "Status updated"
    if result.archive_error:
        message = "Status updated, but archiving the client failed"
    return _respond(request, data.model_dump(), message)


@router.patch("/{order_id}", response_model=ApiResponse)
async def update_order_field(
    request: Request,
    order_id: str,
    body: FieldUpdateRequest,
    controller: Annotated[WorkflowController, Depends(get_controller)],
) -> ApiResponse:
    order = await controller.update_order_field(order_id, body.field, body.value)
    return _respond(request, OrderResponse.from_domain(order).model_dump(), "Order updated")


@router.delete("/{order_id}", response_model=ApiResponse)
async def delete_order(
    request: Request,
    order_id: str,
    controller: Annotated[WorkflowController, Depends(get_controller)],
    delete_client: bool = Query(False, description="Also delete the order's client"),
) -> ApiResponse:
    existed = await controller.delete_order(order_id, delete_client=delete_client)
    return _respond(request, {"order_id": order_id, "existed": existed}, "Order deleted")
