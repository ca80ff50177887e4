# src/ta_order/application/schemas.py
from typing import Literal

from pydantic import BaseModel, field_validator

from src.ta_common.digits import to_ascii_digits
from src.ta_common.errors import InvalidStatusError
from src.ta_order.domain import workflow
from src.ta_order.domain.models import DEFAULT_SERVICE_TYPE, Order, OrderHistoryEntry


class CreateOrderRequest(BaseModel):
    """Order wizard submission. Required-field checks run in the controller
    so that direct callers get the same ValidationFailedError as the API."""

    order_code: str | None = None
    client_code: str | None = None
    client_id: str | None = None  # set when ordering for an existing client
    client_type: Literal["person", "company"] = "person"
    client_name: str = ""
    client_first_name: str = ""
    client_last_name: str = ""
    client_company: str = ""
    client_phone: str = ""
    client_email: str = ""
    client_address: str = ""
    client_national_id: str = ""
    service_type: str = DEFAULT_SERVICE_TYPE
    # Blank is left to the controller's required-field check
    translation_type: Literal["", "certified", "simple", "sworn", "notarized"] = ""
    document_type: str = ""
    language_from: str = ""
    language_to: str = ""
    number_of_pages: int = 0
    urgency: Literal["normal", "urgent", "very_urgent"] = "normal"
    special_instructions: str = ""
    total_price: float = 0.0

    @field_validator("client_phone", "client_national_id", mode="before")
    @classmethod
    def ascii_digits(cls, v: object) -> object:
        return to_ascii_digits(v) if isinstance(v, str) else v

    @field_validator("number_of_pages", mode="before")
    @classmethod
    def ascii_page_count(cls, v: object) -> object:
        if isinstance(v, str):
            text = to_ascii_digits(v).strip()
            return text or 0
        return v


class TransitionRequest(BaseModel):
    status: str
    changed_by: str | None = None
    notes: str = ""


class FieldUpdateRequest(BaseModel):
    field: str
    value: str | int


class OrderHistoryResponse(BaseModel):
    status: str
    changed_by: str
    changed_at: str
    notes: str

    @classmethod
    def from_domain(cls, entry: OrderHistoryEntry) -> "OrderHistoryResponse":
        return cls(
            status=entry.status,
            changed_by=entry.changed_by,
            changed_at=entry.changed_at,
            notes=entry.notes,
        )


class OrderResponse(BaseModel):
    id: str
    order_code: str
    client_id: str
    client_code: str
    client_type: str
    client_name: str
    client_first_name: str
    client_last_name: str
    client_company: str
    client_phone: str
    client_email: str
    client_address: str
    client_national_id: str
    service_type: str
    translation_type: str
    document_type: str
    language_from: str
    language_to: str
    number_of_pages: int
    urgency: str
    special_instructions: str
    status: str
    rank: int | None
    allowed_statuses: list[str]
    next_status: str | None
    previous_status: str | None
    created_at: str
    updated_at: str
    total_price: float
    history: list[OrderHistoryResponse]

    @classmethod
    def from_domain(cls, order: Order) -> "OrderResponse":
        try:
            rank = workflow.rank(order.status)
            allowed = [s.value for s in workflow.allowed_targets(order.status)]
            nxt = workflow.next_stage(order.status)
            prev = workflow.previous_stage(order.status)
        except InvalidStatusError:
            # Unknown stage from the backend: show it, offer no transitions
            rank, allowed, nxt, prev = None, [], None, None
        return cls(
            id=order.id,
            order_code=order.order_code,
            client_id=order.client_id,
            client_code=order.client_code,
            client_type=order.client_type,
            client_name=order.client_name,
            client_first_name=order.client_first_name,
            client_last_name=order.client_last_name,
            client_company=order.client_company,
            client_phone=order.client_phone,
            client_email=order.client_email,
            client_address=order.client_address,
            client_national_id=order.client_national_id,
            service_type=order.service_type,
            translation_type=order.translation_type,
            document_type=order.document_type,
            language_from=order.language_from,
            language_to=order.language_to,
            number_of_pages=order.number_of_pages,
            urgency=order.urgency,
            special_instructions=order.special_instructions,
            status=order.status,
            rank=rank,
            allowed_statuses=allowed,
            next_status=nxt.value if nxt else None,
            previous_status=prev.value if prev else None,
            created_at=order.created_at,
            updated_at=order.updated_at,
            total_price=order.total_price,
            history=[OrderHistoryResponse.from_domain(h) for h in order.history],
        )


class OrderListResponse(BaseModel):
    items: list[OrderResponse]
    total: int


class TransitionResponse(BaseModel):
    order: OrderResponse
    client_archived: bool
    archive_error: str | None = None
