# src/ta_order/application/service.py
"""WorkflowController: validated, sequential mutations of orders.

Every mutation follows the same shape:
  1. validate locally (allow-lists, stage rules, required fields) and fail
     before any network call;
  2. perform the remote call(s), one at a time, under the store lock;
  3. only after the backend confirmed, patch the in-memory OrderStore with
     the submitted values.
Nothing is retried; a failure is final for that user action.
"""
import logging
from dataclasses import dataclass
from typing import Any

from config.settings import settings
from src.ta_common.code_generator import generate_client_code, generate_order_code
from src.ta_common.datetime_utils import utc_now_iso
from src.ta_common.digits import parse_positive_int, to_ascii_digits
from src.ta_common.enums import ClientType, OrderStatus, TranslationType, Urgency
from src.ta_common.errors import (
    BackendRejectedError,
    BackendUnavailableError,
    ClientArchiveFailedError,
    ClientNotFoundError,
    FieldNotEditableError,
    StatusUpdateFailedError,
    ValidationFailedError,
)
from src.ta_order.application.schemas import CreateOrderRequest
from src.ta_order.application.state import OrderStore
from src.ta_order.domain.fields import (
    CLIENT_ARCHIVE_FIELD,
    CLIENT_ARCHIVE_VALUE,
    CLIENT_ATTR_MAP,
    CLIENT_EDITABLE_FIELDS,
    CLIENT_FIELD_MAP,
    DIGIT_NORMALIZED_FIELDS,
    ORDER_ATTR_MAP,
    ORDER_EDITABLE_FIELDS,
    ORDER_FIELD_MAP,
)
from src.ta_order.domain.models import Order, OrderHistoryEntry
from src.ta_order.domain.repository import OrderBackendProtocol
from src.ta_order.domain.workflow import ARCHIVE_TRIGGER_STATUS, INITIAL_STATUS, check_transition

logger = logging.getLogger(__name__)

_CREATED_NOTE = "سفارش ایجاد شد"  # "order created"
_NAME_FIELDS = frozenset({"firstName", "lastName"})
_VALID_URGENCIES = frozenset(u.value for u in Urgency)
_VALID_TRANSLATION_TYPES = frozenset(t.value for t in TranslationType)


@dataclass
class TransitionResult:
    order: Order
    client_archived: bool = False
    # Set when the secondary archive call failed; the transition itself stands
    archive_error: ClientArchiveFailedError | None = None


def _canonical_order_value(field: str, value: Any) -> Any:
    text = to_ascii_digits(str(value)).strip() if field in DIGIT_NORMALIZED_FIELDS else str(value)
    if field == "numberOfPages":
        pages = parse_positive_int(text)
        if pages is None:
            raise ValidationFailedError("number of pages must be a positive integer")
        return pages
    if field == "urgency" and text not in _VALID_URGENCIES:
        raise ValidationFailedError(f"unknown urgency: {text}")
    if field == "translationType" and text not in _VALID_TRANSLATION_TYPES:
        raise ValidationFailedError(f"unknown translation type: {text}")
    return text


def _canonical_client_value(field: str, value: Any) -> str:
    text = str(value)
    if field in DIGIT_NORMALIZED_FIELDS:
        return to_ascii_digits(text).strip()
    return text


def validate_create_request(req: CreateOrderRequest) -> None:
    """Wizard checks, run before any network call."""
    if req.client_type == ClientType.COMPANY.value:
        if not req.client_company.strip():
            raise ValidationFailedError("company name is required")
    elif not (req.client_name.strip() or req.client_first_name.strip() or req.client_last_name.strip()):
        raise ValidationFailedError("client name is required")
    if not req.translation_type.strip():
        raise ValidationFailedError("translation type is required")
    if req.translation_type not in _VALID_TRANSLATION_TYPES:
        raise ValidationFailedError(f"unknown translation type: {req.translation_type}")
    if not req.document_type.strip():
        raise ValidationFailedError("document type is required")
    if not req.language_from.strip():
        raise ValidationFailedError("source language is required")
    if not req.language_to.strip():
        raise ValidationFailedError("target language is required")
    if req.number_of_pages <= 0:
        raise ValidationFailedError("number of pages must be greater than zero")


def _client_name_for(req: CreateOrderRequest) -> str:
    if req.client_name.strip():
        return req.client_name.strip()
    if req.client_type == ClientType.COMPANY.value:
        return req.client_company.strip()
    return f"{req.client_first_name} {req.client_last_name}".strip()


class WorkflowController:
    def __init__(
        self,
        store: OrderStore,
        backend: OrderBackendProtocol,
        changed_by: str | None = None,
    ) -> None:
        self._store = store
        self._backend = backend
        self._changed_by = changed_by or settings.DEFAULT_CHANGED_BY

    # --- reads ---

    async def load(self) -> list[Order]:
        """Reload the full order list from the backend."""
        return await self._store.reload(self._backend)

    async def list_orders(
        self, status: str | None = None, client_id: str | None = None
    ) -> list[Order]:
        orders = await self.load()
        if status:
            orders = [o for o in orders if o.status == status]
        if client_id:
            orders = [o for o in orders if o.client_id == client_id]
        return orders

    async def get_order(self, order_id: str) -> Order:
        async with self._store.lock:
            await self._store.ensure_loaded(self._backend)
            if self._store.find(order_id) is None:
                # Possibly created elsewhere since the last load
                await self._store.refresh(self._backend)
            return self._store.get(order_id)

    # --- workflow ---

    async def transition(
        self,
        order_id: str,
        target: str,
        changed_by: str | None = None,
        notes: str = "",
    ) -> TransitionResult:
        async with self._store.lock:
            await self._store.ensure_loaded(self._backend)
            order = self._store.get(order_id)
            target_status = check_transition(order.status, target)

            try:
                await self._backend.update_order_status(
                    order.id, target_status.value, changed_by or self._changed_by, notes
                )
            except (BackendUnavailableError, BackendRejectedError) as exc:
                logger.error("Order %s: %s → %s failed: %s",
                             order.id, order.status, target_status.value, exc.message)
                raise StatusUpdateFailedError(order.id, exc.detail) from exc

            logger.info("Order %s: %s → %s", order.id, order.status, target_status.value)
            order.status = target_status.value
            order.updated_at = utc_now_iso()

            result = TransitionResult(order=order)
            if target_status == ARCHIVE_TRIGGER_STATUS:
                try:
                    await self._backend.update_client_field(
                        order.client_id, CLIENT_ARCHIVE_FIELD, CLIENT_ARCHIVE_VALUE
                    )
                    result.client_archived = True
                except (BackendUnavailableError, BackendRejectedError) as exc:
                    result.archive_error = ClientArchiveFailedError(order.client_id, exc.detail)
                    logger.warning("Order %s is %s but %s",
                                   order.id, target_status.value, result.archive_error.message)
            return result

    # --- field edits ---

    async def update_order_field(self, order_id: str, field: str, value: Any) -> Order:
        if field not in ORDER_EDITABLE_FIELDS:
            raise FieldNotEditableError(field)
        canonical = _canonical_order_value(field, value)

        async with self._store.lock:
            await self._store.ensure_loaded(self._backend)
            order = self._store.get(order_id)
            await self._backend.update_order_fields(order.id, {ORDER_FIELD_MAP[field]: canonical})
            # Local state takes the submitted value, not the backend's echo
            setattr(order, ORDER_ATTR_MAP[field], canonical)
            order.updated_at = utc_now_iso()
            return order

    async def update_client_info(self, client_id: str, field: str, value: Any) -> list[Order]:
        """Patch one client field remotely, then every local order snapshot of it."""
        if field not in CLIENT_EDITABLE_FIELDS:
            raise FieldNotEditableError(field)
        canonical = _canonical_client_value(field, value)

        async with self._store.lock:
            await self._store.ensure_loaded(self._backend)
            orders = self._store.orders_for_client(client_id)
            if not orders:
                raise ClientNotFoundError(client_id)

            await self._backend.update_client_field(client_id, CLIENT_FIELD_MAP[field], canonical)
            attr = CLIENT_ATTR_MAP[field]
            for order in orders:
                setattr(order, attr, canonical)
                if field in _NAME_FIELDS and order.client_type == ClientType.PERSON.value:
                    order.client_name = f"{order.client_first_name} {order.client_last_name}".strip()
            logger.info("Client %s: %s updated on %d orders", client_id, field, len(orders))
            return orders

    # --- create / delete ---

    async def create_order(self, req: CreateOrderRequest, changed_by: str | None = None) -> Order:
        validate_create_request(req)
        client_code = req.client_code or generate_client_code()
        order_code = req.order_code or generate_order_code()
        client_name = _client_name_for(req)

        payload: dict[str, Any] = {
            "orderCode": order_code,
            "clientCode": client_code,
            "clientName": client_name,
            "clientFirstName": req.client_first_name,
            "clientLastName": req.client_last_name,
            "clientCompany": req.client_company,
            "clientPhone": req.client_phone,
            "clientEmail": req.client_email,
            "clientAddress": req.client_address,
            "clientNationalId": req.client_national_id,
            "clientType": req.client_type,
            "serviceType": req.service_type,
            "translationType": req.translation_type,
            "documentType": req.document_type,
            "languageFrom": req.language_from,
            "languageTo": req.language_to,
            "numberOfPages": req.number_of_pages,
            "urgency": req.urgency,
            "specialInstructions": req.special_instructions,
            "totalPrice": req.total_price,
        }
        if req.client_id:
            payload["clientId"] = req.client_id

        async with self._store.lock:
            created = await self._backend.create_order(payload)
            now = utc_now_iso()
            order = Order(
                id=created["order_id"],
                order_code=created["order_code"] or order_code,
                client_id=created["client_id"] or (req.client_id or ""),
                client_code=created["client_code"] or client_code,
                client_name=client_name,
                client_first_name=req.client_first_name,
                client_last_name=req.client_last_name,
                client_company=req.client_company,
                client_phone=req.client_phone,
                client_email=req.client_email,
                client_address=req.client_address,
                client_national_id=req.client_national_id,
                client_type=req.client_type,
                service_type=req.service_type,
                translation_type=req.translation_type,
                document_type=req.document_type,
                language_from=req.language_from,
                language_to=req.language_to,
                number_of_pages=req.number_of_pages,
                urgency=req.urgency,
                special_instructions=req.special_instructions,
                status=INITIAL_STATUS.value,
                created_at=now,
                updated_at=now,
                total_price=req.total_price,
                history=[
                    OrderHistoryEntry(
                        status=OrderStatus.ACCEPTANCE.value,
                        changed_by=changed_by or self._changed_by,
                        changed_at=now,
                        notes=_CREATED_NOTE,
                    )
                ],
            )
            if self._store.loaded:
                self._store.add(order)
            logger.info("Created order %s (%s) for client %s",
                        order.id, order.order_code, order.client_code)
            return order

    async def delete_order(self, order_id: str, delete_client: bool = False) -> bool:
        """Delete one order; returns False if it was already gone."""
        async with self._store.lock:
            local = self._store.find(order_id)
            deleted = await self._backend.delete_order(order_id, delete_client=delete_client)
            self._store.remove(order_id)
            if delete_client and local is not None:
                self._store.remove_client(local.client_id)
            return deleted

    async def delete_client(self, client_id: str) -> bool:
        """Delete the client record and drop its orders from local state."""
        async with self._store.lock:
            deleted = await self._backend.delete_client(client_id)
            removed = self._store.remove_client(client_id)
            logger.info("Client %s deleted (existed=%s), %d local orders dropped",
                        client_id, deleted, removed)
            return deleted
