"""Backend payload ↔ Order mapping.

Decoding is tolerant: the backend omits meta fields it never stored and
sends numbers as strings, so every field degrades to a default instead of
raising.
"""
import json
import logging
from typing import Any

from src.ta_common.enums import ClientType, OrderStatus, Urgency
from src.ta_order.domain.models import DEFAULT_SERVICE_TYPE, Order, OrderHistoryEntry
from src.ta_order.domain.workflow import normalize_status

logger = logging.getLogger(__name__)


def _str(payload: dict[str, Any], key: str, default: str = "") -> str:
    value = payload.get(key)
    if value is None or value == "":
        return default
    return str(value)


def _int(payload: dict[str, Any], key: str) -> int:
    try:
        return int(float(str(payload.get(key) or 0)))
    except (ValueError, OverflowError):
        return 0


def _float(payload: dict[str, Any], key: str) -> float:
    try:
        return float(str(payload.get(key) or 0))
    except ValueError:
        return 0.0


def parse_history(raw: Any) -> list[OrderHistoryEntry]:
    """Decode order_history, stored by the backend as a JSON string."""
    if not raw:
        return []
    try:
        items = json.loads(raw) if isinstance(raw, str) else raw
    except json.JSONDecodeError:
        logger.warning("Unparsable order history: %.80s", raw)
        return []
    if not isinstance(items, list):
        return []
    return [
        OrderHistoryEntry(
            status=normalize_status(str(item.get("status", ""))),
            changed_by=str(item.get("changedBy") or item.get("changed_by") or ""),
            changed_at=str(item.get("changedAt") or item.get("changed_at") or ""),
            notes=str(item.get("notes") or ""),
        )
        for item in items
        if isinstance(item, dict)
    ]


def payload_to_order(payload: dict[str, Any]) -> Order:
    """Convert one unified-order record to an Order domain object."""
    return Order(
        id=_str(payload, "id"),
        order_code=_str(payload, "order_code"),
        client_id=_str(payload, "client_id"),
        client_code=_str(payload, "client_code"),
        client_name=_str(payload, "client_name"),
        client_first_name=_str(payload, "client_first_name"),
        client_last_name=_str(payload, "client_last_name"),
        client_company=_str(payload, "client_company"),
        client_phone=_str(payload, "client_phone"),
        client_email=_str(payload, "client_email"),
        client_address=_str(payload, "client_address"),
        client_national_id=_str(payload, "client_national_id"),
        client_type=_str(payload, "client_type", ClientType.PERSON.value),
        service_type=_str(payload, "service_type", DEFAULT_SERVICE_TYPE),
        translation_type=_str(payload, "translation_type"),
        document_type=_str(payload, "document_type"),
        language_from=_str(payload, "language_from"),
        language_to=_str(payload, "language_to"),
        number_of_pages=_int(payload, "number_of_pages"),
        urgency=_str(payload, "urgency", Urgency.NORMAL.value),
        special_instructions=_str(payload, "special_instructions"),
        status=normalize_status(_str(payload, "order_status", OrderStatus.ACCEPTANCE.value)),
        created_at=_str(payload, "created_at"),
        updated_at=_str(payload, "updated_at"),
        total_price=_float(payload, "total_price"),
        history=parse_history(payload.get("order_history")),
    )
