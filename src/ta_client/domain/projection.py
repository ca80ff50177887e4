"""Client projection engine.

Clients are not stored anywhere: every order carries a denormalized client
snapshot, and the client views are recomputed from the full order list.

Policies (deterministic, order-sensitive; callers must pass the backend
order list unchanged):
  * dedup by client id keeps the FIRST occurrence in input order;
  * the active projection drops clients whose retained order is archived;
  * the archived projection filters archived orders BEFORE dedup;
  * profile fields take the FIRST non-empty value scanning in list order.
"""

import math
from collections.abc import Iterable, Sequence
from typing import TypeVar

from src.ta_client.domain.models import UNKNOWN_CLIENT_NAME, Client, ClientProfile
from src.ta_common.digits import to_ascii_digits
from src.ta_common.enums import OrderStatus, TranslationType
from src.ta_order.domain.models import Order
from src.ta_order.domain.workflow import STAGES

T = TypeVar("T")

# Order stage → client-facing status
CLIENT_STATUS_BY_ORDER_STATUS: dict[str, str] = {
    **{stage.value: stage.value for stage in STAGES},
    "translation": OrderStatus.TRANSLATING.value,
}

STATUS_LABELS: dict[str, str] = {
    "acceptance": "پذیرش",
    "completion": "تکمیل اطلاعات",
    "translating": "ترجمه",
    "editing": "ویرایش",
    "office": "امور دفتری",
    "ready": "آماده تحویل",
    "archived": "بایگانی",
}

TRANSLATION_TYPE_LABELS: dict[str, str] = {
    TranslationType.CERTIFIED.value: "ترجمه رسمی",
    TranslationType.SIMPLE.value: "ترجمه ساده",
    TranslationType.SWORN.value: "ترجمه سوگند",
    TranslationType.NOTARIZED.value: "ترجمه محضری",
}
_DEFAULT_SERVICE_LABEL = TRANSLATION_TYPE_LABELS[TranslationType.CERTIFIED.value]

# Profile field → Order attribute scanned for the first non-empty value
_PROFILE_FIELDS: dict[str, str] = {
    "id": "client_id",
    "first_name": "client_first_name",
    "last_name": "client_last_name",
    "company": "client_company",
    "phone": "client_phone",
    "email": "client_email",
    "address": "client_address",
    "national_id": "client_national_id",
}

_IDENTIFIER_FIELDS = (
    "client_code",
    "client_name",
    "client_first_name",
    "client_last_name",
    "client_company",
)


def display_name(company: str, first_name: str, last_name: str, name: str) -> str:
    """company, else "first last", else name, else the unknown marker."""
    if company.strip():
        return company.strip()
    full = f"{first_name} {last_name}".strip()
    if full:
        return full
    if name.strip():
        return name.strip()
    return UNKNOWN_CLIENT_NAME


def client_status(order_status: str) -> str:
    return CLIENT_STATUS_BY_ORDER_STATUS.get(order_status, order_status)


def service_label(translation_type: str) -> str:
    if not translation_type:
        return _DEFAULT_SERVICE_LABEL
    return TRANSLATION_TYPE_LABELS.get(translation_type, translation_type)


def client_from_order(order: Order) -> Client:
    return Client(
        id=order.client_id,
        code=order.client_code,
        name=display_name(
            order.client_company,
            order.client_first_name,
            order.client_last_name,
            order.client_name,
        ),
        first_name=order.client_first_name,
        last_name=order.client_last_name,
        company=order.client_company,
        phone=order.client_phone,
        email=order.client_email,
        address=order.client_address,
        national_id=order.client_national_id,
        client_type=order.client_type,
        service_type=service_label(order.translation_type),
        status=client_status(order.status),
        translate_date=order.created_at,
        delivery_date=order.updated_at if order.status == OrderStatus.READY.value else "",
    )


def dedup_by_client_id(clients: Iterable[Client]) -> list[Client]:
    """Keep the first client per id, preserving input order."""
    seen: set[str] = set()
    unique: list[Client] = []
    for client in clients:
        if client.id in seen:
            continue
        seen.add(client.id)
        unique.append(client)
    return unique


def project_clients(orders: Sequence[Order]) -> list[Client]:
    """Active clients: dedup all orders, then drop clients retained as archived."""
    retained = dedup_by_client_id(client_from_order(o) for o in orders)
    return [c for c in retained if c.status != OrderStatus.ARCHIVED.value]


def project_archived_clients(orders: Sequence[Order]) -> list[Client]:
    """Archived clients: filter archived orders first, then dedup."""
    return dedup_by_client_id(client_from_order(o) for o in orders if o.is_archived)


def find_profile_orders(orders: Sequence[Order], identifier: str) -> list[Order]:
    """Two-phase lookup: fuzzy first match, then exact canonical-code match.

    Phase 1 finds the first order where any identifying field equals the
    identifier exactly. Phase 2 collects every order with that order's code,
    so a name shared by two clients never merges their orders.
    """
    if not identifier:
        return []
    first = next(
        (o for o in orders if any(getattr(o, f) == identifier for f in _IDENTIFIER_FIELDS)),
        None,
    )
    if first is None:
        return []
    if not first.client_code:
        return [first]
    return [o for o in orders if o.client_code == first.client_code]


def _first_non_empty(orders: Sequence[Order], attr: str) -> str:
    for order in orders:
        value = getattr(order, attr)
        if value:
            return value
    return ""


def project_client_profile(orders: Sequence[Order], identifier: str) -> ClientProfile | None:
    matched = find_profile_orders(orders, identifier)
    if not matched:
        return None

    client = client_from_order(matched[0])
    for profile_field, attr in _PROFILE_FIELDS.items():
        setattr(client, profile_field, _first_non_empty(matched, attr))
    client.name = display_name(
        client.company,
        client.first_name,
        client.last_name,
        _first_non_empty(matched, "client_name"),
    )
    return ClientProfile(client=client, orders=list(matched))


# --- search / filter helpers ---

def search_clients(clients: Iterable[Client], term: str) -> list[Client]:
    """Case-insensitive substring search; Persian and ASCII digits match alike."""
    needle = to_ascii_digits(term).strip().lower()
    if not needle:
        return list(clients)

    def haystack(c: Client) -> str:
        parts = (
            c.name, c.code, c.service_type, c.phone, c.email,
            c.national_id, STATUS_LABELS.get(c.status, c.status),
        )
        return to_ascii_digits(" ".join(parts)).lower()

    return [c for c in clients if needle in haystack(c)]


def filter_by_status(clients: Iterable[Client], status: str | None) -> list[Client]:
    if not status:
        return list(clients)
    wanted = client_status(status)
    return [c for c in clients if c.status == wanted]


def count_by_status(clients: Iterable[Client]) -> dict[str, int]:
    counts = {stage.value: 0 for stage in STAGES}
    for c in clients:
        if c.status in counts:
            counts[c.status] += 1
    return counts


def paginate(items: Sequence[T], page: int, per_page: int) -> tuple[list[T], int]:
    """Slice one 1-based page; returns (page_items, total_pages)."""
    total_pages = max(1, math.ceil(len(items) / per_page))
    start = (max(page, 1) - 1) * per_page
    return list(items[start:start + per_page]), total_pages
