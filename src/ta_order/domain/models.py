"""Order domain model: pure dataclass, no HTTP dependency."""
from dataclasses import dataclass, field

from src.ta_common.enums import ClientType, OrderStatus, Urgency

DEFAULT_SERVICE_TYPE = "ترجمه"  # "translation"


@dataclass
class OrderHistoryEntry:
    status: str
    changed_by: str
    changed_at: str
    notes: str = ""


@dataclass
class Order:
    id: str
    order_code: str
    # Client snapshot (denormalized, copied onto every order)
    client_id: str
    client_code: str
    client_name: str = ""
    client_first_name: str = ""
    client_last_name: str = ""
    client_company: str = ""
    client_phone: str = ""
    client_email: str = ""
    client_address: str = ""
    client_national_id: str = ""
    client_type: str = ClientType.PERSON.value
    # Service attributes
    service_type: str = DEFAULT_SERVICE_TYPE
    translation_type: str = ""  # certified / simple / sworn / notarized
    document_type: str = ""  # category/item catalog reference
    language_from: str = ""
    language_to: str = ""
    number_of_pages: int = 0
    urgency: str = Urgency.NORMAL.value
    special_instructions: str = ""
    # Workflow
    status: str = OrderStatus.ACCEPTANCE.value
    # Audit (backend timestamps kept verbatim)
    created_at: str = ""
    updated_at: str = ""
    history: list[OrderHistoryEntry] = field(default_factory=list)
    # Commercial
    total_price: float = 0.0

    @property
    def is_archived(self) -> bool:
        return self.status == OrderStatus.ARCHIVED.value


@dataclass
class OrderPage:
    """One page of GET /unified-orders."""

    orders: list[Order]
    total: int
    pages: int
    current_page: int
    per_page: int
