"""Client domain models: projections of orders, never stored."""

from dataclasses import dataclass, field

from src.ta_order.domain.models import Order

UNKNOWN_CLIENT_NAME = "نامشخص"  # "unknown"


@dataclass
class Client:
    """One client identity as seen through a single order's snapshot."""

    id: str
    code: str
    name: str  # display name
    first_name: str = ""
    last_name: str = ""
    company: str = ""
    phone: str = ""
    email: str = ""
    address: str = ""
    national_id: str = ""
    client_type: str = "person"
    service_type: str = ""  # label of the order's translation type
    status: str = "acceptance"  # client-facing status
    translate_date: str = ""
    delivery_date: str = ""


@dataclass
class ClientProfile:
    """A client aggregated over every order carrying its canonical code.

    orders keeps backend order (most recent first); status reads orders[0].
    """

    client: Client
    orders: list[Order] = field(default_factory=list)

    @property
    def status(self) -> str:
        return self.client.status

    @property
    def total_pages(self) -> int:
        return sum(o.number_of_pages for o in self.orders)

    @property
    def total_price(self) -> float:
        return sum(o.total_price for o in self.orders)
