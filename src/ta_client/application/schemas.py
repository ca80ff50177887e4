# src/ta_client/application/schemas.py
from pydantic import BaseModel

from src.ta_client.domain.models import Client, ClientProfile
from src.ta_client.domain.projection import STATUS_LABELS
from src.ta_order.application.schemas import OrderResponse


class ClientResponse(BaseModel):
    id: str
    code: str
    name: str
    first_name: str
    last_name: str
    company: str
    phone: str
    email: str
    address: str
    national_id: str
    client_type: str
    service_type: str
    status: str
    status_label: str
    translate_date: str
    delivery_date: str

    @classmethod
    def from_domain(cls, client: Client) -> "ClientResponse":
        return cls(
            id=client.id,
            code=client.code,
            name=client.name,
            first_name=client.first_name,
            last_name=client.last_name,
            company=client.company,
            phone=client.phone,
            email=client.email,
            address=client.address,
            national_id=client.national_id,
            client_type=client.client_type,
            service_type=client.service_type,
            status=client.status,
            status_label=STATUS_LABELS.get(client.status, client.status),
            translate_date=client.translate_date,
            delivery_date=client.delivery_date,
        )


class ClientListResponse(BaseModel):
    items: list[ClientResponse]
    total: int  # after search/filter, before pagination
    page: int
    per_page: int
    pages: int
    counts: dict[str, int]  # per status, before search/filter


class ClientProfileResponse(BaseModel):
    client: ClientResponse
    status: str
    orders: list[OrderResponse]
    total_orders: int
    total_pages: int
    total_price: float

    @classmethod
    def from_domain(cls, profile: ClientProfile) -> "ClientProfileResponse":
        return cls(
            client=ClientResponse.from_domain(profile.client),
            status=profile.status,
            orders=[OrderResponse.from_domain(o) for o in profile.orders],
            total_orders=len(profile.orders),
            total_pages=profile.total_pages,
            total_price=profile.total_price,
        )


class ClientFieldUpdateRequest(BaseModel):
    field: str
    value: str
