"""Unit tests for ta_order Pydantic schemas."""
import pytest
from pydantic import ValidationError

from src.ta_common.enums import ClientType, OrderStatus, Urgency
from src.ta_order.application.schemas import CreateOrderRequest, OrderResponse
from src.ta_order.domain.models import Order, OrderHistoryEntry


class TestCreateOrderRequest:
    def test_defaults(self) -> None:
        req = CreateOrderRequest()
        assert req.client_type == "person"
        assert req.urgency == "normal"
        assert req.service_type == "ترجمه"

    def test_digits_canonicalized(self) -> None:
        req = CreateOrderRequest(client_phone="۰۹۱۲", client_national_id="٠٠١٢", number_of_pages="۱۰")
        assert req.client_phone == "0912"
        assert req.client_national_id == "0012"
        assert req.number_of_pages == 10

    def test_blank_page_count_is_zero(self) -> None:
        assert CreateOrderRequest(number_of_pages=" ").number_of_pages == 0

    def test_unknown_client_type(self) -> None:
        with pytest.raises(ValidationError):
            CreateOrderRequest(client_type="agency")

    def test_unknown_urgency(self) -> None:
        with pytest.raises(ValidationError):
            CreateOrderRequest(urgency="asap")


class TestOrderResponse:
    def _order(self, status: str) -> Order:
        return Order(
            id="1", order_code="ORD1", client_id="2", client_code="CLI2", status=status,
            history=[OrderHistoryEntry("acceptance", "system", "2025-01-01", "سفارش ایجاد شد")],
        )

    def test_workflow_hints(self) -> None:
        resp = OrderResponse.from_domain(self._order("editing"))
        assert resp.rank == 4
        assert resp.next_status == "office"
        assert resp.previous_status == "translating"
        assert resp.allowed_statuses == ["translating", "editing", "office", "ready", "archived"]
        assert resp.history[0].changed_by == "system"

    def test_unknown_status_has_no_transitions(self) -> None:
        resp = OrderResponse.from_domain(self._order("on_hold"))
        assert resp.status == "on_hold"
        assert resp.rank is None
        assert resp.allowed_statuses == []


class TestEnums:
    """All enums inherit from (str, Enum); values are the backend's wire values."""

    def test_order_status_values(self) -> None:
        assert [s.value for s in OrderStatus] == [
            "acceptance", "completion", "translating", "editing", "office", "ready", "archived",
        ]
        assert isinstance(OrderStatus.READY, str)

    def test_client_type(self) -> None:
        assert ClientType.COMPANY == "company"

    def test_urgency(self) -> None:
        assert Urgency.VERY_URGENT == "very_urgent"
