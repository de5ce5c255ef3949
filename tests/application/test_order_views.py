"""Tests for the role-scoped order views and admin statistics."""

from datetime import datetime, timedelta, timezone

import pytest

from storefront.application.order_views import (
    OrderStatsHandler,
    OrderViewsHandler,
    ShowOrderHandler,
)
from storefront.domain.exceptions import OrderNotFound, PermissionDenied
from storefront.domain.model.order import Order, OrderLine, OrderStatus, PaymentMethod
from storefront.domain.model.principal import Principal
from storefront.domain.model.value_objects import Money, Quantity
from tests.fakes import FakeOrderRepository

T0 = datetime(2024, 5, 1, 9, 0, tzinfo=timezone.utc)


def _place(
    repo: FakeOrderRepository,
    customer_id: str,
    status: OrderStatus = OrderStatus.PENDING,
    price: str = "100.00",
    minutes: int = 0,
) -> Order:
    order = Order.place(
        customer_id=customer_id,
        lines=[OrderLine("A", "Tea", Quantity(1), Money.of(price))],
        delivery_address="12 MG Road",
        payment_method=PaymentMethod.CASH_ON_DELIVERY,
    )
    order.created_at = T0 + timedelta(minutes=minutes)
    order = repo.create(order)
    if status != OrderStatus.PENDING:
        order = repo.update_status(order.id, status, OrderStatus.PENDING)
    return order


@pytest.fixture
def repo() -> FakeOrderRepository:
    repo = FakeOrderRepository()
    _place(repo, "c1", OrderStatus.PENDING, minutes=0)
    _place(repo, "c2", OrderStatus.PROCESSING, minutes=1)
    _place(repo, "c1", OrderStatus.DELIVERED, price="250.00", minutes=2)
    _place(repo, "c3", OrderStatus.CANCELLED, price="999.00", minutes=3)
    _place(repo, "c2", OrderStatus.IN_TRANSIT, minutes=4)
    return repo


class TestOrderViews:

    def test_customer_sees_only_own_orders(self, repo):
        orders = OrderViewsHandler(repo).handle(Principal.customer("c1"))
        assert [o.customer_id for o in orders] == ["c1", "c1"]

    def test_customer_with_no_orders(self, repo):
        assert OrderViewsHandler(repo).handle(Principal.customer("nobody")) == []

    def test_delivery_sees_active_orders(self, repo):
        orders = OrderViewsHandler(repo).handle(Principal.delivery("d1"))
        assert [o.status for o in orders] == [
            OrderStatus.IN_TRANSIT,
            OrderStatus.PROCESSING,
            OrderStatus.PENDING,
        ]

    def test_admin_sees_everything_newest_first(self, repo):
        orders = OrderViewsHandler(repo).handle(Principal.admin("a1"))
        assert [o.id for o in orders] == [5, 4, 3, 2, 1]


class TestShowOrder:

    def test_customer_can_open_own_order(self, repo):
        order = ShowOrderHandler(repo).handle(Principal.customer("c1"), 1)
        assert order.id == 1

    def test_other_customers_order_looks_missing(self, repo):
        with pytest.raises(OrderNotFound):
            ShowOrderHandler(repo).handle(Principal.customer("c1"), 2)

    def test_rider_cannot_open_closed_order(self, repo):
        with pytest.raises(OrderNotFound):
            ShowOrderHandler(repo).handle(Principal.delivery("d1"), 3)

    def test_unknown_order(self, repo):
        with pytest.raises(OrderNotFound):
            ShowOrderHandler(repo).handle(Principal.admin("a1"), 42)


class TestOrderStats:

    def test_counts_and_revenue(self, repo):
        stats = OrderStatsHandler(repo).handle(Principal.admin("a1"))

        assert stats.total_orders == 5
        assert stats.total_revenue == "INR 550.00"
        assert stats.by_status == {
            "pending": 1,
            "processing": 1,
            "in_transit": 1,
            "delivered": 1,
            "cancelled": 1,
        }

    def test_empty_store(self):
        stats = OrderStatsHandler(FakeOrderRepository()).handle(Principal.admin("a1"))
        assert stats.total_orders == 0
        assert stats.total_revenue == "INR 0.00"

    @pytest.mark.parametrize("principal", [Principal.customer("c1"), Principal.delivery("d1")])
    def test_admin_only(self, repo, principal):
        with pytest.raises(PermissionDenied):
            OrderStatsHandler(repo).handle(principal)
