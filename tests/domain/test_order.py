"""Unit tests for the Order aggregate."""

from datetime import datetime, timezone

import pytest

from storefront.domain.exceptions import MissingAddress, ValidationError
from storefront.domain.model.order import (
    ACTIVE_STATUSES,
    Order,
    OrderLine,
    OrderStatus,
    PaymentMethod,
)
from storefront.domain.model.value_objects import Money, Quantity


def _line(product_id: str = "A", qty: int = 2, price: str = "100.00") -> OrderLine:
    return OrderLine(
        product_id=product_id,
        product_name=f"Product {product_id}",
        quantity=Quantity(qty),
        unit_price=Money.of(price),
    )


def _cod_order(**overrides) -> Order:
    kwargs = dict(
        customer_id="c1",
        lines=[_line("A", 2, "100.00"), _line("B", 1, "250.00")],
        delivery_address="12 MG Road, Pune",
        payment_method=PaymentMethod.CASH_ON_DELIVERY,
    )
    kwargs.update(overrides)
    return Order.place(**kwargs)


class TestOrderPlace:

    def test_total_is_sum_of_line_totals(self):
        order = _cod_order()
        assert order.total == Money.of("450.00")
        assert order.item_count == 3

    def test_new_order_is_pending_without_id(self):
        order = _cod_order()
        assert order.status == OrderStatus.PENDING
        assert order.id is None
        assert order.order_number is None

    def test_address_is_trimmed(self):
        order = _cod_order(delivery_address="  12 MG Road  ")
        assert order.delivery_address == "12 MG Road"

    @pytest.mark.parametrize("address", ["", "   "])
    def test_blank_address_rejected(self, address):
        with pytest.raises(MissingAddress):
            _cod_order(delivery_address=address)

    def test_no_lines_rejected(self):
        with pytest.raises(ValidationError, match="at least one line"):
            _cod_order(lines=[])

    def test_gateway_order_needs_reference(self):
        with pytest.raises(ValidationError, match="payment reference"):
            _cod_order(payment_method=PaymentMethod.GATEWAY)

    def test_gateway_order_keeps_reference(self):
        order = _cod_order(payment_method=PaymentMethod.GATEWAY, payment_reference="pay_123")
        assert order.payment_reference == "pay_123"

    def test_cod_order_rejects_reference(self):
        with pytest.raises(ValidationError, match="no payment reference"):
            _cod_order(payment_reference="pay_123")


class TestOrderStatus:

    def test_with_status_returns_copy(self):
        order = _cod_order()
        at = datetime(2024, 5, 1, tzinfo=timezone.utc)
        moved = order.with_status(OrderStatus.PROCESSING, at=at)
        assert moved.status == OrderStatus.PROCESSING
        assert moved.updated_at == at
        assert order.status == OrderStatus.PENDING
        assert moved.total == order.total

    def test_terminal_statuses(self):
        assert OrderStatus.DELIVERED.is_terminal
        assert OrderStatus.CANCELLED.is_terminal
        assert ACTIVE_STATUSES == {
            OrderStatus.PENDING,
            OrderStatus.PROCESSING,
            OrderStatus.IN_TRANSIT,
        }

    def test_line_price_is_a_snapshot(self):
        line = _line("A", 3, "15.00")
        assert line.line_total == Money.of("45.00")
