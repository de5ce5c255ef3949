"""Unit tests for the Cart aggregate."""

import pytest

from storefront.domain.exceptions import InvalidQuantity
from storefront.domain.model.cart import Cart
from storefront.domain.model.product import Product
from storefront.domain.model.value_objects import Money

A = Product(id="A", name="Tea", price=Money.of("100.00"), stock=10)
B = Product(id="B", name="Mug", price=Money.of("250.00"), stock=5)


def _cart() -> Cart:
    return Cart(customer_id="c1")


class TestCartAdd:

    def test_add_creates_line(self):
        cart = _cart()
        cart.add(A)
        assert cart.quantities() == {"A": 1}

    def test_add_merges_into_existing_line(self):
        cart = _cart()
        cart.add(A, 2)
        cart.add(A, 3)
        assert len(cart.lines) == 1
        assert cart.quantities() == {"A": 5}

    @pytest.mark.parametrize("qty", [0, -1])
    def test_add_rejects_non_positive_quantity(self, qty):
        cart = _cart()
        with pytest.raises(InvalidQuantity):
            cart.add(A, qty)
        assert cart.is_empty

    @pytest.mark.parametrize("qty", [True, 1.0, "2"])
    def test_add_rejects_non_integer_quantity(self, qty):
        cart = _cart()
        with pytest.raises(InvalidQuantity):
            cart.add(A, qty)
        assert cart.is_empty

    def test_add_does_not_check_stock(self):
        cart = _cart()
        cart.add(B, 50)
        assert cart.count() == 50


class TestCartUpdate:

    def test_update_adjusts_quantity(self):
        cart = _cart()
        cart.add(A, 2)
        cart.update_quantity("A", 1)
        assert cart.quantities() == {"A": 3}

    def test_update_to_zero_removes_line(self):
        cart = _cart()
        cart.add(A, 1)
        cart.update_quantity("A", -1)
        assert cart.is_empty
        assert cart.total() == Money.zero()

    def test_update_below_zero_removes_line(self):
        cart = _cart()
        cart.add(A, 1)
        cart.update_quantity("A", -5)
        assert "A" not in cart.quantities()

    def test_update_absent_product_is_noop(self):
        cart = _cart()
        cart.add(A, 1)
        cart.update_quantity("Z", 3)
        assert cart.quantities() == {"A": 1}


class TestCartTotals:

    def test_worked_example(self):
        cart = _cart()
        cart.add(A, 2)
        cart.add(B, 1)
        assert cart.total() == Money.of("450.00")
        assert cart.count() == 3

        cart.update_quantity("B", -1)
        assert cart.total() == Money.of("200.00")
        assert cart.count() == 2
        assert "B" not in cart.quantities()

    def test_empty_cart_totals(self):
        cart = _cart()
        assert cart.total() == Money.zero()
        assert cart.count() == 0

    def test_remove_and_clear(self):
        cart = _cart()
        cart.add(A, 1)
        cart.add(B, 1)
        cart.remove("A")
        assert cart.quantities() == {"B": 1}
        cart.remove("A")
        cart.clear()
        assert cart.is_empty

    def test_add_then_remove_restores_total(self):
        cart = _cart()
        cart.add(A, 2)
        before = cart.total()

        cart.add(B, 3)
        cart.remove("B")

        assert cart.total() == before
        assert cart.count() == 2
