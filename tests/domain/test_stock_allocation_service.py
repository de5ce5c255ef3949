"""Unit tests for StockAllocationService."""

import pytest

from storefront.domain.exceptions import EntityNotFoundError, InsufficientStock
from storefront.domain.model.product import Product
from storefront.domain.model.value_objects import Money
from storefront.domain.service.stock_allocation_service import StockAllocationService
from tests.fakes import FakeProductRepository


def _setup() -> tuple[StockAllocationService, FakeProductRepository]:
    repo = FakeProductRepository([
        Product(id="A", name="Tea", price=Money.of("100.00"), stock=10),
        Product(id="B", name="Mug", price=Money.of("250.00"), stock=1),
    ])
    return StockAllocationService(repo), repo


class TestAllocate:

    def test_takes_stock_and_prices_lines(self):
        svc, repo = _setup()
        lines = svc.allocate({"A": 2, "B": 1})

        assert [(l.product_id, l.quantity.value) for l in lines] == [("A", 2), ("B", 1)]
        assert lines[0].unit_price == Money.of("100.00")
        assert repo.stock_of("A") == 8
        assert repo.stock_of("B") == 0

    def test_insufficient_stock_changes_nothing(self):
        svc, repo = _setup()
        with pytest.raises(InsufficientStock, match="Mug"):
            svc.allocate({"A": 2, "B": 2})
        assert repo.stock_of("A") == 10
        assert repo.stock_of("B") == 1

    def test_unknown_product_rejected(self):
        svc, repo = _setup()
        with pytest.raises(EntityNotFoundError, match="Z"):
            svc.allocate({"A": 1, "Z": 1})
        assert repo.stock_of("A") == 10

    def test_price_is_catalog_price_at_allocation(self):
        svc, repo = _setup()
        repo.save(Product(id="A", name="Tea", price=Money.of("120.00"), stock=10))
        lines = svc.allocate({"A": 1})
        assert lines[0].unit_price == Money.of("120.00")


class TestPriceLinesAndRelease:

    def test_price_lines_leaves_stock_alone(self):
        svc, repo = _setup()
        svc.price_lines({"A": 5})
        assert repo.stock_of("A") == 10

    def test_release_puts_stock_back(self):
        svc, repo = _setup()
        svc.allocate({"A": 3})
        svc.release({"A": 3})
        assert repo.stock_of("A") == 10
