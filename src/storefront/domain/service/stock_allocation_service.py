"""Domain service: Stock Allocation.

Turns requested quantities into priced order lines and takes the stock
for them.  It lives in the domain layer because "an order never
oversells and always carries the price at the moment of purchase" is a
core business rule, not just orchestration.

The two-phase approach (validate-then-mutate) ensures we never leave
stock partially taken if one product fails validation.
"""

from __future__ import annotations

from storefront.domain.exceptions import EntityNotFoundError, InsufficientStock
from storefront.domain.model.order import OrderLine
from storefront.domain.model.value_objects import Quantity
from storefront.domain.repository.product_repository import ProductRepository


class StockAllocationService:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def allocate(self, quantities: dict[str, int]) -> list[OrderLine]:
        """Snapshot current prices and take stock for every product.

        Uses a two-phase approach:
          Phase 1: check that every product still exists and has
                   enough stock. Fails fast before any mutation.
          Phase 2: take stock through the catalog, which re-checks under
                   its own lock so concurrent checkouts cannot oversell.
        """
        lines = self.price_lines(quantities)

        # Phase 2: take stock atomically
        self._product_repo.decrement_stock(quantities)
        return lines

    def price_lines(self, quantities: dict[str, int]) -> list[OrderLine]:
        """Phase 1 only: priced lines for ``quantities``, without touching stock."""
        lines: list[OrderLine] = []

        for product_id, qty in quantities.items():
            product = self._product_repo.get_by_id(product_id)
            if product is None:
                raise EntityNotFoundError(f"Product with ID '{product_id}' no longer exists")
            if not product.has_stock_for(qty):
                raise InsufficientStock(
                    f"Insufficient stock for {product.name} "
                    f"(need {qty}, have {product.stock} available)"
                )
            lines.append(
                OrderLine(
                    product_id=product.id,
                    product_name=product.name,
                    quantity=Quantity(qty),
                    unit_price=product.price,  # <-- price snapshot
                )
            )
        return lines

    def release(self, quantities: dict[str, int]) -> None:
        """Give back stock taken by ``allocate`` when the order could not be stored."""
        self._product_repo.restock(quantities)
