"""Cart aggregate: the customer's pending selection.

A cart lives only for the duration of a customer's session. It holds at
most one line per product and never keeps a line at quantity zero.
Totals are recomputed on every call so they can never go stale.

Stock is not checked here. The checkout handler checks it against the
catalog at checkout time.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from storefront.domain.exceptions import InvalidQuantity
from storefront.domain.model.product import Product
from storefront.domain.model.value_objects import Money, Quantity


@dataclass
class CartLine:
    product: Product
    quantity: Quantity

    @property
    def line_total(self) -> Money:
        return self.product.price * self.quantity.value


@dataclass
class Cart:
    """Lines keyed by product id. Insertion order is kept for display only."""

    customer_id: str
    _lines: dict[str, CartLine] = field(default_factory=dict)

    # --- Mutations ------------------------------------------------------------

    def add(self, product: Product, qty: int = 1) -> None:
        """Add ``qty`` units of ``product``, merging into an existing line."""
        if isinstance(qty, bool) or not isinstance(qty, int) or qty < 1:
            raise InvalidQuantity(f"Cannot add {qty!r} of {product.name}; quantity must be at least 1")

        line = self._lines.get(product.id)
        if line is None:
            self._lines[product.id] = CartLine(product=product, quantity=Quantity(qty))
        else:
            line.quantity = line.quantity + qty

    def update_quantity(self, product_id: str, delta: int) -> None:
        """Adjust a line by ``delta``; a line that drops to zero or below is removed."""
        line = self._lines.get(product_id)
        if line is None:
            return

        new_qty = line.quantity.value + delta
        if new_qty <= 0:
            del self._lines[product_id]
        else:
            line.quantity = Quantity(new_qty)

    def remove(self, product_id: str) -> None:
        self._lines.pop(product_id, None)

    def clear(self) -> None:
        self._lines.clear()

    # --- Computed -------------------------------------------------------------

    def total(self) -> Money:
        result: Money | None = None
        for line in self._lines.values():
            result = line.line_total if result is None else result + line.line_total
        return result if result is not None else Money.zero()

    def count(self) -> int:
        return sum(line.quantity.value for line in self._lines.values())

    @property
    def lines(self) -> list[CartLine]:
        return list(self._lines.values())

    @property
    def is_empty(self) -> bool:
        return not self._lines

    def quantities(self) -> dict[str, int]:
        """Product id -> requested quantity."""
        return {pid: line.quantity.value for pid, line in self._lines.items()}
