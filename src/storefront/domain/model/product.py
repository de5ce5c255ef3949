"""Product as seen by the order core.

Products are owned by the catalog. The core only reads them: to price a
cart, to snapshot prices into an order, and to check stock at checkout.
"""

from __future__ import annotations

from dataclasses import dataclass

from storefront.domain.exceptions import ValidationError
from storefront.domain.model.value_objects import Money


@dataclass
class Product:
    """A product in the catalog.

    ``stock`` is mutated only through the catalog repository's
    ``decrement_stock`` / ``restock`` pair at checkout time.
    """

    id: str
    name: str
    price: Money
    stock: int = 0
    category_id: str | None = None

    def __post_init__(self) -> None:
        if self.price.is_zero:
            raise ValidationError(f"Product '{self.name}' must have a positive price")
        if self.stock < 0:
            raise ValidationError(f"Product '{self.name}' cannot have negative stock")

    def has_stock_for(self, quantity: int) -> bool:
        return quantity <= self.stock
