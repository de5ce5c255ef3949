"""Abstract repository for Product: the catalog collaborator's interface.

Defined in the domain layer so the domain never depends on
infrastructure. Concrete implementations (JSON, SQL, in-memory)
live in the infrastructure layer.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Callable

from storefront.domain.model.product import Product

ProductFilter = Callable[[Product], bool]


class ProductRepository(ABC):

    @abstractmethod
    def get_by_id(self, product_id: str) -> Product | None:
        """Return a product by its ID, or None if not found."""

    @abstractmethod
    def list_products(self, product_filter: ProductFilter | None = None) -> list[Product]:
        """Return catalog products, optionally filtered."""

    @abstractmethod
    def decrement_stock(self, quantities: dict[str, int]) -> None:
        """Take stock for every product in ``quantities``, all or nothing.

        Raises InsufficientStock (and changes nothing) if any product
        lacks the requested units.
        """

    @abstractmethod
    def restock(self, quantities: dict[str, int]) -> None:
        """Put back stock taken by ``decrement_stock``."""

    @abstractmethod
    def save(self, product: Product) -> None:
        """Persist a new or updated product."""
