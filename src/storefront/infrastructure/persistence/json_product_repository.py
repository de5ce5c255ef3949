"""JSON-file-backed implementation of ProductRepository.

Stands in for the catalog service: the storefront seeds and edits this
file, the order core reads it and takes stock from it at checkout.
"""

from __future__ import annotations

from decimal import Decimal
from pathlib import Path

from storefront.domain.exceptions import EntityNotFoundError, InsufficientStock
from storefront.domain.model.product import Product
from storefront.domain.model.value_objects import DEFAULT_CURRENCY, Money
from storefront.domain.repository.product_repository import (
    ProductFilter,
    ProductRepository,
)
from storefront.infrastructure.persistence.json_file import (
    ensure_json_file,
    file_lock,
    read_json,
    write_json_atomic,
)


class JsonProductRepository(ProductRepository):

    def __init__(self, file_path: Path, currency: str = DEFAULT_CURRENCY) -> None:
        self._file_path = file_path
        self._currency = currency
        self._ensure_file()

    # --- ProductRepository interface ------------------------------------------

    def get_by_id(self, product_id: str) -> Product | None:
        products = self._load()
        return products.get(product_id)

    def list_products(self, product_filter: ProductFilter | None = None) -> list[Product]:
        products = list(self._load().values())
        if product_filter is None:
            return products
        return [p for p in products if product_filter(p)]

    def decrement_stock(self, quantities: dict[str, int]) -> None:
        with file_lock(self._file_path):
            products = self._load()

            # Validate everything before touching anything
            for product_id, qty in quantities.items():
                product = products.get(product_id)
                if product is None:
                    raise EntityNotFoundError(f"Product with ID '{product_id}' not found")
                if not product.has_stock_for(qty):
                    raise InsufficientStock(
                        f"Insufficient stock for {product.name} "
                        f"(need {qty}, have {product.stock} available)"
                    )

            for product_id, qty in quantities.items():
                products[product_id].stock -= qty
            self._persist(products)

    def restock(self, quantities: dict[str, int]) -> None:
        with file_lock(self._file_path):
            products = self._load()
            for product_id, qty in quantities.items():
                product = products.get(product_id)
                if product is not None:
                    product.stock += qty
            self._persist(products)

    def save(self, product: Product) -> None:
        with file_lock(self._file_path):
            products = self._load()
            products[product.id] = product
            self._persist(products)

    # --- Serialization helpers ------------------------------------------------

    def _load(self) -> dict[str, Product]:
        raw = read_json(self._file_path)
        return {
            item["id"]: Product(
                id=item["id"],
                name=item["name"],
                price=Money(Decimal(item["price"]), item.get("currency", self._currency)),
                stock=item.get("stock", 0),
                category_id=item.get("category_id"),
            )
            for item in raw
        }

    def _persist(self, products: dict[str, Product]) -> None:
        raw = [
            {
                "id": p.id,
                "name": p.name,
                "price": str(p.price.amount),
                "currency": p.price.currency,
                "stock": p.stock,
                "category_id": p.category_id,
            }
            for p in products.values()
        ]
        write_json_atomic(self._file_path, raw)

    def _ensure_file(self) -> None:
        ensure_json_file(self._file_path, [])
