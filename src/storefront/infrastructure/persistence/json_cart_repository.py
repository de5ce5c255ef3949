"""JSON-file-backed session carts, one file per customer.

A cart line stores the product as it was when it was added; checkout
re-reads the catalog anyway, so a stale copy here is harmless.
"""

from __future__ import annotations

from decimal import Decimal
from pathlib import Path
from urllib.parse import quote

from storefront.domain.model.cart import Cart
from storefront.domain.model.product import Product
from storefront.domain.model.value_objects import Money
from storefront.domain.repository.cart_repository import CartRepository
from storefront.infrastructure.persistence.json_file import read_json, write_json_atomic


class JsonCartRepository(CartRepository):

    def __init__(self, sessions_dir: Path) -> None:
        self._sessions_dir = sessions_dir
        self._sessions_dir.mkdir(parents=True, exist_ok=True)

    # --- CartRepository interface ---------------------------------------------

    def load(self, customer_id: str) -> Cart:
        path = self._path_for(customer_id)
        cart = Cart(customer_id=customer_id)
        if not path.exists():
            return cart

        for raw in read_json(path):
            product = Product(
                id=raw["product_id"],
                name=raw["product_name"],
                price=Money(Decimal(raw["unit_price"]), raw["currency"]),
                stock=raw.get("stock", 0),
            )
            cart.add(product, raw["quantity"])
        return cart

    def save(self, cart: Cart) -> None:
        if cart.is_empty:
            self.discard(cart.customer_id)
            return

        raw = [
            {
                "product_id": line.product.id,
                "product_name": line.product.name,
                "unit_price": str(line.product.price.amount),
                "currency": line.product.price.currency,
                "stock": line.product.stock,
                "quantity": line.quantity.value,
            }
            for line in cart.lines
        ]
        write_json_atomic(self._path_for(cart.customer_id), raw)

    def discard(self, customer_id: str) -> None:
        self._path_for(customer_id).unlink(missing_ok=True)

    # --- File helpers ---------------------------------------------------------

    def _path_for(self, customer_id: str) -> Path:
        # Percent-encoding is reversible, so distinct IDs never share a file.
        return self._sessions_dir / f"cart_{quote(customer_id, safe='')}.json"
