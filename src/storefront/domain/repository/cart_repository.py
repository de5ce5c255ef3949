"""Abstract store for session carts, one per customer."""

from __future__ import annotations

from abc import ABC, abstractmethod

from storefront.domain.model.cart import Cart


class CartRepository(ABC):

    @abstractmethod
    def load(self, customer_id: str) -> Cart:
        """Return the customer's cart; an empty one if none is stored."""

    @abstractmethod
    def save(self, cart: Cart) -> None:
        """Persist the cart for the rest of the session."""

    @abstractmethod
    def discard(self, customer_id: str) -> None:
        """Drop the customer's cart (logout or successful checkout)."""
