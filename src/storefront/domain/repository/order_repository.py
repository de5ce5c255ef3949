"""Abstract repository for Order aggregate (the Order Store)."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Callable

from storefront.domain.model.order import Order, OrderStatus

OrderPredicate = Callable[[Order], bool]


class OrderRepository(ABC):

    @abstractmethod
    def create(self, order: Order) -> Order:
        """Persist a new order, assigning its ID and unique order number.

        Returns the stored order.
        """

    @abstractmethod
    def get_by_id(self, order_id: int) -> Order | None:
        """Return an order by its ID, or None if not found."""

    @abstractmethod
    def list_by(self, predicate: OrderPredicate) -> list[Order]:
        """Return every order matching ``predicate``, newest first."""

    @abstractmethod
    def update_status(
        self,
        order_id: int,
        new_status: OrderStatus,
        expected_status: OrderStatus,
    ) -> Order:
        """Set the status only if the stored one still equals ``expected_status``.

        Raises OrderNotFound for an unknown ID and ConcurrentTransition
        when the stored status has moved on. Returns the updated order.
        """
