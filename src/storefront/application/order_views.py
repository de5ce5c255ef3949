"""Application service: role-scoped order queries.

One Order Store, three access policies:

- customer: their own orders
- delivery: every order still in flight
- admin: everything

All views list newest first.
"""

from __future__ import annotations

from storefront.application.dto import OrderStatsDTO
from storefront.domain.exceptions import OrderNotFound, PermissionDenied
from storefront.domain.model.order import ACTIVE_STATUSES, Order, OrderStatus
from storefront.domain.model.principal import Principal, Role
from storefront.domain.model.value_objects import Money
from storefront.domain.repository.order_repository import (
    OrderPredicate,
    OrderRepository,
)


def visibility_for(principal: Principal) -> OrderPredicate:
    """The predicate deciding which orders ``principal`` may see."""
    if principal.role == Role.CUSTOMER:
        return lambda order: order.belongs_to(principal.id)
    if principal.role == Role.DELIVERY:
        return lambda order: order.status in ACTIVE_STATUSES
    return lambda order: True


class OrderViewsHandler:

    def __init__(self, order_repo: OrderRepository) -> None:
        self._order_repo = order_repo

    def handle(self, principal: Principal) -> list[Order]:
        return self._order_repo.list_by(visibility_for(principal))


class ShowOrderHandler:

    def __init__(self, order_repo: OrderRepository) -> None:
        self._order_repo = order_repo

    def handle(self, principal: Principal, order_id: int) -> Order:
        """Return one order; orders outside the caller's view look missing."""
        order = self._order_repo.get_by_id(order_id)
        if order is None or not visibility_for(principal)(order):
            raise OrderNotFound(f"Order #{order_id} not found")
        return order


class OrderStatsHandler:

    def __init__(self, order_repo: OrderRepository) -> None:
        self._order_repo = order_repo

    def handle(self, principal: Principal) -> OrderStatsDTO:
        if principal.role != Role.ADMIN:
            raise PermissionDenied("Only admins can view order statistics")

        orders = self._order_repo.list_by(lambda order: True)
        by_status = {status.value: 0 for status in OrderStatus}
        revenue: Money | None = None
        for order in orders:
            by_status[order.status.value] += 1
            if order.status != OrderStatus.CANCELLED:
                revenue = order.total if revenue is None else revenue + order.total

        return OrderStatsDTO(
            total_orders=len(orders),
            total_revenue=str(revenue or Money.zero()),
            by_status=by_status,
        )
