"""Application service: Update Order Status use case.

Drives an order through its lifecycle on behalf of a staff member.
The role rules decide whether the move is legal; the repository's
compare-and-set makes sure it is applied against the status that is
actually stored, so two racing requests cannot both succeed.
"""

from __future__ import annotations

import structlog

from storefront.application.publishing import publish_quietly
from storefront.domain.events import EventPublisher, StatusChanged
from storefront.domain.exceptions import OrderNotFound, ValidationError
from storefront.domain.model.order import Order, OrderStatus
from storefront.domain.model.principal import Principal
from storefront.domain.repository.order_repository import OrderRepository
from storefront.domain.service.order_lifecycle import check_transition

logger = structlog.get_logger(__name__)


class UpdateOrderStatusHandler:

    def __init__(self, order_repo: OrderRepository, publisher: EventPublisher) -> None:
        self._order_repo = order_repo
        self._publisher = publisher

    def handle(
        self,
        principal: Principal,
        order_id: int,
        new_status: OrderStatus | str,
        override: bool = False,
    ) -> Order:
        target = self._parse_status(new_status)

        order = self._order_repo.get_by_id(order_id)
        if order is None:
            raise OrderNotFound(f"Order #{order_id} not found")

        check_transition(principal.role, order.status, target, override)

        # Raises ConcurrentTransition if someone else moved the order first.
        updated = self._order_repo.update_status(
            order_id, new_status=target, expected_status=order.status
        )

        logger.info(
            "Order status changed",
            order_id=order_id,
            old_status=order.status.value,
            new_status=target.value,
            changed_by=principal.id,
            role=principal.role.value,
            override=override,
        )
        publish_quietly(
            self._publisher,
            StatusChanged(
                order_id=order_id,
                old_status=order.status.value,
                new_status=target.value,
                changed_by=principal.id,
            ),
        )
        return updated

    @staticmethod
    def _parse_status(raw: OrderStatus | str) -> OrderStatus:
        if isinstance(raw, OrderStatus):
            return raw
        # The storefront has always sent "in-transit"; accept both spellings.
        try:
            return OrderStatus(raw.strip().lower().replace("-", "_"))
        except ValueError as exc:
            raise ValidationError(f"Unknown order status: {raw!r}") from exc
