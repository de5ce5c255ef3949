"""Order aggregate, the core of the domain.

The Order is an aggregate root that owns its line items. It is a priced
snapshot of a completed checkout: line prices and the total are fixed at
creation, and afterwards only the status moves. Which status moves are
legal for whom is decided by the lifecycle rules in
``storefront.domain.service.order_lifecycle``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

from storefront.domain.exceptions import MissingAddress, ValidationError
from storefront.domain.model.value_objects import Money, Quantity


class OrderStatus(Enum):
    PENDING = "pending"
    PROCESSING = "processing"
    IN_TRANSIT = "in_transit"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"

    @property
    def is_terminal(self) -> bool:
        return self in (OrderStatus.DELIVERED, OrderStatus.CANCELLED)

    @property
    def is_active(self) -> bool:
        return not self.is_terminal


ACTIVE_STATUSES = frozenset(s for s in OrderStatus if s.is_active)


class PaymentMethod(Enum):
    GATEWAY = "gateway"
    CASH_ON_DELIVERY = "cash_on_delivery"


@dataclass(frozen=True)
class OrderLine:
    """Captures the price snapshot of a product at order-creation time."""

    product_id: str
    product_name: str
    quantity: Quantity
    unit_price: Money  # locked at order-creation time

    @property
    def line_total(self) -> Money:
        return self.unit_price * self.quantity.value


def total_of(lines: list[OrderLine]) -> Money:
    total = lines[0].line_total
    for line in lines[1:]:
        total = total + line.line_total
    return total


@dataclass
class Order:
    """Aggregate root for customer orders.

    Use the ``Order.place()`` factory for new orders; it enforces all
    business rules. The ``__init__`` does no validation; repositories use
    it to reconstitute persisted orders.
    ``id`` and ``order_number`` are assigned by the repository on create.
    """

    id: int | None
    customer_id: str
    lines: list[OrderLine]
    delivery_address: str
    payment_method: PaymentMethod
    total: Money
    payment_reference: str | None = None
    order_number: str | None = None
    status: OrderStatus = OrderStatus.PENDING
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime | None = None

    # --- Factory (used for NEW orders only) -----------------------------------

    @staticmethod
    def place(
        customer_id: str,
        lines: list[OrderLine],
        delivery_address: str,
        payment_method: PaymentMethod,
        payment_reference: str | None = None,
    ) -> Order:
        """Create a new pending order, enforcing all invariants."""
        if not customer_id:
            raise ValidationError("Customer is required")

        if not lines:
            raise ValidationError("Order must contain at least one line")

        if not delivery_address or not delivery_address.strip():
            raise MissingAddress("Delivery address is required")

        if payment_method == PaymentMethod.GATEWAY and not payment_reference:
            raise ValidationError("Gateway orders require a payment reference")
        if payment_method == PaymentMethod.CASH_ON_DELIVERY and payment_reference:
            raise ValidationError("Cash on delivery orders carry no payment reference")

        return Order(
            id=None,
            customer_id=customer_id,
            lines=list(lines),
            delivery_address=delivery_address.strip(),
            payment_method=payment_method,
            total=total_of(lines),
            payment_reference=payment_reference,
        )

    # --- State transitions ----------------------------------------------------

    def with_status(self, new_status: OrderStatus, at: datetime | None = None) -> Order:
        """Return a copy of this order carrying ``new_status``.

        Legality is not checked here; the repository applies the copy
        only if the stored status still matches this order's status.
        """
        return Order(
            id=self.id,
            customer_id=self.customer_id,
            lines=list(self.lines),
            delivery_address=self.delivery_address,
            payment_method=self.payment_method,
            total=self.total,
            payment_reference=self.payment_reference,
            order_number=self.order_number,
            status=new_status,
            created_at=self.created_at,
            updated_at=at or datetime.now(timezone.utc),
        )

    # --- Computed properties --------------------------------------------------

    @property
    def item_count(self) -> int:
        return sum(line.quantity.value for line in self.lines)

    def belongs_to(self, customer_id: str) -> bool:
        return self.customer_id == customer_id
