"""Data Transfer Objects: plain containers that cross layer boundaries.

DTOs carry data between the CLI and application layers without
exposing domain internals to the outside world.
"""

from __future__ import annotations

from dataclasses import dataclass

from storefront.domain.model.order import Order
from storefront.domain.model.payment import PaymentIntent


@dataclass(frozen=True)
class OrderLineDTO:
    """Output: a single line item as displayed to the user."""

    product_name: str
    quantity: int
    unit_price: str  # formatted, e.g. "INR 15.00"
    line_total: str


@dataclass(frozen=True)
class OrderDTO:
    """Output: a complete order as displayed to the user."""

    id: int
    order_number: str
    customer_id: str
    status: str
    items: list[OrderLineDTO]
    total: str
    delivery_address: str
    payment_method: str
    payment_reference: str | None
    created_at: str

    @staticmethod
    def from_order(order: Order) -> OrderDTO:
        return OrderDTO(
            id=order.id,  # type: ignore[arg-type]
            order_number=order.order_number or "",
            customer_id=order.customer_id,
            status=order.status.value,
            items=[
                OrderLineDTO(
                    product_name=line.product_name,
                    quantity=line.quantity.value,
                    unit_price=str(line.unit_price),
                    line_total=str(line.line_total),
                )
                for line in order.lines
            ],
            total=str(order.total),
            delivery_address=order.delivery_address,
            payment_method=order.payment_method.value,
            payment_reference=order.payment_reference,
            created_at=order.created_at.strftime("%Y-%m-%d %H:%M UTC"),
        )


@dataclass(frozen=True)
class PendingPayment:
    """Output of a gateway checkout: what the external payment UI needs.

    The checkout is suspended until a confirmation for ``intent_id``
    arrives; nothing about it is held in memory.
    """

    intent_id: str
    amount_minor_units: int
    currency: str
    receipt_id: str

    @staticmethod
    def from_intent(intent: PaymentIntent) -> PendingPayment:
        return PendingPayment(
            intent_id=intent.id,
            amount_minor_units=intent.amount.minor_units,
            currency=intent.currency,
            receipt_id=intent.receipt_id,
        )


@dataclass(frozen=True)
class OrderStatsDTO:
    """Simple counters for the admin console."""

    total_orders: int
    total_revenue: str
    by_status: dict[str, int]
