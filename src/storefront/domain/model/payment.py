"""Payment intent and confirmation types for the gateway checkout path.

A PaymentIntent is created before the customer leaves for the external
payment UI and is persisted, so the checkout can resume when the signed
confirmation comes back, possibly after a page reload or a restart.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from enum import Enum

from storefront.domain.exceptions import IntentAlreadyUsed
from storefront.domain.model.value_objects import Money


class PaymentIntentStatus(Enum):
    CREATED = "created"
    VERIFIED = "verified"
    FAILED = "failed"
    CANCELLED = "cancelled"


@dataclass
class PaymentIntent:
    """Gateway-side handle for one checkout attempt.

    ``customer_id`` and ``delivery_address`` are the checkout context
    needed to finish the order once the payment is verified.
    """

    id: str
    amount: Money
    receipt_id: str
    customer_id: str
    delivery_address: str
    status: PaymentIntentStatus = PaymentIntentStatus.CREATED
    payment_id: str | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def currency(self) -> str:
        return self.amount.currency

    def ensure_open(self) -> None:
        """Raise IntentAlreadyUsed unless the intent can still be confirmed."""
        if self.status == PaymentIntentStatus.VERIFIED:
            raise IntentAlreadyUsed(f"Payment intent {self.id} was already confirmed")
        if self.status != PaymentIntentStatus.CREATED:
            raise IntentAlreadyUsed(
                f"Cannot confirm payment intent {self.id} in {self.status.value} status"
            )

    def with_status(
        self, new_status: PaymentIntentStatus, payment_id: str | None = None
    ) -> PaymentIntent:
        """Return a copy carrying ``new_status`` and ``payment_id``.

        Legality is checked by the repository's compare-and-set.
        """
        return replace(self, status=new_status, payment_id=payment_id)


@dataclass(frozen=True)
class PaymentConfirmation:
    """Callback data reported by the payment UI. Untrusted until verified."""

    intent_id: str
    payment_id: str
    signature: str


@dataclass(frozen=True)
class VerifiedPayment:
    intent_id: str
    payment_id: str
    amount: Money
