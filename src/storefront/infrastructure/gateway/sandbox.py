"""Offline payment gateway for development and demos.

Behaves like the Razorpay adapter from the checkout's point of view:
same intents, same signature rules. ``sign()`` plays the part of the
external payment UI and produces the confirmation a real customer's
browser would send back.
"""

from __future__ import annotations

from uuid import uuid4

from storefront.domain.model.payment import PaymentConfirmation
from storefront.domain.model.value_objects import Money
from storefront.infrastructure.gateway.hmac_gateway import (
    HmacSignedGateway,
    compute_signature,
)


class SandboxGateway(HmacSignedGateway):

    def _open_remote_order(self, amount: Money, receipt_id: str) -> str:
        return f"order_{uuid4().hex[:14]}"

    def sign(self, intent_id: str, payment_id: str | None = None) -> PaymentConfirmation:
        """Simulate a successful payment for ``intent_id``."""
        intent = self.get_intent(intent_id)
        payment_id = payment_id or f"pay_{uuid4().hex[:14]}"
        return PaymentConfirmation(
            intent_id=intent.id,
            payment_id=payment_id,
            signature=compute_signature(self._secret, intent.id, payment_id),
        )
