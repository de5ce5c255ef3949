"""Payment gateway port (abstract interface).

Defines the contract that all payment gateway adapters must implement,
so the checkout handler works the same against Razorpay or the local
sandbox.

Verification always happens here, server side. A "payment succeeded"
signal from the browser is only a claim until ``verify`` has checked its
signature.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from storefront.domain.model.payment import (
    PaymentConfirmation,
    PaymentIntent,
    VerifiedPayment,
)
from storefront.domain.model.value_objects import Money


class PaymentGateway(ABC):

    @abstractmethod
    def create_intent(
        self,
        amount: Money,
        receipt_id: str,
        customer_id: str,
        delivery_address: str,
    ) -> PaymentIntent:
        """Open a remote payment for ``amount`` and persist the intent.

        Raises InvalidAmount for a non-positive amount and
        GatewayUnavailable when the processor cannot be reached.
        """

    @abstractmethod
    def verify(self, confirmation: PaymentConfirmation) -> VerifiedPayment:
        """Check a confirmation's signature against an open intent.

        Does not consume the intent; see ``claim``. A bad signature marks
        the intent failed. Raises IntentNotFound, SignatureMismatch or
        IntentAlreadyUsed.
        """

    @abstractmethod
    def claim(self, payment: VerifiedPayment) -> PaymentIntent:
        """Mark a verified payment's intent as used, exactly once.

        Compare-and-set against ``created``: of several concurrent callers
        one wins, the rest get IntentAlreadyUsed.
        """

    @abstractmethod
    def reopen(self, payment: VerifiedPayment) -> PaymentIntent:
        """Undo ``claim`` when no order could be placed for the payment.

        The same confirmation can then be presented again.
        """

    @abstractmethod
    def get_intent(self, intent_id: str) -> PaymentIntent:
        """Return a stored intent. Raises IntentNotFound."""

    @abstractmethod
    def cancel(self, intent_id: str) -> PaymentIntent:
        """Record that the customer abandoned the payment UI.

        Raises IntentAlreadyUsed if the intent was already claimed.
        """
