"""Shared behaviour for gateways that confirm payments with an HMAC signature.

The processor signs ``"<intent id>|<payment id>"`` with HMAC-SHA256
using the merchant secret. The checkout trusts a confirmation only after
recomputing that signature here and comparing it in constant time.
"""

from __future__ import annotations

import hashlib
import hmac
from abc import abstractmethod

import structlog

from storefront.domain.exceptions import (
    IntentAlreadyUsed,
    IntentNotFound,
    InvalidAmount,
    SignatureMismatch,
)
from storefront.domain.gateway.payment_gateway import PaymentGateway
from storefront.domain.model.payment import (
    PaymentConfirmation,
    PaymentIntent,
    PaymentIntentStatus,
    VerifiedPayment,
)
from storefront.domain.model.value_objects import Money
from storefront.domain.repository.payment_intent_repository import (
    PaymentIntentRepository,
)

logger = structlog.get_logger(__name__)


def compute_signature(secret: str, intent_id: str, payment_id: str) -> str:
    message = f"{intent_id}|{payment_id}".encode("utf-8")
    return hmac.new(secret.encode("utf-8"), message, hashlib.sha256).hexdigest()


class HmacSignedGateway(PaymentGateway):
    """Stores intents locally and verifies signed confirmations.

    Subclasses only decide how the remote payment order is opened.
    """

    def __init__(self, intent_repo: PaymentIntentRepository, secret: str) -> None:
        self._intent_repo = intent_repo
        self._secret = secret

    @abstractmethod
    def _open_remote_order(self, amount: Money, receipt_id: str) -> str:
        """Create the payment order at the processor and return its ID."""

    def create_intent(
        self,
        amount: Money,
        receipt_id: str,
        customer_id: str,
        delivery_address: str,
    ) -> PaymentIntent:
        if amount.minor_units <= 0:
            raise InvalidAmount(f"Payment amount must be positive, got {amount}")

        remote_id = self._open_remote_order(amount, receipt_id)
        intent = PaymentIntent(
            id=remote_id,
            amount=amount,
            receipt_id=receipt_id,
            customer_id=customer_id,
            delivery_address=delivery_address,
        )
        self._intent_repo.save(intent)
        return intent

    def verify(self, confirmation: PaymentConfirmation) -> VerifiedPayment:
        intent = self.get_intent(confirmation.intent_id)
        intent.ensure_open()

        expected = compute_signature(self._secret, intent.id, confirmation.payment_id)
        if not hmac.compare_digest(expected, confirmation.signature):
            self._intent_repo.update_status(
                intent.id,
                new_status=PaymentIntentStatus.FAILED,
                expected_status=PaymentIntentStatus.CREATED,
            )
            logger.warning("Payment signature mismatch", intent_id=intent.id)
            raise SignatureMismatch(f"Signature does not match payment intent {intent.id}")

        return VerifiedPayment(
            intent_id=intent.id,
            payment_id=confirmation.payment_id,
            amount=intent.amount,
        )

    def claim(self, payment: VerifiedPayment) -> PaymentIntent:
        intent = self._intent_repo.update_status(
            payment.intent_id,
            new_status=PaymentIntentStatus.VERIFIED,
            expected_status=PaymentIntentStatus.CREATED,
            payment_id=payment.payment_id,
        )
        logger.info("Payment verified", intent_id=intent.id, payment_id=payment.payment_id)
        return intent

    def reopen(self, payment: VerifiedPayment) -> PaymentIntent:
        intent = self._intent_repo.update_status(
            payment.intent_id,
            new_status=PaymentIntentStatus.CREATED,
            expected_status=PaymentIntentStatus.VERIFIED,
        )
        logger.warning(
            "Payment intent reopened",
            intent_id=intent.id,
            payment_id=payment.payment_id,
        )
        return intent

    def get_intent(self, intent_id: str) -> PaymentIntent:
        intent = self._intent_repo.get_by_id(intent_id)
        if intent is None:
            raise IntentNotFound(f"Payment intent {intent_id} not found")
        return intent

    def cancel(self, intent_id: str) -> PaymentIntent:
        intent = self.get_intent(intent_id)
        if intent.status == PaymentIntentStatus.VERIFIED:
            raise IntentAlreadyUsed(
                f"Payment intent {intent_id} is already paid and cannot be cancelled"
            )
        if intent.status != PaymentIntentStatus.CREATED:
            return intent
        return self._intent_repo.update_status(
            intent_id,
            new_status=PaymentIntentStatus.CANCELLED,
            expected_status=PaymentIntentStatus.CREATED,
        )
