"""Abstract repository for PaymentIntent."""

from __future__ import annotations

from abc import ABC, abstractmethod

from storefront.domain.model.payment import PaymentIntent, PaymentIntentStatus


class PaymentIntentRepository(ABC):

    @abstractmethod
    def get_by_id(self, intent_id: str) -> PaymentIntent | None:
        """Return an intent by its gateway ID, or None if not found."""

    @abstractmethod
    def save(self, intent: PaymentIntent) -> None:
        """Persist a new intent."""

    @abstractmethod
    def update_status(
        self,
        intent_id: str,
        new_status: PaymentIntentStatus,
        expected_status: PaymentIntentStatus,
        payment_id: str | None = None,
    ) -> PaymentIntent:
        """Set status and payment ID only if the stored status is ``expected_status``.

        Raises IntentNotFound for an unknown ID and IntentAlreadyUsed when
        the stored status has moved on. Returns the updated intent.
        """
