"""JSON-file-backed implementation of PaymentIntentRepository."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from pathlib import Path

from storefront.domain.exceptions import IntentAlreadyUsed, IntentNotFound
from storefront.domain.model.payment import PaymentIntent, PaymentIntentStatus
from storefront.domain.model.value_objects import Money
from storefront.domain.repository.payment_intent_repository import (
    PaymentIntentRepository,
)
from storefront.infrastructure.persistence.json_file import (
    ensure_json_file,
    file_lock,
    read_json,
    write_json_atomic,
)


class JsonPaymentIntentRepository(PaymentIntentRepository):

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path
        self._ensure_file()

    # --- PaymentIntentRepository interface ------------------------------------

    def get_by_id(self, intent_id: str) -> PaymentIntent | None:
        for raw in self._load_raw():
            if raw["id"] == intent_id:
                return self._to_domain(raw)
        return None

    def save(self, intent: PaymentIntent) -> None:
        with file_lock(self._file_path):
            records = self._load_raw()
            replaced = False
            for i, raw in enumerate(records):
                if raw["id"] == intent.id:
                    records[i] = self._to_raw(intent)
                    replaced = True
                    break
            if not replaced:
                records.append(self._to_raw(intent))
            self._persist_raw(records)

    def update_status(
        self,
        intent_id: str,
        new_status: PaymentIntentStatus,
        expected_status: PaymentIntentStatus,
        payment_id: str | None = None,
    ) -> PaymentIntent:
        with file_lock(self._file_path):
            records = self._load_raw()
            for i, raw in enumerate(records):
                if raw["id"] != intent_id:
                    continue
                current = self._to_domain(raw)
                if current.status != expected_status:
                    raise IntentAlreadyUsed(
                        f"Payment intent {intent_id} is now {current.status.value}, "
                        f"not {expected_status.value}"
                    )
                updated = current.with_status(new_status, payment_id)
                records[i] = self._to_raw(updated)
                self._persist_raw(records)
                return updated
        raise IntentNotFound(f"Payment intent {intent_id} not found")

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(intent: PaymentIntent) -> dict:
        return {
            "id": intent.id,
            "amount": str(intent.amount.amount),
            "currency": intent.amount.currency,
            "receipt_id": intent.receipt_id,
            "customer_id": intent.customer_id,
            "delivery_address": intent.delivery_address,
            "status": intent.status.value,
            "payment_id": intent.payment_id,
            "created_at": intent.created_at.isoformat(),
        }

    @staticmethod
    def _to_domain(raw: dict) -> PaymentIntent:
        return PaymentIntent(
            id=raw["id"],
            amount=Money(Decimal(raw["amount"]), raw["currency"]),
            receipt_id=raw["receipt_id"],
            customer_id=raw["customer_id"],
            delivery_address=raw["delivery_address"],
            status=PaymentIntentStatus(raw["status"]),
            payment_id=raw.get("payment_id"),
            created_at=datetime.fromisoformat(raw["created_at"]),
        )

    # --- File helpers ---------------------------------------------------------

    def _load_raw(self) -> list[dict]:
        return read_json(self._file_path)

    def _persist_raw(self, records: list[dict]) -> None:
        write_json_atomic(self._file_path, records)

    def _ensure_file(self) -> None:
        ensure_json_file(self._file_path, [])
