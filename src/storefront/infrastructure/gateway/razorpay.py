"""Razorpay payment gateway adapter.

Opens a Razorpay order over the REST API (``POST /v1/orders``, basic auth
with the key id and secret, amount in paise). The browser checkout then
returns ``razorpay_order_id``, ``razorpay_payment_id`` and
``razorpay_signature``, which map one-to-one onto PaymentConfirmation.
"""

from __future__ import annotations

import httpx
import structlog

from storefront.domain.exceptions import GatewayUnavailable
from storefront.domain.model.value_objects import Money
from storefront.domain.repository.payment_intent_repository import (
    PaymentIntentRepository,
)
from storefront.infrastructure.gateway.hmac_gateway import HmacSignedGateway

logger = structlog.get_logger(__name__)

DEFAULT_BASE_URL = "https://api.razorpay.com"


class RazorpayGateway(HmacSignedGateway):

    def __init__(
        self,
        key_id: str,
        key_secret: str,
        intent_repo: PaymentIntentRepository,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = 10.0,
        client: httpx.Client | None = None,
    ) -> None:
        super().__init__(intent_repo, secret=key_secret)
        self.key_id = key_id
        self._client = client or httpx.Client(
            base_url=base_url,
            auth=(key_id, key_secret),
            timeout=timeout,
        )

    def _open_remote_order(self, amount: Money, receipt_id: str) -> str:
        body = {
            "amount": amount.minor_units,
            "currency": amount.currency,
            "receipt": receipt_id,
        }
        try:
            response = self._client.post("/v1/orders", json=body)
            response.raise_for_status()
            payload = response.json()
        except httpx.HTTPStatusError as exc:
            logger.error(
                "Razorpay rejected order creation",
                status_code=exc.response.status_code,
                receipt_id=receipt_id,
            )
            raise GatewayUnavailable(
                f"Payment gateway answered {exc.response.status_code}"
            ) from exc
        except httpx.HTTPError as exc:
            logger.error("Razorpay unreachable", error=str(exc), receipt_id=receipt_id)
            raise GatewayUnavailable(f"Payment gateway unreachable: {exc}") from exc
        except ValueError as exc:
            raise GatewayUnavailable("Payment gateway sent an unreadable response") from exc

        order_id = payload.get("id") if isinstance(payload, dict) else None
        if not order_id:
            raise GatewayUnavailable("Payment gateway response carried no order id")
        return order_id

    def close(self) -> None:
        self._client.close()
