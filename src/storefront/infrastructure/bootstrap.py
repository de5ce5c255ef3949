"""Composition root: wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.
"""

from __future__ import annotations

from storefront.application.checkout import CheckoutHandler
from storefront.application.update_order_status import UpdateOrderStatusHandler
from storefront.infrastructure.config import Settings
from storefront.infrastructure.gateway.hmac_gateway import HmacSignedGateway
from storefront.infrastructure.gateway.razorpay import RazorpayGateway
from storefront.infrastructure.gateway.sandbox import SandboxGateway
from storefront.infrastructure.notifications.outbox_publisher import (
    OutboxEventPublisher,
)
from storefront.infrastructure.persistence.json_cart_repository import (
    JsonCartRepository,
)
from storefront.infrastructure.persistence.json_order_repository import (
    JsonOrderRepository,
)
from storefront.infrastructure.persistence.json_payment_intent_repository import (
    JsonPaymentIntentRepository,
)
from storefront.infrastructure.persistence.json_product_repository import (
    JsonProductRepository,
)


def _settings(settings: Settings | None) -> Settings:
    return settings if settings is not None else Settings.from_env()


def product_repository(settings: Settings | None = None) -> JsonProductRepository:
    settings = _settings(settings)
    return JsonProductRepository(settings.data_dir / "products.json", currency=settings.currency)


def order_repository(settings: Settings | None = None) -> JsonOrderRepository:
    return JsonOrderRepository(_settings(settings).data_dir / "orders.json")


def payment_intent_repository(settings: Settings | None = None) -> JsonPaymentIntentRepository:
    return JsonPaymentIntentRepository(_settings(settings).data_dir / "payment_intents.json")


def cart_repository(settings: Settings | None = None) -> JsonCartRepository:
    return JsonCartRepository(_settings(settings).data_dir / "sessions")


def event_publisher(settings: Settings | None = None) -> OutboxEventPublisher:
    return OutboxEventPublisher(_settings(settings).data_dir / "outbox.jsonl")


def payment_gateway(settings: Settings | None = None) -> HmacSignedGateway:
    settings = _settings(settings)
    intents = payment_intent_repository(settings)
    if settings.gateway == "razorpay":
        return RazorpayGateway(
            key_id=settings.razorpay_key_id or "",
            key_secret=settings.razorpay_key_secret or "",
            intent_repo=intents,
            base_url=settings.razorpay_base_url,
            timeout=settings.gateway_timeout,
        )
    return SandboxGateway(intents, secret=settings.sandbox_secret)


def checkout_handler(settings: Settings | None = None) -> CheckoutHandler:
    settings = _settings(settings)
    return CheckoutHandler(
        order_repo=order_repository(settings),
        product_repo=product_repository(settings),
        gateway=payment_gateway(settings),
        publisher=event_publisher(settings),
    )


def update_order_status_handler(settings: Settings | None = None) -> UpdateOrderStatusHandler:
    settings = _settings(settings)
    return UpdateOrderStatusHandler(
        order_repo=order_repository(settings),
        publisher=event_publisher(settings),
    )
