"""Application service: Checkout use case.

Turns a customer's cart into a pending order. Two payment paths:

- Cash on delivery: the order is created right away.
- Gateway: a payment intent is opened and the checkout suspends. It
  resumes in ``confirm_payment`` once the payment UI reports back, and
  only a confirmation whose signature verifies creates the order.

Either way the order is built from the catalog's *current* prices and
stock, the stock is taken in the same step, and the cart is cleared only
after the order has been stored.
"""

from __future__ import annotations

from uuid import uuid4

import structlog

from storefront.application.dto import PendingPayment
from storefront.application.publishing import publish_quietly
from storefront.domain.events import EventPublisher, OrderCreated
from storefront.domain.exceptions import (
    EmptyCart,
    IntentNotFound,
    MissingAddress,
    PaymentCancelled,
    PaymentVerificationFailed,
    PermissionDenied,
    SignatureMismatch,
    ValidationError,
)
from storefront.domain.gateway.payment_gateway import PaymentGateway
from storefront.domain.model.cart import Cart
from storefront.domain.model.order import Order, PaymentMethod, total_of
from storefront.domain.model.payment import PaymentConfirmation
from storefront.domain.model.principal import Principal, Role
from storefront.domain.model.value_objects import Money
from storefront.domain.repository.order_repository import OrderRepository
from storefront.domain.repository.product_repository import ProductRepository
from storefront.domain.service.stock_allocation_service import StockAllocationService

logger = structlog.get_logger(__name__)


class CheckoutHandler:

    def __init__(
        self,
        order_repo: OrderRepository,
        product_repo: ProductRepository,
        gateway: PaymentGateway,
        publisher: EventPublisher,
    ) -> None:
        self._order_repo = order_repo
        self._product_repo = product_repo
        self._gateway = gateway
        self._publisher = publisher

    def checkout(
        self,
        cart: Cart,
        address: str,
        payment_method: PaymentMethod | str,
        customer: Principal,
    ) -> Order | PendingPayment:
        """Start a checkout.

        Returns the created Order for cash on delivery, or a
        PendingPayment for the gateway path.
        """
        method = self._validate(cart, address, payment_method, customer)

        if method == PaymentMethod.CASH_ON_DELIVERY:
            return self._place_order(cart, address, customer.id, method)

        # Fail early on stock; it is taken for real only after payment.
        StockAllocationService(self._product_repo).price_lines(cart.quantities())

        receipt_id = f"rcpt_{uuid4().hex[:16]}"
        intent = self._gateway.create_intent(
            amount=cart.total(),
            receipt_id=receipt_id,
            customer_id=customer.id,
            delivery_address=address.strip(),
        )
        logger.info(
            "Payment intent opened",
            intent_id=intent.id,
            customer_id=customer.id,
            amount=str(intent.amount),
        )
        return PendingPayment.from_intent(intent)

    def confirm_payment(
        self,
        cart: Cart,
        customer: Principal,
        confirmation: PaymentConfirmation,
    ) -> Order:
        """Resume a gateway checkout from its signed confirmation.

        No order is created unless the gateway verifies the signature.
        The intent is claimed only after stock and prices have been
        re-checked, and is reopened if the order still cannot be stored.
        Until then the same confirmation can be presented again.
        """
        self._require_customer(customer)

        try:
            intent = self._gateway.get_intent(confirmation.intent_id)
        except IntentNotFound as exc:
            raise PaymentVerificationFailed(str(exc)) from exc

        if intent.customer_id != customer.id:
            raise PaymentVerificationFailed(
                f"Payment intent {intent.id} does not belong to this customer"
            )
        if cart.is_empty:
            raise EmptyCart("Cart is empty")
        if cart.total() != intent.amount:
            raise PaymentVerificationFailed(
                f"Cart total {cart.total()} no longer matches the payment of {intent.amount}"
            )

        try:
            verified = self._gateway.verify(confirmation)
        except (SignatureMismatch, IntentNotFound) as exc:
            self._log_rejected(confirmation, customer, exc)
            raise PaymentVerificationFailed(f"Payment could not be verified: {exc}") from exc

        # Re-check against the live catalog before the intent is used up.
        lines = StockAllocationService(self._product_repo).price_lines(cart.quantities())
        if total_of(lines) != verified.amount:
            raise PaymentVerificationFailed(
                f"Order total {total_of(lines)} differs from the amount paid ({verified.amount})"
            )

        try:
            self._gateway.claim(verified)
        except (SignatureMismatch, IntentNotFound) as exc:
            self._log_rejected(confirmation, customer, exc)
            raise PaymentVerificationFailed(f"Payment could not be verified: {exc}") from exc

        try:
            return self._place_order(
                cart,
                intent.delivery_address,
                customer.id,
                PaymentMethod.GATEWAY,
                payment_reference=verified.payment_id,
                paid_amount=verified.amount,
            )
        except Exception:
            self._gateway.reopen(verified)
            raise

    def cancel_payment(self, intent_id: str, customer: Principal) -> None:
        """Abandon a gateway checkout. Always raises PaymentCancelled.

        The cart is left as it was so the customer can try again.
        """
        intent = self._gateway.get_intent(intent_id)
        if intent.customer_id != customer.id:
            raise IntentNotFound(f"Payment intent {intent_id} not found")

        self._gateway.cancel(intent_id)
        logger.info("Payment cancelled by customer", intent_id=intent_id, customer_id=customer.id)
        raise PaymentCancelled(f"Payment {intent_id} was cancelled; your cart has been kept")

    # --- Internal helpers -----------------------------------------------------

    def _validate(
        self,
        cart: Cart,
        address: str,
        payment_method: PaymentMethod | str,
        customer: Principal,
    ) -> PaymentMethod:
        if cart.is_empty:
            raise EmptyCart("Cart is empty")
        if not address or not address.strip():
            raise MissingAddress("Delivery address is required")
        try:
            method = PaymentMethod(payment_method)
        except ValueError as exc:
            raise ValidationError(f"Unknown payment method: {payment_method!r}") from exc
        self._require_customer(customer)
        return method

    @staticmethod
    def _log_rejected(
        confirmation: PaymentConfirmation, customer: Principal, exc: Exception
    ) -> None:
        logger.warning(
            "Payment verification failed",
            intent_id=confirmation.intent_id,
            customer_id=customer.id,
            reason=str(exc),
        )

    @staticmethod
    def _require_customer(principal: Principal) -> None:
        if principal.role != Role.CUSTOMER:
            raise PermissionDenied("Only customers can check out")

    def _place_order(
        self,
        cart: Cart,
        address: str,
        customer_id: str,
        method: PaymentMethod,
        payment_reference: str | None = None,
        paid_amount: Money | None = None,
    ) -> Order:
        quantities = cart.quantities()
        svc = StockAllocationService(self._product_repo)
        lines = svc.allocate(quantities)

        try:
            order = Order.place(
                customer_id=customer_id,
                lines=lines,
                delivery_address=address,
                payment_method=method,
                payment_reference=payment_reference,
            )
            if paid_amount is not None and order.total != paid_amount:
                raise PaymentVerificationFailed(
                    f"Order total {order.total} differs from the amount paid ({paid_amount})"
                )
            order = self._order_repo.create(order)
        except Exception:
            svc.release(quantities)
            raise

        cart.clear()
        logger.info(
            "Order created",
            order_id=order.id,
            order_number=order.order_number,
            customer_id=customer_id,
            payment_method=method.value,
            total=str(order.total),
        )
        publish_quietly(
            self._publisher,
            OrderCreated(
                order_id=order.id,  # type: ignore[arg-type]
                order_number=order.order_number or "",
                customer_id=customer_id,
                total=str(order.total),
                payment_method=method.value,
            ),
        )
        return order
