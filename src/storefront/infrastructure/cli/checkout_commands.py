"""CLI commands for checkout and the gateway payment round trip."""

from __future__ import annotations

import click

from storefront.application.dto import OrderDTO
from storefront.domain.exceptions import DomainException, PaymentCancelled
from storefront.domain.model.order import PaymentMethod
from storefront.domain.model.payment import PaymentConfirmation
from storefront.infrastructure.bootstrap import (
    cart_repository,
    checkout_handler,
    payment_gateway,
)
from storefront.infrastructure.cli.options import display_order, principal, user_option
from storefront.infrastructure.config import Settings
from storefront.infrastructure.gateway.sandbox import SandboxGateway


@click.command("cod")
@user_option
@click.option("--address", required=True, help="Delivery address.")
def checkout_cod(user_id: str, address: str) -> None:
    """Place an order paid in cash on delivery."""
    carts = cart_repository()
    cart = carts.load(user_id)

    try:
        order = checkout_handler().checkout(
            cart, address, PaymentMethod.CASH_ON_DELIVERY, principal(user_id)
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    carts.discard(user_id)
    click.echo("Order placed. You will be notified as it moves along.")
    display_order(OrderDTO.from_order(order))


@click.command("pay")
@user_option
@click.option("--address", required=True, help="Delivery address.")
def checkout_pay(user_id: str, address: str) -> None:
    """Start an online payment; prints what the payment UI needs."""
    cart = cart_repository().load(user_id)
    handler = checkout_handler()

    try:
        pending = handler.checkout(cart, address, PaymentMethod.GATEWAY, principal(user_id))
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Payment intent: {pending.intent_id}")
    click.echo(f"Amount:         {pending.amount_minor_units} ({pending.currency} minor units)")
    click.echo(f"Receipt:        {pending.receipt_id}")
    settings = Settings.from_env()
    if settings.gateway == "razorpay":
        click.echo(f"Key ID:         {settings.razorpay_key_id}")
    click.echo("Complete the payment, then run 'checkout confirm' with the returned signature.")


@click.command("confirm")
@user_option
@click.option("--intent", "intent_id", required=True, help="Payment intent (gateway order) ID.")
@click.option("--payment-id", required=True, help="Payment ID reported by the gateway.")
@click.option("--signature", required=True, help="Signature reported by the gateway.")
def checkout_confirm(user_id: str, intent_id: str, payment_id: str, signature: str) -> None:
    """Finish an online payment and place the order."""
    carts = cart_repository()
    cart = carts.load(user_id)
    confirmation = PaymentConfirmation(
        intent_id=intent_id, payment_id=payment_id, signature=signature
    )

    try:
        order = checkout_handler().confirm_payment(cart, principal(user_id), confirmation)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    carts.discard(user_id)
    click.echo("Payment verified. Order placed.")
    display_order(OrderDTO.from_order(order))


@click.command("cancel")
@user_option
@click.option("--intent", "intent_id", required=True, help="Payment intent to abandon.")
def checkout_cancel(user_id: str, intent_id: str) -> None:
    """Abandon an online payment; the cart is kept."""
    try:
        checkout_handler().cancel_payment(intent_id, principal(user_id))
    except PaymentCancelled as exc:
        click.echo(str(exc))
    except DomainException as exc:
        raise click.ClickException(str(exc))


@click.command("simulate")
@click.option("--intent", "intent_id", required=True, help="Payment intent to pay.")
def payment_simulate(intent_id: str) -> None:
    """Act as the payment UI: pay an intent on the sandbox gateway."""
    gateway = payment_gateway()
    if not isinstance(gateway, SandboxGateway):
        raise click.ClickException("Payments can only be simulated on the sandbox gateway")

    try:
        confirmation = gateway.sign(intent_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Payment ID: {confirmation.payment_id}")
    click.echo(f"Signature:  {confirmation.signature}")
