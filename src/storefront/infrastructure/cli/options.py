"""Shared click options and display helpers for the CLI commands."""

from __future__ import annotations

import click

from storefront.application.dto import OrderDTO
from storefront.domain.model.principal import Principal, Role

user_option = click.option("--user", "user_id", required=True, help="Acting user ID.")
role_option = click.option(
    "--role",
    type=click.Choice([r.value for r in Role]),
    default=Role.CUSTOMER.value,
    show_default=True,
    help="Role of the acting user, as issued by the auth service.",
)


def principal(user_id: str, role: str = Role.CUSTOMER.value) -> Principal:
    return Principal(id=user_id, role=Role(role))


def display_order(dto: OrderDTO) -> None:
    """Shared formatting for displaying an order."""
    click.echo(f"Order {dto.order_number} (#{dto.id})  (status={dto.status})")
    click.echo(f"Customer: {dto.customer_id}")
    click.echo(f"Created:  {dto.created_at}")
    click.echo(f"Deliver:  {dto.delivery_address}")
    payment = dto.payment_method
    if dto.payment_reference:
        payment += f" ({dto.payment_reference})"
    click.echo(f"Payment:  {payment}")
    click.echo()
    click.echo(f"  {'Product':<20} {'Qty':>5} {'Price':>14} {'Total':>14}")
    click.echo(f"  {'-'*55}")
    for item in dto.items:
        click.echo(
            f"  {item.product_name:<20} {item.quantity:>5} {item.unit_price:>14} {item.line_total:>14}"
        )
    click.echo(f"  {'-'*55}")
    click.echo(f"  {'Order Total':<27} {dto.total:>28}")
