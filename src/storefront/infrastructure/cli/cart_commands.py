"""CLI commands for the customer's session cart."""

from __future__ import annotations

import click

from storefront.domain.exceptions import DomainException, EntityNotFoundError
from storefront.infrastructure.bootstrap import cart_repository, product_repository
from storefront.infrastructure.cli.options import user_option


@click.command("add")
@user_option
@click.option("--product", "product_id", required=True, help="Product ID.")
@click.option("--qty", default=1, show_default=True, type=int, help="Units to add.")
def cart_add(user_id: str, product_id: str, qty: int) -> None:
    """Add a product to the cart."""
    carts = cart_repository()

    try:
        product = product_repository().get_by_id(product_id)
        if product is None:
            raise EntityNotFoundError(f"Product with ID '{product_id}' not found")
        cart = carts.load(user_id)
        cart.add(product, qty)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    carts.save(cart)
    click.echo(f"Added {qty} x {product.name}. Cart: {cart.count()} item(s), {cart.total()}")


@click.command("update")
@user_option
@click.option("--product", "product_id", required=True, help="Product ID.")
@click.option("--delta", required=True, type=int, help="Change in quantity, e.g. 1 or -1.")
def cart_update(user_id: str, product_id: str, delta: int) -> None:
    """Change the quantity of a cart line; dropping to zero removes it."""
    carts = cart_repository()
    cart = carts.load(user_id)
    cart.update_quantity(product_id, delta)
    carts.save(cart)
    click.echo(f"Cart: {cart.count()} item(s), {cart.total()}")


@click.command("remove")
@user_option
@click.option("--product", "product_id", required=True, help="Product ID.")
def cart_remove(user_id: str, product_id: str) -> None:
    """Remove a product from the cart."""
    carts = cart_repository()
    cart = carts.load(user_id)
    cart.remove(product_id)
    carts.save(cart)
    click.echo(f"Cart: {cart.count()} item(s), {cart.total()}")


@click.command("show")
@user_option
def cart_show(user_id: str) -> None:
    """Show the cart contents."""
    cart = cart_repository().load(user_id)

    if cart.is_empty:
        click.echo("Cart is empty.")
        return

    click.echo(f"  {'ID':<6} {'Product':<20} {'Qty':>5} {'Price':>14} {'Total':>14}")
    click.echo(f"  {'-'*62}")
    for line in cart.lines:
        click.echo(
            f"  {line.product.id:<6} {line.product.name:<20} {line.quantity.value:>5} "
            f"{str(line.product.price):>14} {str(line.line_total):>14}"
        )
    click.echo(f"  {'-'*62}")
    click.echo(f"  {cart.count()} item(s){'':<26} {str(cart.total()):>22}")


@click.command("clear")
@user_option
def cart_clear(user_id: str) -> None:
    """Empty the cart (as on logout)."""
    cart_repository().discard(user_id)
    click.echo("Cart cleared.")
