import click

from storefront.infrastructure.cli.cart_commands import (
    cart_add,
    cart_clear,
    cart_remove,
    cart_show,
    cart_update,
)
from storefront.infrastructure.cli.checkout_commands import (
    checkout_cancel,
    checkout_cod,
    checkout_confirm,
    checkout_pay,
    payment_simulate,
)
from storefront.infrastructure.cli.order_commands import (
    order_list,
    order_show,
    order_stats,
    order_status,
)
from storefront.infrastructure.cli.product_commands import product_list
from storefront.infrastructure.config import ConfigurationError, Settings
from storefront.infrastructure.logging import configure_logging


@click.group()
def cli() -> None:
    """Storefront: cart, checkout and order fulfillment"""
    try:
        Settings.from_env()
    except ConfigurationError as exc:
        raise click.UsageError(str(exc))


@cli.group()
def cart() -> None:
    """Manage the session cart."""


@cli.group()
def checkout() -> None:
    """Turn the cart into an order."""


@cli.group()
def payment() -> None:
    """Sandbox payment tools."""


@cli.group()
def order() -> None:
    """Track and fulfill orders."""


@cli.group()
def product() -> None:
    """Browse the catalog."""


# Register subcommands
cart.add_command(cart_add)
cart.add_command(cart_clear)
cart.add_command(cart_remove)
cart.add_command(cart_show)
cart.add_command(cart_update)
checkout.add_command(checkout_cancel)
checkout.add_command(checkout_cod)
checkout.add_command(checkout_confirm)
checkout.add_command(checkout_pay)
payment.add_command(payment_simulate)
order.add_command(order_list)
order.add_command(order_show)
order.add_command(order_stats)
order.add_command(order_status)
product.add_command(product_list)


def main() -> None:
    configure_logging()
    cli()
