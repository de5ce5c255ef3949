"""CLI commands for the Order aggregate."""

from __future__ import annotations

import click

from storefront.application.dto import OrderDTO
from storefront.application.order_views import (
    OrderStatsHandler,
    OrderViewsHandler,
    ShowOrderHandler,
)
from storefront.domain.exceptions import DomainException
from storefront.domain.model.order import OrderStatus
from storefront.domain.service.order_lifecycle import next_statuses
from storefront.infrastructure.bootstrap import (
    event_publisher,
    order_repository,
    update_order_status_handler,
)
from storefront.infrastructure.cli.options import (
    display_order,
    principal,
    role_option,
    user_option,
)


@click.command("list")
@user_option
@role_option
def order_list(user_id: str, role: str) -> None:
    """List the orders visible to the acting user."""
    orders = OrderViewsHandler(order_repo=order_repository()).handle(principal(user_id, role))

    if not orders:
        click.echo("No orders found.")
        return

    click.echo(f"{'Order':<20} {'Customer':<12} {'Status':<12} {'Items':>5} {'Total':>14}")
    click.echo("-" * 67)
    for order in orders:
        click.echo(
            f"{order.order_number or '':<20} {order.customer_id:<12} {order.status.value:<12} "
            f"{order.item_count:>5} {str(order.total):>14}"
        )


@click.command("show")
@click.option("--id", "order_id", required=True, type=int, help="Order ID to display.")
@user_option
@role_option
def order_show(order_id: int, user_id: str, role: str) -> None:
    """Show details of an existing order."""
    acting = principal(user_id, role)
    handler = ShowOrderHandler(order_repo=order_repository())

    try:
        order = handler.handle(acting, order_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    display_order(OrderDTO.from_order(order))
    allowed = next_statuses(acting.role, order.status)
    if allowed:
        click.echo()
        click.echo("Next: " + ", ".join(s.value for s in allowed))


@click.command("status")
@click.option("--id", "order_id", required=True, type=int, help="Order ID to update.")
@click.option(
    "--to",
    "new_status",
    required=True,
    type=click.Choice([s.value for s in OrderStatus] + ["in-transit"]),
    help="Target status.",
)
@click.option("--override", is_flag=True, default=False, help="Admin correction of a closed order.")
@user_option
@role_option
def order_status(order_id: int, new_status: str, override: bool, user_id: str, role: str) -> None:
    """Move an order to a new status (notifies the customer)."""
    handler = update_order_status_handler()

    try:
        order = handler.handle(principal(user_id, role), order_id, new_status, override=override)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order {order.order_number} is now {order.status.value}. Customer notified.")


@click.command("stats")
@user_option
@role_option
def order_stats(user_id: str, role: str) -> None:
    """Show order counters (admin only)."""
    handler = OrderStatsHandler(order_repo=order_repository())

    try:
        stats = handler.handle(principal(user_id, role))
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Total orders:  {stats.total_orders}")
    click.echo(f"Revenue:       {stats.total_revenue}")
    for status, count in stats.by_status.items():
        click.echo(f"  {status:<12} {count:>6}")

    notifications = event_publisher().counts()
    click.echo(f"Order confirmations queued: {notifications.get('order_created', 0)}")
    click.echo(f"Status updates queued:      {notifications.get('status_changed', 0)}")
