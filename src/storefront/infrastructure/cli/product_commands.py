"""CLI commands for browsing the catalog."""

from __future__ import annotations

import click

from storefront.infrastructure.bootstrap import product_repository


@click.command("list")
@click.option("--category", default=None, help="Only products in this category.")
@click.option("--in-stock", is_flag=True, default=False, help="Hide sold-out products.")
def product_list(category: str | None, in_stock: bool) -> None:
    """List products in the catalog."""
    products = product_repository().list_products(
        lambda p: (category is None or p.category_id == category)
        and (not in_stock or p.stock > 0)
    )

    if not products:
        click.echo("No products found.")
        return

    click.echo(f"{'ID':<6} {'Name':<20} {'Price':>14} {'Stock':>7}")
    click.echo("-" * 50)
    for p in products:
        stock = str(p.stock) if p.stock > 0 else "sold out"
        click.echo(f"{p.id:<6} {p.name:<20} {str(p.price):>14} {stock:>7}")
