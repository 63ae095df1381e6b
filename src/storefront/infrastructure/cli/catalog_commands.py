"""CLI commands for browsing the catalog."""

from __future__ import annotations

import click

from storefront.application.browse_catalog import ALL_CATEGORIES, BrowseCatalogHandler
from storefront.application.store_hours import StoreStatusHandler
from storefront.infrastructure.bootstrap import catalog_repository, settings_repository
from storefront.infrastructure.cli.common import remember_page


def _echo_store_banner() -> None:
    status = StoreStatusHandler(settings_repository()).handle()
    if status.is_open:
        return
    if status.next_opening is not None:
        click.echo(
            f"The store is CLOSED. Opens again {status.next_opening.day.capitalize()} "
            f"at {status.next_opening.time}."
        )
    else:
        click.echo("The store is CLOSED.")
    click.echo()


@click.command("list")
@click.option("--search", default="", help="Filter by product name.")
@click.option("--category", default=ALL_CATEGORIES, show_default=True, help="Filter by category.")
def catalog_list(search: str, category: str) -> None:
    """List products in the catalog."""
    remember_page("home")
    _echo_store_banner()

    view = BrowseCatalogHandler(catalog_repository()).handle(search=search, category=category)
    click.echo(f"{view.available_products} of {view.total_products} products available")

    if not view.products:
        click.echo("No products found.")
        return

    click.echo(f"{'ID':<22} {'Name':<24} {'Category':<14} {'Price':>12} {'Stock':>6}")
    click.echo("-" * 82)
    for p in view.products:
        stock = str(p.stock) if p.stock > 0 else "sold out"
        click.echo(f"{p.id:<22} {p.name:<24} {p.category:<14} {p.price:>12} {stock:>6}")


@click.command("categories")
def catalog_categories() -> None:
    """List the distinct product categories."""
    view = BrowseCatalogHandler(catalog_repository()).handle()
    if not view.categories:
        click.echo("No categories found.")
        return
    for name in view.categories:
        click.echo(name)
