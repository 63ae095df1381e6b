"""CLI commands for catalog administration."""

from __future__ import annotations

import click

from storefront.application.catalog_reports import CategoryStatsHandler, LowStockHandler
from storefront.application.manage_product import (
    AddProductHandler,
    AdjustStockHandler,
    DeleteProductHandler,
    UpdateProductHandler,
)
from storefront.domain.exceptions import DomainException
from storefront.domain.model.product import CatalogProduct
from storefront.infrastructure.bootstrap import (
    catalog_repository,
    image_store,
    settings,
    shop_session,
)
from storefront.infrastructure.cli.common import domain_error, remember_page
from storefront.infrastructure.persistence.mongo_catalog_repository import (
    MongoCatalogRepository,
)


def _echo_product(product: CatalogProduct) -> None:
    click.echo(f"{product.id}  {product.name}  {product.category}  {product.price}  stock={product.stock}")


@click.command("add")
@click.option("--name", required=True, help="Product name.")
@click.option("--price", required=True, help="Price in whole rupiah.")
@click.option("--stock", required=True, type=int, help="Units in stock.")
@click.option("--category", required=True, help="Category.")
@click.option("--image-url", default="", help="Image URL.")
def admin_add(name: str, price: str, stock: int, category: str, image_url: str) -> None:
    """Add a product to the catalog."""
    remember_page("admin")
    try:
        product = AddProductHandler(catalog_repository()).handle(
            name=name, price=price, stock=stock, category=category, image_url=image_url
        )
    except DomainException as exc:
        raise domain_error(exc)
    click.echo("Product added:")
    _echo_product(product)


@click.command("update")
@click.option("--id", "product_id", required=True, help="Product ID.")
@click.option("--name", default=None, help="New name.")
@click.option("--price", default=None, help="New price in whole rupiah.")
@click.option("--stock", default=None, type=int, help="New stock level.")
@click.option("--category", default=None, help="New category.")
@click.option("--image-url", default=None, help="New image URL.")
def admin_update(
    product_id: str,
    name: str | None,
    price: str | None,
    stock: int | None,
    category: str | None,
    image_url: str | None,
) -> None:
    """Edit a product; omitted options keep their values."""
    try:
        product = UpdateProductHandler(catalog_repository()).handle(
            product_id,
            name=name,
            price=price,
            stock=stock,
            category=category,
            image_url=image_url,
        )
    except DomainException as exc:
        raise domain_error(exc)
    click.echo("Product updated:")
    _echo_product(product)


@click.command("delete")
@click.option("--id", "product_id", required=True, help="Product ID.")
@click.confirmation_option(prompt="Delete this product?")
def admin_delete(product_id: str) -> None:
    """Delete a product and its uploaded image."""
    try:
        product = DeleteProductHandler(catalog_repository(), image_store()).handle(product_id)
    except DomainException as exc:
        raise domain_error(exc)
    click.echo(f"Product '{product.name}' deleted")


@click.command("stock")
@click.option("--id", "product_id", required=True, help="Product ID.")
@click.option("--change", required=True, type=int, help="Units to add (negative to remove).")
def admin_stock(product_id: str, change: int) -> None:
    """Adjust a product's stock by a relative amount."""
    try:
        new_stock = AdjustStockHandler(catalog_repository()).handle(product_id, change)
    except DomainException as exc:
        raise domain_error(exc)
    click.echo(f"Stock is now {new_stock}")


@click.command("low-stock")
def admin_low_stock() -> None:
    """List products at or below the low-stock threshold."""
    threshold = settings().low_stock_threshold
    try:
        products = LowStockHandler(catalog_repository(), threshold=threshold).handle()
    except DomainException as exc:
        raise domain_error(exc)

    if not products:
        click.echo(f"No products with stock of {threshold} or less.")
        return

    click.echo(f"{'ID':<22} {'Name':<24} {'Stock':>6}")
    click.echo("-" * 54)
    for p in products:
        click.echo(f"{p.id:<22} {p.name:<24} {p.stock:>6}")


@click.command("stats")
def admin_stats() -> None:
    """Product count, stock and value per category."""
    try:
        stats = CategoryStatsHandler(catalog_repository()).handle()
    except DomainException as exc:
        raise domain_error(exc)

    click.echo(f"{'Category':<16} {'Products':>8} {'Stock':>8} {'Value':>16}")
    click.echo("-" * 51)
    for row in stats.categories:
        click.echo(f"{row.category:<16} {row.count:>8} {row.total_stock:>8} {row.total_value:>16}")
    click.echo("-" * 51)
    click.echo(f"{'Total':<16} {stats.total_products:>8} {'':>8} {stats.total_value:>16}")


@click.command("watch")
def admin_watch() -> None:
    """Follow catalog changes live and keep the local cart within stock."""
    catalog, _, reconciler = shop_session()
    if not isinstance(catalog, MongoCatalogRepository):
        raise click.ClickException("Live updates need STOREFRONT_MONGO_URL to be set.")

    def report(products: list[CatalogProduct]) -> None:
        click.echo(f"Catalog changed: {len(products)} products")

    catalog.subscribe(report)
    reconciler.refresh(catalog)
    click.echo("Watching for catalog changes (Ctrl+C to stop)...")
    try:
        catalog.watch()
    except DomainException as exc:
        raise domain_error(exc)
