"""CLI commands for the shopper's cart."""

from __future__ import annotations

import click

from storefront.application.dto import CartDTO, cart_to_dto
from storefront.application.update_cart import AddToCartHandler, ChangeQuantityHandler
from storefront.domain.exceptions import DomainException
from storefront.domain.service.stock_reconciler import StockAdjustment
from storefront.infrastructure.bootstrap import shop_session
from storefront.infrastructure.cli.common import domain_error, remember_page


def _echo_adjustments(adjustments: list[StockAdjustment]) -> None:
    for adj in adjustments:
        click.echo(f"! {adj.describe()}")


def _echo_cart(dto: CartDTO) -> None:
    if not dto.lines:
        click.echo("Your cart is empty.")
        return

    click.echo(f"    {'ID':<22} {'Product':<24} {'Qty':>4} {'Price':>12} {'Total':>12}")
    click.echo(f"    {'-'*77}")
    for line in dto.lines:
        mark = "[x]" if line.selected else "[ ]"
        click.echo(
            f"{mark} {line.product_id:<22} {line.name:<24} {line.quantity:>4} "
            f"{line.unit_price:>12} {line.line_total:>12}"
        )
    click.echo(f"    {'-'*77}")
    click.echo(
        f"    {f'Selected ({dto.selected_count} of {len(dto.lines)} items)':<52} "
        f"{dto.selected_subtotal:>25}"
    )


@click.command("show")
def cart_show() -> None:
    """Show the cart (quantities are checked against live stock first)."""
    remember_page("cart")
    catalog, store, reconciler = shop_session()
    _echo_adjustments(reconciler.refresh(catalog))
    _echo_cart(cart_to_dto(store.lines))


@click.command("add")
@click.option("--id", "product_id", required=True, help="Product ID.")
def cart_add(product_id: str) -> None:
    """Add one unit of a product to the cart."""
    catalog, store, _ = shop_session()
    try:
        dto = AddToCartHandler(catalog, store).handle(product_id)
    except DomainException as exc:
        raise domain_error(exc)
    click.echo(f"Added. Cart now has {len(dto.lines)} item(s).")


@click.command("remove")
@click.option("--id", "product_id", required=True, help="Product ID.")
def cart_remove(product_id: str) -> None:
    """Remove a product from the cart."""
    _, store, _ = shop_session()
    store.remove(product_id)
    click.echo("Removed.")


@click.command("set")
@click.option("--id", "product_id", required=True, help="Product ID.")
@click.option("--quantity", required=True, type=int, help="New quantity (0 removes).")
def cart_set(product_id: str, quantity: int) -> None:
    """Change the quantity of a cart line."""
    catalog, store, _ = shop_session()
    try:
        dto = ChangeQuantityHandler(catalog, store).handle(product_id, quantity)
    except DomainException as exc:
        raise domain_error(exc)
    _echo_cart(dto)


@click.command("toggle")
@click.option("--id", "product_id", required=True, help="Product ID.")
def cart_toggle(product_id: str) -> None:
    """Select or unselect a line for checkout."""
    _, store, _ = shop_session()
    _echo_cart(cart_to_dto(store.toggle_selected(product_id)))


@click.command("select-all")
def cart_select_all() -> None:
    """Select every line, or unselect all if all are selected."""
    _, store, _ = shop_session()
    _echo_cart(cart_to_dto(store.toggle_select_all()))


@click.command("sync")
def cart_sync() -> None:
    """Reconcile cart quantities with the current catalog stock."""
    catalog, _, reconciler = shop_session()
    adjustments = reconciler.refresh(catalog)
    if not adjustments:
        click.echo("Cart is within available stock.")
        return
    _echo_adjustments(adjustments)
