"""CLI commands for the local order history."""

from __future__ import annotations

import click

from storefront.application.dto import OrderDTO
from storefront.application.order_history import (
    DeleteOrderHandler,
    ListOrdersHandler,
    ShowOrderHandler,
)
from storefront.domain.exceptions import DomainException
from storefront.infrastructure.bootstrap import order_repository, settings
from storefront.infrastructure.cli.common import domain_error, remember_page


def _print_order(dto: OrderDTO) -> None:
    click.echo(f"Order #{dto.short_id}  (status={dto.status})")
    click.echo(f"Placed:   {dto.created_at}")
    click.echo(f"Customer: {dto.customer_name}, {dto.customer_phone}")
    click.echo(f"Address:  {dto.customer_address}")
    if dto.notes:
        click.echo(f"Notes:    {dto.notes}")
    click.echo()
    click.echo(f"  {'Product':<24} {'Qty':>5} {'Price':>12} {'Total':>12}")
    click.echo(f"  {'-'*56}")
    for item in dto.items:
        click.echo(
            f"  {item.name:<24} {item.quantity:>5} {item.unit_price:>12} {item.line_total:>12}"
        )
    click.echo(f"  {'-'*56}")
    click.echo(f"  {'Subtotal':<43} {dto.subtotal:>12}")
    click.echo(f"  {'Shipping':<43} {dto.shipping:>12}")
    click.echo(f"  {'Total':<43} {dto.total:>12}")


@click.command("list")
def order_list() -> None:
    """List orders from the last 30 days, newest first."""
    remember_page("orders")
    orders = ListOrdersHandler(
        order_repository(), retention_days=settings().order_retention_days
    ).handle()

    if not orders:
        click.echo("No orders yet.")
        return

    click.echo(f"{'ID':<15} {'Placed':<22} {'Items':>5} {'Total':>14}  Status")
    click.echo("-" * 68)
    for dto in orders:
        click.echo(
            f"{dto.id:<15} {dto.created_at:<22} {len(dto.items):>5} {dto.total:>14}  {dto.status}"
        )


@click.command("show")
@click.option("--id", "order_id", required=True, type=int, help="Order ID.")
def order_show(order_id: int) -> None:
    """Show order details."""
    try:
        dto = ShowOrderHandler(order_repository()).handle(order_id)
    except DomainException as exc:
        raise domain_error(exc)
    _print_order(dto)


@click.command("delete")
@click.option("--id", "order_id", required=True, type=int, help="Order ID.")
@click.confirmation_option(prompt="Delete this order from your history?")
def order_delete(order_id: int) -> None:
    """Remove an order from the local history."""
    try:
        DeleteOrderHandler(order_repository()).handle(order_id)
    except DomainException as exc:
        raise domain_error(exc)
    click.echo(f"Order #{order_id} deleted")
