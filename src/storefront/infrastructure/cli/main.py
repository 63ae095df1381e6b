import click
import structlog

from storefront.infrastructure.bootstrap import session_repository, settings
from storefront.infrastructure.cli.admin_commands import (
    admin_add,
    admin_delete,
    admin_low_stock,
    admin_stats,
    admin_stock,
    admin_update,
    admin_watch,
)
from storefront.infrastructure.cli.cart_commands import (
    cart_add,
    cart_remove,
    cart_select_all,
    cart_set,
    cart_show,
    cart_sync,
    cart_toggle,
)
from storefront.infrastructure.cli.catalog_commands import catalog_categories, catalog_list
from storefront.infrastructure.cli.checkout_commands import checkout
from storefront.infrastructure.cli.hours_commands import hours_set, hours_show, hours_status
from storefront.infrastructure.cli.order_commands import order_delete, order_list, order_show
from storefront.infrastructure.logging_setup import configure_logging

logger = structlog.get_logger(__name__)


class ShopGroup(click.Group):
    """Reports unexpected failures as a short retry message instead of a traceback."""

    def invoke(self, ctx: click.Context):
        try:
            return super().invoke(ctx)
        except (click.ClickException, click.exceptions.Exit, click.Abort):
            raise
        except Exception as exc:
            logger.exception("unexpected_error")
            message = "Something went wrong, please retry."
            if settings().debug:
                message += f"\n{type(exc).__name__}: {exc}"
            raise click.ClickException(message) from exc


@click.group(cls=ShopGroup)
def cli() -> None:
    """Sayur Yunur — online vegetable shop"""
    configure_logging(debug=settings().debug)


@cli.group()
def catalog() -> None:
    """Browse products."""


@cli.group()
def cart() -> None:
    """Manage your cart."""


@cli.group()
def orders() -> None:
    """Your order history."""


@cli.group()
def admin() -> None:
    """Manage the catalog."""


@cli.group()
def hours() -> None:
    """Store opening hours."""


@cli.command("last-page")
def last_page() -> None:
    """Show the page you were last on."""
    click.echo(session_repository().get_last_page() or "home")


# Register subcommands
catalog.add_command(catalog_list)
catalog.add_command(catalog_categories)
cart.add_command(cart_show)
cart.add_command(cart_add)
cart.add_command(cart_remove)
cart.add_command(cart_set)
cart.add_command(cart_toggle)
cart.add_command(cart_select_all)
cart.add_command(cart_sync)
cli.add_command(checkout)
orders.add_command(order_list)
orders.add_command(order_show)
orders.add_command(order_delete)
admin.add_command(admin_add)
admin.add_command(admin_update)
admin.add_command(admin_delete)
admin.add_command(admin_stock)
admin.add_command(admin_low_stock)
admin.add_command(admin_stats)
admin.add_command(admin_watch)
hours.add_command(hours_show)
hours.add_command(hours_status)
hours.add_command(hours_set)
