"""CLI command for placing an order from the selected cart lines."""

from __future__ import annotations

import click

from storefront.application.checkout import CheckoutHandler
from storefront.application.dto import CheckoutRequest
from storefront.application.resolve_shipping import ResolveShippingHandler
from storefront.domain.exceptions import DomainException
from storefront.domain.model.shipping import Coordinates
from storefront.domain.repository.location_provider import LocationProvider
from storefront.infrastructure.bootstrap import (
    customer_repository,
    location_cache,
    messaging_target,
    order_repository,
    settings,
    shop_session,
)
from storefront.infrastructure.cli.common import domain_error, remember_page
from storefront.infrastructure.location import (
    StaticLocationProvider,
    UnsupportedLocationProvider,
)


def _location_provider(lat: float | None, lng: float | None) -> LocationProvider:
    if lat is None or lng is None:
        return UnsupportedLocationProvider()
    return StaticLocationProvider(Coordinates(latitude=lat, longitude=lng))


@click.command("checkout")
@click.option("--name", default="", help="Recipient name (defaults to the last one used).")
@click.option("--address", default="", help="Delivery address (defaults to the last one used).")
@click.option("--phone", default="", help="Phone number (defaults to the last one used).")
@click.option("--notes", default="", help="Notes for the seller.")
@click.option("--lat", type=float, default=None, help="Delivery latitude.")
@click.option("--lng", type=float, default=None, help="Delivery longitude.")
@click.option("--open/--no-open", "open_link", default=True, help="Open the WhatsApp link when done.")
def checkout(
    name: str,
    address: str,
    phone: str,
    notes: str,
    lat: float | None,
    lng: float | None,
    open_link: bool,
) -> None:
    """Order the selected cart lines and send them over WhatsApp."""
    remember_page("checkout")
    cfg = settings()
    catalog, store, reconciler = shop_session()

    handler = CheckoutHandler(
        cart_store=store,
        reconciler=reconciler,
        catalog=catalog,
        order_repo=order_repository(),
        customer_repo=customer_repository(),
        target=messaging_target(),
    )
    request = handler.prefill(CheckoutRequest(name=name, address=address, phone=phone, notes=notes))

    quote = ResolveShippingHandler(
        provider=_location_provider(lat, lng),
        store_location=cfg.store_location,
        policy=cfg.shipping_policy,
        timeout_s=cfg.location_timeout_s,
        max_age_s=cfg.location_max_age_s,
        cache=location_cache(),
    ).handle(refresh=lat is not None and lng is not None)
    if quote.is_resolved:
        click.echo(f"Shipping: {quote.fee} ({quote.label}, {quote.distance_km:.1f} km)")

    try:
        result = handler.handle(request, quote)
    except DomainException as exc:
        raise domain_error(exc)

    dto = result.order
    click.echo(f"Order #{dto.short_id} placed  (status={dto.status})")
    click.echo(f"Subtotal: {dto.subtotal}")
    click.echo(f"Shipping: {dto.shipping}")
    click.echo(f"Total:    {dto.total}")
    click.echo()
    click.echo(result.deep_link)

    if open_link:
        click.launch(result.deep_link)
