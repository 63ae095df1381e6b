"""CLI commands for the store's opening hours."""

from __future__ import annotations

import click

from storefront.application.store_hours import (
    SetStoreHoursHandler,
    StoreStatusHandler,
    load_store_hours,
)
from storefront.domain.exceptions import DomainException
from storefront.domain.model.store_hours import DAYS
from storefront.infrastructure.bootstrap import settings_repository
from storefront.infrastructure.cli.common import domain_error


@click.command("show")
def hours_show() -> None:
    """Show opening hours for each day of the week."""
    hours = load_store_hours(settings_repository())
    for day in DAYS:
        day_hours = hours.for_day(day)
        times = f"{day_hours.open} - {day_hours.close}" if day_hours.is_open else "closed"
        click.echo(f"{day.capitalize():<10} {times}")


@click.command("status")
def hours_status() -> None:
    """Tell whether the store is open right now."""
    status = StoreStatusHandler(settings_repository()).handle()
    if status.is_open:
        click.echo("The store is OPEN.")
        return
    click.echo("The store is CLOSED.")
    if status.next_opening is not None:
        click.echo(
            f"Opens again {status.next_opening.day.capitalize()} "
            f"{status.next_opening.date.isoformat()} at {status.next_opening.time}."
        )


@click.command("set")
@click.option("--day", required=True, type=click.Choice(DAYS, case_sensitive=False), help="Day of the week.")
@click.option("--open", "open_at", default="09:00", show_default=True, help="Opening time (HH:MM).")
@click.option("--close", "close_at", default="17:00", show_default=True, help="Closing time (HH:MM).")
@click.option("--closed", is_flag=True, help="Mark the day as closed.")
def hours_set(day: str, open_at: str, close_at: str, closed: bool) -> None:
    """Set the opening hours for one day."""
    try:
        SetStoreHoursHandler(settings_repository()).handle(
            day, open_at, close_at, is_open=not closed
        )
    except DomainException as exc:
        raise domain_error(exc)
    state = "closed" if closed else f"{open_at} - {close_at}"
    click.echo(f"{day.capitalize()}: {state}")
