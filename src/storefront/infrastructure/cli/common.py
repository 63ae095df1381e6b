"""Helpers shared by the CLI command modules."""

from __future__ import annotations

import click

from storefront.domain.exceptions import (
    DomainException,
    StockConflictError,
    ValidationError,
)
from storefront.infrastructure.bootstrap import session_repository


def domain_error(exc: DomainException) -> click.ClickException:
    """Turn a domain error into a user-facing CLI error."""
    if isinstance(exc, ValidationError) and exc.fields:
        lines = [f"  {field}: {message}" for field, message in exc.fields.items()]
        return click.ClickException("Please fix the following:\n" + "\n".join(lines))
    if isinstance(exc, StockConflictError):
        lines = [f"  - {adj.describe()}" for adj in exc.adjustments]
        return click.ClickException(
            "Stock changed, nothing was ordered. Your cart was updated:\n"
            + "\n".join(lines)
            + "\nPlease review your cart and check out again."
        )
    return click.ClickException(str(exc))


def remember_page(page: str) -> None:
    session_repository().save_last_page(page)
