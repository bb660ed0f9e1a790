"""CLI commands for product sizes."""

from __future__ import annotations

from typing import Any

import click

from storefront.domain.exceptions import DomainException
from storefront.domain.model.value_objects import format_currency
from storefront.infrastructure.bootstrap import Container


def _parse_value(field: str, raw: str) -> Any:
    if field == "is_active":
        lowered = raw.strip().lower()
        if lowered in ("true", "yes", "1"):
            return True
        if lowered in ("false", "no", "0"):
            return False
        raise click.BadParameter(f"Invalid boolean '{raw}' for '{field}'.")
    if field in ("price_cents", "available_qty", "sort_order"):
        try:
            return int(raw)
        except ValueError:
            raise click.BadParameter(f"Invalid integer '{raw}' for '{field}'.")
    return raw


@click.command("list")
@click.option("--active-only", is_flag=True, help="Hide inactive sizes.")
@click.pass_obj
def size_list(container: Container, active_only: bool) -> None:
    """List sizes with price and stock."""
    sizes = container.list_sizes().handle(active_only=active_only)

    if not sizes:
        click.echo("No sizes found.")
        return

    click.echo(f"{'Id':<12} {'Name':<20} {'Price':>10} {'Stock':>6} {'Active':>7}")
    click.echo("-" * 59)
    for s in sizes:
        click.echo(
            f"{s.id:<12} {s.name:<20} {format_currency(s.price_cents):>10} "
            f"{s.available_qty:>6} {'yes' if s.is_active else 'no':>7}"
        )


@click.command("update")
@click.option("--id", "size_id", required=True, help="Size id.")
@click.option(
    "--set",
    "assignments",
    required=True,
    multiple=True,
    help="field=value, e.g. --set price_cents=1500 (repeatable).",
)
@click.option("--admin", "admin_email", required=True, help="Admin email.")
@click.pass_obj
def size_update(
    container: Container, size_id: str, assignments: tuple[str, ...], admin_email: str
) -> None:
    """Update allowlisted fields of a size."""
    updates: dict[str, Any] = {}
    for pair in assignments:
        if "=" not in pair:
            raise click.BadParameter(f"Invalid assignment '{pair}'. Expected 'field=value'.")
        field, raw = pair.split("=", 1)
        field = field.strip()
        updates[field] = _parse_value(field, raw)

    try:
        dto = container.update_size().handle(
            admin_email=admin_email, size_id=size_id, updates=updates
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(
        f"Size '{dto.name}' updated: price={format_currency(dto.price_cents)} "
        f"stock={dto.available_qty} active={dto.is_active}"
    )
