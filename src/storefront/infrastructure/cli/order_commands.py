"""CLI commands for the Order aggregate."""

from __future__ import annotations

import click

from storefront.application.dto import OrderDTO
from storefront.domain.exceptions import DomainException
from storefront.domain.model.value_objects import format_currency
from storefront.infrastructure.bootstrap import Container


def _print_order(dto: OrderDTO) -> None:
    click.echo(f"Order #{dto.order_number}  (status={dto.status}, payment={dto.payment_status})")
    click.echo(f"Id:       {dto.id}")
    click.echo(f"Method:   {dto.fulfillment_method}")
    click.echo(f"Created:  {dto.created_at}")
    click.echo()
    click.echo(f"  {'Size':<20} {'Qty':>5} {'Price':>10} {'Total':>10}")
    click.echo(f"  {'-' * 48}")
    for item in dto.items:
        line_total = item.price_cents * item.quantity
        click.echo(
            f"  {item.name:<20} {item.quantity:>5} "
            f"{format_currency(item.price_cents, dto.currency):>10} "
            f"{format_currency(line_total, dto.currency):>10}"
        )
    click.echo()
    click.echo(f"  Subtotal: {format_currency(dto.subtotal_cents, dto.currency)}")
    if dto.pickup_discount_cents:
        click.echo(
            f"  Pickup discount: -{format_currency(dto.pickup_discount_cents, dto.currency)}"
        )
    if dto.delivery_fee_cents:
        click.echo(f"  Delivery fee: {format_currency(dto.delivery_fee_cents, dto.currency)}")
    click.echo(f"  Total: {format_currency(dto.total_cents, dto.currency)}")

    if dto.history:
        click.echo()
        click.echo("History:")
        for entry in dto.history:
            click.echo(f"  {entry.timestamp}  {entry.status:<12} {entry.note}")


@click.command("show")
@click.option("--id", "order_id", required=True, help="Order id.")
@click.pass_obj
def order_show(container: Container, order_id: str) -> None:
    """Show an order with its status history."""
    try:
        dto = container.show_order().handle(order_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _print_order(dto)


@click.command("status")
@click.option("--id", "order_id", required=True, help="Order id.")
@click.option("--to", "new_status", required=True, help="New status, e.g. 'Ready'.")
@click.option("--note", default=None, help="History note.")
@click.option("--admin", "admin_email", required=True, help="Admin email.")
@click.pass_obj
def order_status(
    container: Container, order_id: str, new_status: str, note: str | None, admin_email: str
) -> None:
    """Move an order to another status."""
    try:
        dto = container.update_order_status().handle(
            admin_email=admin_email, order_id=order_id, new_status=new_status, note=note
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order #{dto.order_number} is now {dto.status}")


@click.command("payment")
@click.option("--id", "order_ids", required=True, multiple=True, help="Order id (repeatable).")
@click.option(
    "--status",
    "payment_status",
    required=True,
    type=click.Choice(["pending", "paid"], case_sensitive=False),
    help="Payment status.",
)
@click.option("--admin", "admin_email", required=True, help="Admin email.")
@click.pass_obj
def order_payment(
    container: Container, order_ids: tuple[str, ...], payment_status: str, admin_email: str
) -> None:
    """Set the payment status of one or more orders."""
    try:
        updated = container.update_payment_status().handle(
            admin_email=admin_email, order_ids=list(order_ids), payment_status=payment_status
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not updated:
        click.echo("No matching orders.")
        return
    for row in updated:
        click.echo(f"{row.id}  payment={row.payment_status}")


@click.command("mark-paid")
@click.option("--id", "order_id", required=True, help="Order id.")
@click.option("--note", default="Payment confirmed", show_default=True, help="History note.")
@click.pass_obj
def order_mark_paid(container: Container, order_id: str, note: str) -> None:
    """Record a received payment for a pay-later order."""
    try:
        changed = container.mark_paid().handle(order_id, note)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo("Order marked paid" if changed else "Order was already paid")


@click.command("remind")
@click.option("--id", "order_id", required=True, help="Order id.")
@click.option("--admin", "admin_email", required=True, help="Admin email.")
@click.pass_obj
def order_remind(container: Container, order_id: str, admin_email: str) -> None:
    """Send the customer a payment reminder."""
    try:
        container.send_payment_reminder().handle(admin_email=admin_email, order_id=order_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo("Reminder queued")
