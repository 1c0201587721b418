"""CLI commands for the Order aggregate."""

from __future__ import annotations

import click

from trading.application.dto import OrderDTO
from trading.domain.exceptions import DomainException
from trading.infrastructure.bootstrap import (
    event_bus,
    place_order_handler,
    show_order_handler,
)
from trading.infrastructure.cli.errors import cli_error


def _display_order(dto: OrderDTO) -> None:
    click.echo(f"Order #{dto.id}  (status={dto.status})")
    click.echo(f"Buyer:    {dto.username}")
    click.echo(f"Merchant: {dto.merchant_name}")
    click.echo(f"Created:  {dto.created_at}")
    click.echo()
    click.echo(f"  {'SKU':<12} {'Qty':>5} {'Price':>10} {'Total':>10}")
    click.echo(f"  {'-'*40}")
    click.echo(f"  {dto.sku:<12} {dto.quantity:>5} {dto.unit_price:>10} {dto.total_price:>10}")


@click.command("place")
@click.option("--username", required=True, help="Buyer.")
@click.option("--sku", required=True, help="Product SKU.")
@click.option("--quantity", required=True, type=int, help="Units to buy.")
def order_place(username: str, sku: str, quantity: int) -> None:
    """Place an order (debits the user, credits the merchant)."""
    bus = event_bus()
    handler = place_order_handler(bus)

    try:
        dto = handler.handle(username=username, sku=sku, quantity=quantity)
    except DomainException as exc:
        raise cli_error(exc)
    finally:
        bus.shutdown()

    _display_order(dto)


@click.command("show")
@click.option("--id", "order_id", required=True, type=int, help="Order ID to display.")
def order_show(order_id: int) -> None:
    """Show details of an existing order."""
    handler = show_order_handler()

    try:
        dto = handler.handle(order_id)
    except DomainException as exc:
        raise cli_error(exc)

    _display_order(dto)
