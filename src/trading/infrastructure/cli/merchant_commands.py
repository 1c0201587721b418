"""CLI commands for merchants and their products."""

from __future__ import annotations

import click

from trading.domain.exceptions import DomainException
from trading.infrastructure.bootstrap import add_product_stock_handler
from trading.infrastructure.cli.errors import cli_error


@click.command("stock")
@click.option("--merchant", required=True, help="Merchant name.")
@click.option("--sku", required=True, help="Product SKU.")
@click.option("--name", required=True, help="Product name (used when the SKU is new).")
@click.option("--price", required=True, help="Unit price (used when the SKU is new).")
@click.option("--quantity", required=True, type=int, help="Units to add.")
def merchant_stock(merchant: str, sku: str, name: str, price: str, quantity: int) -> None:
    """Add stock to a product, listing it on first use."""
    handler = add_product_stock_handler()

    try:
        dto = handler.handle(
            merchant_name=merchant, sku=sku, name=name, price=price, quantity=quantity
        )
    except DomainException as exc:
        raise cli_error(exc)

    click.echo(
        f"Product {dto.sku} '{dto.name}' at {dto.price}: "
        f"stock={dto.stock_quantity} sold={dto.sold_quantity}"
    )
