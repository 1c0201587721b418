import logging

import click

from trading.infrastructure.cli.merchant_commands import merchant_stock
from trading.infrastructure.cli.order_commands import order_place, order_show
from trading.infrastructure.cli.settlement_commands import accounts, settle
from trading.infrastructure.cli.user_commands import user_deposit


@click.group()
@click.option(
    "--log-level",
    default="WARNING",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    help="Logging verbosity.",
)
def cli(log_level: str) -> None:
    """Trading backend: users, merchants, orders and settlement."""
    logging.basicConfig(
        level=log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@cli.group()
def user() -> None:
    """Manage user accounts."""


@cli.group()
def merchant() -> None:
    """Manage merchants and stock."""


@cli.group()
def order() -> None:
    """Place and inspect orders."""


# Register subcommands
user.add_command(user_deposit)
merchant.add_command(merchant_stock)
order.add_command(order_place)
order.add_command(order_show)
cli.add_command(accounts)
cli.add_command(settle)
