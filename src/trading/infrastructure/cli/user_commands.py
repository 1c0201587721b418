"""CLI commands for user accounts."""

from __future__ import annotations

import click

from trading.domain.exceptions import DomainException
from trading.infrastructure.bootstrap import deposit_handler
from trading.infrastructure.cli.errors import cli_error


@click.command("deposit")
@click.option("--username", required=True, help="Account holder.")
@click.option("--amount", required=True, help="Amount to deposit (e.g. 100.00).")
def user_deposit(username: str, amount: str) -> None:
    """Deposit funds, opening the account on first use."""
    handler = deposit_handler()

    try:
        dto = handler.handle(username=username, amount=amount)
    except DomainException as exc:
        raise cli_error(exc)

    click.echo(f"User '{dto.username}' balance: {dto.balance}")
