"""CLI commands for reporting and settlement."""

from __future__ import annotations

import threading

import click

from trading.application.dto import SettlementResult
from trading.domain.exceptions import DomainException
from trading.infrastructure.bootstrap import (
    list_accounts_handler,
    settlement_handler,
    settlement_job,
)
from trading.infrastructure.cli.errors import cli_error


def _display_results(results: list[SettlementResult]) -> None:
    if not results:
        click.echo("No merchants found.")
        return

    click.echo(f"{'Merchant':<20} {'Expected':>12} {'Actual':>12} {'Diff':>12}")
    click.echo("-" * 59)
    for r in results:
        click.echo(
            f"{r.merchant_name:<20} {str(r.expected):>12} {str(r.actual):>12} {str(r.diff):>12}"
        )


@click.command("settle")
@click.option("--daemon", is_flag=True, default=False, help="Run daily until interrupted.")
def settle(daemon: bool) -> None:
    """Reconcile merchant balances against realized sales."""
    if daemon:
        stop = threading.Event()
        try:
            settlement_job().run_forever(stop)
        except KeyboardInterrupt:
            stop.set()
        return

    try:
        results = settlement_handler().handle()
    except DomainException as exc:
        raise cli_error(exc)

    _display_results(results)
    if any(not r.balanced for r in results):
        raise SystemExit(3)


@click.command("accounts")
def accounts() -> None:
    """List users, merchants and products."""
    view = list_accounts_handler().handle()

    click.echo(f"{'User':<20} {'Balance':>12}")
    click.echo("-" * 33)
    for u in view.users:
        click.echo(f"{u.username:<20} {u.balance:>12}")
    click.echo()

    click.echo(f"{'Merchant':<20} {'Balance':>12}")
    click.echo("-" * 33)
    for m in view.merchants:
        click.echo(f"{m.name:<20} {m.balance:>12}")
    click.echo()

    click.echo(f"{'SKU':<12} {'Name':<20} {'Price':>10} {'Stock':>8} {'Sold':>8}")
    click.echo("-" * 62)
    for p in view.products:
        click.echo(
            f"{p.sku:<12} {p.name:<20} {p.price:>10} "
            f"{p.stock_quantity:>8} {p.sold_quantity:>8}"
        )
