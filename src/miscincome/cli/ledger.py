#!/usr/bin/env python3
"""
Ledger CLI - Read deposits from QuickBooks or the JSON ledger.
"""

import click

from ..core.config import LEDGER_BACKENDS, get_config
from ..ledger import LedgerError, open_ledger
from .formatting import deposit_summary, deposit_table

LEDGER_OPTION = click.option(
    "--ledger",
    "backend",
    type=click.Choice(LEDGER_BACKENDS),
    help="Ledger backend (default: LEDGER_BACKEND)",
)


@click.group()
def ledger() -> None:
    """Ledger commands."""
    pass


@ledger.command("list")
@LEDGER_OPTION
@click.pass_context
def list_deposits(ctx: click.Context, backend: str | None) -> None:
    """
    Print every deposit currently in the ledger.

    Example:
      miscincome ledger list --ledger json
    """
    config = get_config()
    backend = backend or config.ledger.backend

    if ctx.obj.get("verbose", False):
        click.echo(f"Ledger backend: {backend}")
        click.echo()

    try:
        with open_ledger(config, backend) as gateway:
            deposits = gateway.list_all()
    except LedgerError as e:
        click.echo(f"❌ Error reading ledger: {e}", err=True)
        raise click.ClickException(str(e)) from e

    if not deposits:
        click.echo("No deposits found in the ledger.")
        return

    for line in deposit_table(deposits):
        click.echo(line)
    click.echo()
    click.echo(deposit_summary(deposits))
