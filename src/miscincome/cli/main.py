#!/usr/bin/env python3
"""
Main CLI Entry Point for MiscIncome Sync

Provides the command-line interface for importing "Misc Income" deposits
from a spreadsheet export into QuickBooks.
"""


import click

from ..core.config import get_config


@click.group()
@click.option(
    "--config-env",
    type=click.Choice(["development", "test", "production"]),
    help="Override environment configuration",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output")
@click.option("--debug", is_flag=True, help="Enable debug logging")
@click.pass_context
def main(ctx: click.Context, config_env: str | None, verbose: bool, debug: bool) -> None:
    """
    MiscIncome Sync - Spreadsheet to QuickBooks Deposit Reconciliation

    Compares deposits in a spreadsheet export with the deposits already in
    the ledger and adds the ones that are missing.
    """
    # Ensure context object exists
    ctx.ensure_object(dict)

    if config_env:
        import os

        os.environ["MISCINCOME_ENV"] = config_env

    if debug:
        import logging
        import os

        os.environ["LOG_LEVEL"] = "DEBUG"
        logging.getLogger().setLevel(logging.DEBUG)
        logging.getLogger("miscincome").setLevel(logging.DEBUG)

    ctx.obj["verbose"] = verbose
    ctx.obj["debug"] = debug
    try:
        ctx.obj["config"] = get_config()
    except ValueError as e:
        raise click.ClickException(str(e)) from e

    if verbose:
        click.echo(f"Environment: {ctx.obj['config'].environment.value}")
        click.echo(f"Data directory: {ctx.obj['config'].data_dir}")

    if debug:
        click.echo("Debug logging enabled")


@main.command()
@click.pass_context
def version(ctx: click.Context) -> None:
    """Show version information."""
    from miscincome import __author__, __version__

    click.echo(f"MiscIncome Sync v{__version__}")
    click.echo(f"Author: {__author__}")


@main.command()
@click.pass_context
def config(ctx: click.Context) -> None:
    """Show current configuration."""
    config_obj = ctx.obj["config"]

    click.echo("Current Configuration:")
    click.echo(f"  Environment: {config_obj.environment.value}")
    click.echo(f"  Data Directory: {config_obj.data_dir}")
    click.echo(f"  Output Directory: {config_obj.output_dir}")
    click.echo(f"  Ledger Backend: {config_obj.ledger.backend}")
    if config_obj.ledger.backend == "json":
        click.echo(f"  Ledger File: {config_obj.ledger.json_file}")
    else:
        click.echo(f"  QuickBooks App: {config_obj.quickbooks.app_name}")
        click.echo(f"  Company File: {config_obj.quickbooks.company_file or '(currently open)'}")
    click.echo(f"  Deposit Account: {config_obj.importer.deposit_to_account}")
    click.echo(f"  Log File: {config_obj.logging.log_file}")
    click.echo(f"  Debug Mode: {config_obj.debug}")
    click.echo(f"  Log Level: {config_obj.log_level}")


from .ledger import ledger  # noqa: E402
from .reconcile import compare, sync  # noqa: E402
from .source import source  # noqa: E402

main.add_command(source)
main.add_command(ledger)
main.add_command(compare)
main.add_command(sync)


if __name__ == "__main__":
    main()
