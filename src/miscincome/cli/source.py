#!/usr/bin/env python3
"""
Source CLI - Inspect spreadsheet exports before syncing.
"""

from pathlib import Path

import click

from ..core.config import get_config
from ..source.loader import SourceFormatError, load_deposits
from .formatting import deposit_summary, deposit_table, skipped_lines


@click.group()
def source() -> None:
    """Spreadsheet export commands."""
    pass


@source.command()
@click.argument("file", type=click.Path(dir_okay=False, path_type=Path))
@click.pass_context
def show(ctx: click.Context, file: Path) -> None:
    """
    Parse a spreadsheet export and print the deposits it contains.

    Example:
      miscincome source show company_data.xlsx
    """
    config = get_config()

    if ctx.obj.get("verbose", False):
        click.echo(f"Source: {file}")
        click.echo(f"Deposit account: {config.importer.deposit_to_account}")
        click.echo()

    try:
        load_result = load_deposits(file, config.importer)
    except (FileNotFoundError, SourceFormatError) as e:
        raise click.ClickException(str(e)) from e

    for line in deposit_table(load_result.deposits):
        click.echo(line)
    click.echo()
    click.echo(deposit_summary(load_result.deposits))

    if load_result.skipped:
        click.echo(f"\n⚠️  Skipped {len(load_result.skipped)} rows:")
        for line in skipped_lines(load_result.skipped):
            click.echo(line)
