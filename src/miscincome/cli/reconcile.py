#!/usr/bin/env python3
"""
Reconcile CLI - Compare spreadsheet deposits with the ledger and add new ones.
"""

import logging
from datetime import datetime
from pathlib import Path

import click

from ..core.config import Config, get_config
from ..core.json_utils import write_json
from ..ledger import LedgerError
from ..reconcile.models import ReconciliationStatus
from ..reconcile.pipeline import SyncReport, add_new_deposits, default_ledger_factory, run_comparison
from ..source.loader import SourceFormatError
from .formatting import result_lines, skipped_lines, summary_lines
from .ledger import LEDGER_OPTION

logger = logging.getLogger(__name__)

RUN_ERRORS = (FileNotFoundError, SourceFormatError, LedgerError, ValueError)


def _print_report(report: SyncReport) -> None:
    if report.load_result.skipped:
        click.echo(f"⚠️  Skipped {len(report.load_result.skipped)} source rows:")
        for line in skipped_lines(report.load_result.skipped):
            click.echo(line)
        click.echo()

    for line in result_lines(report.result):
        click.echo(line)
    click.echo()
    for line in summary_lines(report.result):
        click.echo(line)


def _write_report(
    report: SyncReport,
    source_file: Path,
    config: Config,
    backend: str | None,
    output_file: Path | None,
    mode: str,
) -> Path:
    if output_file is None:
        timestamp = datetime.now().strftime("%Y-%m-%d_%H-%M-%S")
        output_file = config.output_dir / f"{timestamp}_{mode}.json"

    write_json(
        output_file,
        {
            "metadata": {
                "source_file": str(source_file),
                "mode": mode,
                "ledger_backend": backend or config.ledger.backend,
                "timestamp": datetime.now().isoformat(timespec="seconds"),
            },
            "submitted": report.submitted,
            "added": report.added,
            **report.result.to_dict(),
        },
    )
    return output_file


@click.command()
@click.argument("file", type=click.Path(dir_okay=False, path_type=Path))
@LEDGER_OPTION
@click.option("--output-file", type=click.Path(dir_okay=False, path_type=Path), help="Write a JSON report")
@click.pass_context
def compare(ctx: click.Context, file: Path, backend: str | None, output_file: Path | None) -> None:
    """
    Compare spreadsheet deposits with the ledger without changing anything.

    Example:
      miscincome compare company_data.xlsx --ledger json
    """
    config = get_config()
    factory = default_ledger_factory(config, backend)

    if ctx.obj.get("verbose", False):
        click.echo(f"Source: {file}")
        click.echo(f"Ledger backend: {backend or config.ledger.backend}")
        click.echo()

    try:
        report = run_comparison(file, config, factory, logger)
    except RUN_ERRORS as e:
        click.echo(f"❌ Error comparing deposits: {e}", err=True)
        raise click.ClickException(str(e)) from e

    _print_report(report)

    if output_file is not None:
        saved = _write_report(report, file, config, backend, output_file, "compare")
        click.echo(f"\n   Report saved to: {saved}")


@click.command()
@click.argument("file", type=click.Path(dir_okay=False, path_type=Path))
@LEDGER_OPTION
@click.option("--dry-run", is_flag=True, help="Compare only; do not add deposits")
@click.option("--force", is_flag=True, help="Add deposits without confirmation prompt")
@click.option("--output-file", type=click.Path(dir_okay=False, path_type=Path), help="Write a JSON report")
@click.pass_context
def sync(
    ctx: click.Context,
    file: Path,
    backend: str | None,
    dry_run: bool,
    force: bool,
    output_file: Path | None,
) -> None:
    """
    Compare spreadsheet deposits with the ledger and add the New ones.

    Different and Missing deposits are reported only; existing ledger
    deposits are never changed.

    Examples:
      miscincome sync company_data.xlsx
      miscincome sync company_data.xlsx --ledger json --force
    """
    config = get_config()
    factory = default_ledger_factory(config, backend)

    try:
        report = run_comparison(file, config, factory, logger)
    except RUN_ERRORS as e:
        click.echo(f"❌ Error comparing deposits: {e}", err=True)
        raise click.ClickException(str(e)) from e

    _print_report(report)
    click.echo()

    submit_error: LedgerError | None = None
    new_count = report.result.new_count
    if new_count == 0:
        click.echo("✅ Ledger is up to date; nothing to add.")
    elif dry_run:
        click.echo(f"💡 Dry run: {new_count} deposits would be added.")
    elif force or click.confirm(f"Add {new_count} new deposits to the ledger?"):
        try:
            add_new_deposits(report, factory, logger)
        except LedgerError as e:
            submit_error = e

        click.echo(f"✅ Added {report.added} of {report.submitted} deposits")
        for deposit in report.result.new_deposits():
            if deposit.is_committed:
                click.echo(f"   {deposit.key} -> TxnID {deposit.txn_id}")
        failed = report.result.by_status(ReconciliationStatus.FAILED_TO_ADD)
        for record in failed:
            click.echo(f"❌ {record.key}: {record.error}")
    else:
        click.echo("Sync cancelled.")

    if output_file is not None:
        saved = _write_report(report, file, config, backend, output_file, "dry_run" if dry_run else "sync")
        click.echo(f"\n   Report saved to: {saved}")

    if submit_error is not None:
        click.echo(f"❌ Error adding deposits: {submit_error}", err=True)
        raise click.ClickException(str(submit_error)) from submit_error
