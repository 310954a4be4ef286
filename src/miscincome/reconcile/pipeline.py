#!/usr/bin/env python3
"""
Sync Pipeline

Runs one reconciliation from start to finish:

1. load deposits from the source file
2. read existing deposits (ledger session #1)
3. classify with the reconciliation engine
4. optionally submit New deposits (ledger session #2)

Steps run strictly in order. A ledger connection failure propagates and
aborts the run; a rejected deposit only marks that deposit FailedToAdd.
Outcomes are recorded as each deposit is submitted, so deposits added
before a connection failure keep their transaction IDs.
"""

import logging
from collections.abc import Callable
from contextlib import AbstractContextManager
from dataclasses import dataclass
from pathlib import Path

from ..core.config import Config
from ..core.models import Deposit
from ..ledger.base import LedgerGateway, SubmitResult
from ..ledger.factory import open_ledger
from ..source.loader import LoadResult, load_deposits
from .engine import apply_submit_results, reconcile
from .models import ReconciliationResult

logger = logging.getLogger(__name__)

LedgerFactory = Callable[[], AbstractContextManager[LedgerGateway]]


@dataclass
class SyncReport:
    """What one pipeline run did."""

    load_result: LoadResult
    result: ReconciliationResult
    applied: bool = False

    @property
    def added(self) -> int:
        """Deposits that received a transaction ID during this run."""
        return sum(1 for deposit in self.result.new_deposits() if deposit.is_committed)

    @property
    def submitted(self) -> int:
        """Deposits the ledger answered for, accepted or rejected."""
        return self.added + self.result.failed_count


def default_ledger_factory(config: Config, backend: str | None = None) -> LedgerFactory:
    """Factory that opens a fresh ledger session on every call."""
    return lambda: open_ledger(config, backend)


def read_ledger(ledger_factory: LedgerFactory, log: logging.Logger) -> list[Deposit]:
    """Read every ledger deposit in its own session."""
    with ledger_factory() as ledger:
        existing = ledger.list_all()
    log.info("Read %d existing deposits from the ledger", len(existing))
    return existing


def submit_deposits(
    ledger: LedgerGateway,
    result: ReconciliationResult,
    log: logging.Logger | None = None,
) -> dict[str, SubmitResult]:
    """
    Submit every New deposit and record each outcome on the result.

    Each outcome is applied as soon as the ledger answers, so a
    LedgerConnectionError part way through leaves the deposits submitted
    before it with their transaction IDs.

    Returns:
        SubmitResult per deposit key, in submit order
    """
    log = log or logger
    deposits = result.new_deposits()
    if not deposits:
        log.warning("No new deposits to add.")
        return {}

    log.info("Adding %d deposits to the ledger", len(deposits))
    outcomes: dict[str, SubmitResult] = {}
    for deposit in deposits:
        outcome = ledger.submit(deposit)
        outcomes[deposit.key] = outcome
        apply_submit_results(result, {deposit.key: outcome}, log)
    return outcomes


def run_comparison(
    source_path: str | Path,
    config: Config,
    ledger_factory: LedgerFactory | None = None,
    log: logging.Logger | None = None,
) -> SyncReport:
    """
    Load the source file, read the ledger and classify every deposit.

    Raises:
        FileNotFoundError / SourceFormatError: If the source file is unusable
        LedgerError: If the ledger cannot be read
    """
    log = log or logger
    ledger_factory = ledger_factory or default_ledger_factory(config)

    load_result = load_deposits(source_path, config.importer)
    log.info("Loaded %d deposits from %s", len(load_result.deposits), source_path)

    existing = read_ledger(ledger_factory, log)
    result = reconcile(load_result.deposits, existing, log)
    return SyncReport(load_result=load_result, result=result)


def add_new_deposits(
    report: SyncReport,
    ledger_factory: LedgerFactory,
    log: logging.Logger | None = None,
) -> SyncReport:
    """
    Submit the New deposits of a comparison in a fresh ledger session.

    `report.applied` is set once the session opens; if the connection then
    drops, the error propagates and the report still holds every outcome
    recorded before it.
    """
    log = log or logger
    if not report.result.new_count:
        log.warning("No new deposits to add.")
        return report

    with ledger_factory() as ledger:
        report.applied = True
        submit_deposits(ledger, report.result, log)

    log.info("Added %d of %d new deposits", report.added, report.submitted)
    return report


def run_sync(
    source_path: str | Path,
    config: Config,
    ledger_factory: LedgerFactory | None = None,
    apply: bool = True,
    log: logging.Logger | None = None,
) -> SyncReport:
    """
    Full pipeline: compare, then add New deposits to the ledger when `apply` is set.

    Args:
        source_path: Excel or delimited export
        config: Application configuration
        ledger_factory: Callable returning a context manager that yields a
            LedgerGateway; called once for reading and once for writing
        apply: Submit New deposits (False = compare only)
        log: Logger for the run (default: module logger)

    Returns:
        SyncReport with the classification and submit counts
    """
    ledger_factory = ledger_factory or default_ledger_factory(config)
    report = run_comparison(source_path, config, ledger_factory, log)
    if apply:
        add_new_deposits(report, ledger_factory, log)
    return report
