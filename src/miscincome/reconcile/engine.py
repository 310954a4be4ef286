#!/usr/bin/env python3
"""
Reconciliation Engine

Matches incoming deposits (from a spreadsheet) against existing deposits
(from the ledger) by business key and classifies each one.

The engine is pure: no I/O apart from logging, and it never fails on
well-formed deposits. Duplicate keys on one side collapse to the last
occurrence.
"""

import logging
from collections.abc import Mapping

from ..core.models import Deposit
from ..ledger.base import SubmitResult
from .comparator import deposit_differences, deposits_equal
from .models import ReconciledDeposit, ReconciliationResult, ReconciliationStatus

logger = logging.getLogger(__name__)


def index_by_key(deposits: list[Deposit]) -> dict[str, Deposit]:
    """
    Map key -> deposit.

    A later deposit with the same key replaces the earlier one, but the key
    keeps its first-appearance position.
    """
    indexed: dict[str, Deposit] = {}
    for deposit in deposits:
        indexed[deposit.key] = deposit
    return indexed


def reconcile(
    incoming: list[Deposit],
    existing: list[Deposit],
    log: logging.Logger | None = None,
) -> ReconciliationResult:
    """
    Classify incoming and existing deposits.

    Args:
        incoming: Deposits parsed from the source file
        existing: Deposits currently in the ledger
        log: Logger for per-record classification lines (default: module logger)

    Returns:
        ReconciliationResult with every key from either side exactly once
    """
    log = log or logger
    log.info("Reconciliation started: %d incoming, %d existing deposits", len(incoming), len(existing))

    existing_by_key = index_by_key(existing)
    incoming_by_key = index_by_key(incoming)

    if len(existing_by_key) != len(existing):
        log.warning("Ledger has %d duplicate deposit keys; last one wins", len(existing) - len(existing_by_key))
    if len(incoming_by_key) != len(incoming):
        log.warning("Source has %d duplicate deposit keys; last one wins", len(incoming) - len(incoming_by_key))

    result = ReconciliationResult(incoming_count=len(incoming), existing_count=len(existing))

    for key, deposit in incoming_by_key.items():
        match = existing_by_key.get(key)
        if match is None:
            record = ReconciledDeposit(deposit=deposit, status=ReconciliationStatus.NEW)
        elif deposits_equal(match, deposit):
            record = ReconciledDeposit(deposit=deposit, status=ReconciliationStatus.UNCHANGED, existing=match)
        else:
            record = ReconciledDeposit(
                deposit=deposit,
                status=ReconciliationStatus.DIFFERENT,
                existing=match,
                differences=deposit_differences(match, deposit),
            )
        result.records.append(record)
        log.info("Deposit '%s' is %s.", key, record.status.value)

    for key, deposit in existing_by_key.items():
        if key not in incoming_by_key:
            result.records.append(
                ReconciledDeposit(deposit=deposit, status=ReconciliationStatus.MISSING, existing=deposit)
            )
            log.info("Deposit '%s' is %s.", key, ReconciliationStatus.MISSING.value)

    log.info(
        "Reconciliation completed: %d unchanged, %d different, %d new, %d missing",
        result.unchanged_count,
        result.different_count,
        result.new_count,
        result.missing_count,
    )
    return result


def apply_submit_results(
    result: ReconciliationResult,
    outcomes: Mapping[str, SubmitResult],
    log: logging.Logger | None = None,
) -> ReconciliationResult:
    """
    Record what the ledger said about submitted deposits.

    A successful submit stores the assigned transaction ID on the deposit and
    leaves it NEW. A failed submit moves the record to FAILED_TO_ADD and leaves
    the transaction ID empty.

    Args:
        result: Result from `reconcile`, updated in place
        outcomes: SubmitResult per deposit key
        log: Logger for status changes (default: module logger)

    Returns:
        The same result object

    Raises:
        ValueError: If an outcome refers to a key that is not classified NEW
    """
    log = log or logger

    for key, outcome in outcomes.items():
        record = result.by_key(key)
        if record is None or record.status != ReconciliationStatus.NEW:
            status = record.status.value if record else "unknown"
            raise ValueError(f"Deposit '{key}' is {status}; only New deposits can be submitted")

        if outcome.ok:
            record.deposit.txn_id = outcome.txn_id or ""
            log.info("Deposit '%s' added with TxnID %s.", key, record.deposit.txn_id)
        else:
            record.status = ReconciliationStatus.FAILED_TO_ADD
            record.error = outcome.error
            record.deposit.txn_id = ""
            log.info("Deposit '%s' is %s: %s", key, record.status.value, outcome.error)

    return result
