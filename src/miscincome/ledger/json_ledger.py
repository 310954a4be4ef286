#!/usr/bin/env python3
"""
JSON File Ledger

A file-backed ledger for dry runs, demos and hosts without QuickBooks.
Deposits are stored as {"deposits": [...]} using Deposit.to_dict().
"""

import logging
from pathlib import Path
from typing import Any

from ..core.json_utils import read_json, write_json
from ..core.models import Deposit
from ..core.money import ONE_CENT
from .base import LedgerRequestError, SubmitResult

logger = logging.getLogger(__name__)

TXN_ID_PREFIX = "JSON-"


class JsonLedger:
    """LedgerGateway stored in a single JSON file."""

    def __init__(self, path: str | Path):
        self.path = Path(path)

    def _load(self) -> list[dict[str, Any]]:
        if not self.path.exists():
            return []

        data: Any = read_json(self.path)
        if isinstance(data, dict):
            deposits: list[dict[str, Any]] = data.get("deposits", [])
        elif isinstance(data, list):
            deposits = data
        else:
            raise LedgerRequestError(f"Unrecognized ledger file format: {self.path}")
        return deposits

    def list_all(self) -> list[Deposit]:
        """Load every stored deposit. A missing file is an empty ledger."""
        deposits = [Deposit.from_dict(item) for item in self._load()]
        logger.info("Retrieved %d deposit transactions from %s", len(deposits), self.path)
        return deposits

    def submit(self, deposit: Deposit) -> SubmitResult:
        """Validate and append a deposit, assigning the next JSON-<n> ID."""
        problem = validate_deposit(deposit)
        if problem:
            logger.error("Error adding deposit with memo '%s': %s", deposit.key, problem)
            return SubmitResult.failed(problem)

        stored = self._load()
        txn_id = f"{TXN_ID_PREFIX}{_next_sequence(stored)}"

        record = deposit.to_dict()
        record["txn_id"] = txn_id
        stored.append(record)
        write_json(self.path, {"deposits": stored})

        return SubmitResult.succeeded(txn_id)


def validate_deposit(deposit: Deposit) -> str | None:
    """Return why a ledger would reject the deposit, or None if it is acceptable."""
    if not deposit.deposit_to_account.strip():
        return "Deposit account is required"
    if not deposit.lines:
        return "Deposit must have at least one line"
    if any(not line.account_name.strip() for line in deposit.lines):
        return "Every deposit line needs an account"
    if not deposit.line_total.is_close(deposit.total, ONE_CENT):
        return f"Deposit total {deposit.total} does not match line amounts {deposit.line_total}"
    return None


def _next_sequence(stored: list[dict[str, Any]]) -> int:
    highest = 0
    for item in stored:
        txn_id = str(item.get("txn_id", ""))
        if txn_id.startswith(TXN_ID_PREFIX) and txn_id[len(TXN_ID_PREFIX) :].isdigit():
            highest = max(highest, int(txn_id[len(TXN_ID_PREFIX) :]))
    return highest + 1
