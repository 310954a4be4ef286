#!/usr/bin/env python3
"""
Reconciliation Domain Models

Status taxonomy and result containers for one reconciliation run.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from ..core.models import Deposit


class ReconciliationStatus(Enum):
    """
    Outcome of comparing one deposit against the ledger.

    All statuses are terminal for a run. The only revision allowed is
    NEW -> FAILED_TO_ADD after a rejected submit.
    """

    NEW = "New"
    UNCHANGED = "Unchanged"
    DIFFERENT = "Different"
    MISSING = "Missing"
    FAILED_TO_ADD = "FailedToAdd"


@dataclass(frozen=True)
class FieldDelta:
    """One human-readable difference between a ledger deposit and an incoming one."""

    field: str  # "deposit_to_account", "total", "line_count" or "account:<name>"
    existing: str
    incoming: str

    @property
    def label(self) -> str:
        """Display label for the field."""
        if self.field.startswith("account:"):
            return self.field[len("account:") :]
        return {
            "deposit_to_account": "Deposit Account",
            "total": "Total Amount",
            "line_count": "Line Count",
        }.get(self.field, self.field)

    def describe(self) -> str:
        """Render as e.g. "Sales: existing $50.00 vs incoming $65.00"."""
        return f"{self.label}: existing {self.existing} vs incoming {self.incoming}"

    def to_dict(self) -> dict[str, str]:
        return {"field": self.field, "existing": self.existing, "incoming": self.incoming}


@dataclass
class ReconciledDeposit:
    """A deposit together with its classification."""

    deposit: Deposit
    status: ReconciliationStatus
    existing: Deposit | None = None
    differences: list[FieldDelta] = field(default_factory=list)
    error: str | None = None

    @property
    def key(self) -> str:
        return self.deposit.key

    def to_dict(self) -> dict[str, Any]:
        """Convert to dict for JSON serialization."""
        return {
            "key": self.key,
            "status": self.status.value,
            "txn_id": self.deposit.txn_id,
            "deposit": self.deposit.to_dict(),
            "existing_txn_id": self.existing.txn_id if self.existing else None,
            "differences": [delta.to_dict() for delta in self.differences],
            "error": self.error,
        }


@dataclass
class ReconciliationResult:
    """
    Full classification of one run.

    `records` holds every key from either side exactly once: incoming keys in
    first-appearance order, followed by keys that are only in the ledger.
    """

    records: list[ReconciledDeposit] = field(default_factory=list)
    incoming_count: int = 0
    existing_count: int = 0

    def by_status(self, status: ReconciliationStatus) -> list[ReconciledDeposit]:
        """Records with the given status, in result order."""
        return [record for record in self.records if record.status == status]

    def by_key(self, key: str) -> ReconciledDeposit | None:
        """Find the record classified under a key."""
        for record in self.records:
            if record.key == key:
                return record
        return None

    def count(self, status: ReconciliationStatus) -> int:
        return sum(1 for record in self.records if record.status == status)

    @property
    def new_count(self) -> int:
        return self.count(ReconciliationStatus.NEW)

    @property
    def unchanged_count(self) -> int:
        return self.count(ReconciliationStatus.UNCHANGED)

    @property
    def different_count(self) -> int:
        return self.count(ReconciliationStatus.DIFFERENT)

    @property
    def missing_count(self) -> int:
        return self.count(ReconciliationStatus.MISSING)

    @property
    def failed_count(self) -> int:
        return self.count(ReconciliationStatus.FAILED_TO_ADD)

    def new_deposits(self) -> list[Deposit]:
        """The actionable subset: deposits that are not in the ledger yet."""
        return [record.deposit for record in self.by_status(ReconciliationStatus.NEW)]

    def summary(self) -> dict[str, int]:
        """Counters for reporting."""
        return {
            "incoming": self.incoming_count,
            "existing": self.existing_count,
            "unchanged": self.unchanged_count,
            "different": self.different_count,
            "new": self.new_count,
            "missing": self.missing_count,
            "failed_to_add": self.failed_count,
        }

    def to_dict(self) -> dict[str, Any]:
        """Convert to dict for a JSON report."""
        return {
            "summary": self.summary(),
            "records": [record.to_dict() for record in self.records],
        }
