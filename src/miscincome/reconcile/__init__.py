"""
Reconciliation Package

Matches spreadsheet deposits against ledger deposits by Child ID and
classifies each as New, Unchanged, Different, Missing or FailedToAdd.

Key Components:
- comparator: tolerant deposit equality and difference reporting
- engine: reconcile() and apply_submit_results()
- pipeline: load -> read ledger -> reconcile -> submit
"""

from .comparator import AMOUNT_TOLERANCE, deposit_differences, deposits_equal
from .engine import apply_submit_results, index_by_key, reconcile
from .models import FieldDelta, ReconciledDeposit, ReconciliationResult, ReconciliationStatus
from .pipeline import SyncReport, add_new_deposits, run_comparison, run_sync, submit_deposits

__all__ = [
    "AMOUNT_TOLERANCE",
    "FieldDelta",
    "ReconciledDeposit",
    "ReconciliationResult",
    "ReconciliationStatus",
    "SyncReport",
    "add_new_deposits",
    "apply_submit_results",
    "deposit_differences",
    "deposits_equal",
    "index_by_key",
    "reconcile",
    "run_comparison",
    "run_sync",
    "submit_deposits",
]
