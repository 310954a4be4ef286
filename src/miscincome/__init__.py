"""
MiscIncome Sync - Spreadsheet to QuickBooks Deposit Reconciliation

Reads "Misc Income" deposits from a spreadsheet export, compares them with
the deposits already recorded in the QuickBooks ledger and adds the ones
that are missing.

Domain Packages:
- core: Money, dates, deposit models, configuration
- source: Spreadsheet / delimited text importer
- ledger: QuickBooks (QBFC) and JSON ledger gateways
- reconcile: Classification engine and sync pipeline
- cli: Command-line interface (miscincome)

Example Usage:
    from miscincome.core.config import get_config
    from miscincome.reconcile import run_comparison

    report = run_comparison("company_data.xlsx", get_config())
    print(report.result.summary())
"""

__version__ = "0.1.0"
__author__ = "MiscIncome Sync Maintainers"

from .core.config import Environment, get_config
from .core.models import Deposit, DepositLine
from .core.money import Money
from .reconcile import ReconciliationResult, ReconciliationStatus, reconcile, run_comparison, run_sync

__all__ = [
    # Models
    "Deposit",
    "DepositLine",
    "Money",

    # Reconciliation
    "ReconciliationResult",
    "ReconciliationStatus",
    "reconcile",
    "run_comparison",
    "run_sync",

    # Configuration
    "get_config",
    "Environment",
]
