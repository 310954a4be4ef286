"""
Ledger Package

Access to deposits stored in the accounting back-end.

Key Components:
- base: LedgerGateway protocol, SubmitResult and ledger errors
- quickbooks: QuickBooks Desktop via the QBFC COM SDK
- json_ledger: file-backed ledger for offline runs
- factory: open_ledger() context manager selecting a backend
"""

from .base import (
    LedgerConnectionError,
    LedgerError,
    LedgerGateway,
    LedgerRequestError,
    SubmitResult,
)
from .factory import open_ledger
from .json_ledger import JsonLedger
from .quickbooks import QuickBooksLedger, QuickBooksSession

__all__ = [
    "JsonLedger",
    "LedgerConnectionError",
    "LedgerError",
    "LedgerGateway",
    "LedgerRequestError",
    "QuickBooksLedger",
    "QuickBooksSession",
    "SubmitResult",
    "open_ledger",
]
