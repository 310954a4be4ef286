"""
Deposit Source Package

Reads the credit/non-vendor export (Excel or delimited text) into Deposit
records keyed by Child ID.
"""

from .columns import REQUIRED_COLUMNS, account_for
from .loader import (
    LoadResult,
    SkippedRow,
    SourceFormatError,
    deposits_from_frame,
    load_csv_deposits,
    load_deposits,
    load_excel_deposits,
)

__all__ = [
    "LoadResult",
    "REQUIRED_COLUMNS",
    "SkippedRow",
    "SourceFormatError",
    "account_for",
    "deposits_from_frame",
    "load_csv_deposits",
    "load_deposits",
    "load_excel_deposits",
]
