#!/usr/bin/env python3
"""
Deposit Source Loader

Loads the credit/non-vendor export (Excel workbook or delimited text) into
Deposit records, one per Child ID.

Functions:
- load_deposits: Dispatch on file extension
- load_excel_deposits: First worksheet of an .xlsx/.xlsm workbook
- load_csv_deposits: Comma, tab or semicolon delimited text
- deposits_from_frame: Group DataFrame rows into deposits
"""

import csv
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import pandas as pd

from ..core.config import ImportConfig
from ..core.dates import FinancialDate
from ..core.models import Deposit, DepositLine
from ..core.money import Money
from . import columns

logger = logging.getLogger(__name__)

EXCEL_SUFFIXES = {".xlsx", ".xlsm"}
TEXT_SUFFIXES = {".csv", ".txt", ".tsv"}


class SourceFormatError(ValueError):
    """The source file cannot be read as a deposit export."""


@dataclass(frozen=True)
class SkippedRow:
    """A spreadsheet row that did not become a deposit line."""

    row_number: int  # 1-based, header is row 1
    reason: str


@dataclass
class LoadResult:
    """Deposits parsed from a source file plus the rows that were dropped."""

    deposits: list[Deposit] = field(default_factory=list)
    skipped: list[SkippedRow] = field(default_factory=list)

    @property
    def line_count(self) -> int:
        return sum(deposit.line_count for deposit in self.deposits)


def load_deposits(path: str | Path, config: ImportConfig | None = None) -> LoadResult:
    """
    Load deposits from an Excel workbook or delimited text file.

    Args:
        path: Source file
        config: Defaults for deposit account and received-from name

    Returns:
        LoadResult with one Deposit per Child ID

    Raises:
        FileNotFoundError: If the file doesn't exist
        SourceFormatError: If the extension is unsupported or required columns are missing
    """
    path = Path(path)
    suffix = path.suffix.lower()

    if suffix in EXCEL_SUFFIXES:
        return load_excel_deposits(path, config)
    if suffix in TEXT_SUFFIXES:
        return load_csv_deposits(path, config)
    raise SourceFormatError(f"Unsupported source file type '{suffix}': {path}")


def load_excel_deposits(path: str | Path, config: ImportConfig | None = None) -> LoadResult:
    """Load deposits from the first worksheet of a workbook."""
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Source file not found: {path}")

    logger.info("Reading Excel file: %s", path)
    try:
        frame = pd.read_excel(path, sheet_name=0, dtype=object, engine="openpyxl")
    except (ValueError, OSError, KeyError) as e:
        raise SourceFormatError(f"Could not read workbook {path}: {e}") from e

    return deposits_from_frame(frame, config)


def load_csv_deposits(path: str | Path, config: ImportConfig | None = None) -> LoadResult:
    """Load deposits from delimited text; the delimiter is sniffed."""
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Source file not found: {path}")

    if path.stat().st_size == 0:
        logger.warning("Source file is empty: %s", path)
        return LoadResult()

    logger.info("Reading delimited file: %s", path)
    try:
        frame = pd.read_csv(
            path,
            sep="\t" if path.suffix.lower() == ".tsv" else None,
            engine="python",
            dtype=str,
            keep_default_na=False,
            encoding="utf-8-sig",
            skip_blank_lines=True,
        )
    except pd.errors.EmptyDataError:
        logger.warning("Source file is empty: %s", path)
        return LoadResult()
    except (pd.errors.ParserError, csv.Error, UnicodeDecodeError, ValueError) as e:
        raise SourceFormatError(f"Could not read delimited file {path}: {e}") from e

    return deposits_from_frame(frame, config)


def _cell(row: dict[str, Any], column: str) -> Any:
    """Cell value, or None for a missing column, NaN or blank text."""
    value = row.get(column)
    if value is None:
        return None
    if isinstance(value, str):
        value = value.strip()
        return value or None
    if pd.isna(value):
        return None
    return value


def _text(value: Any) -> str:
    """Text form of a cell; integral numbers lose their trailing .0."""
    if value is None:
        return ""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value).strip()


def deposits_from_frame(frame: pd.DataFrame, config: ImportConfig | None = None) -> LoadResult:
    """
    Group export rows into deposits.

    Every row becomes one line on the deposit for its Child ID. Rows without
    a Child ID or a usable Check Amount are skipped with a warning; an amount
    with fractions of a cent is not usable.

    Raises:
        SourceFormatError: If a required column is missing
    """
    config = config or ImportConfig()
    frame = frame.rename(columns=lambda name: str(name).strip())

    missing = [name for name in columns.REQUIRED_COLUMNS if name not in frame.columns]
    if missing:
        raise SourceFormatError(f"Source file missing required columns: {', '.join(missing)}")

    result = LoadResult()
    by_child_id: dict[str, Deposit] = {}

    for index, row in enumerate(frame.to_dict(orient="records")):
        row_number = index + 2

        child_id = _text(_cell(row, columns.CHILD_ID))
        if not child_id:
            _skip(result, row_number, "Missing Child ID")
            continue

        amount_value = _cell(row, columns.CHECK_AMOUNT)
        if amount_value is None:
            _skip(result, row_number, "Missing Check Amount")
            continue
        try:
            amount = Money.from_dollars(amount_value, exact=True)
        except ValueError as e:
            _skip(result, row_number, str(e))
            continue

        account = columns.account_for(
            _text(_cell(row, columns.TIER1_TYPE)),
            _text(_cell(row, columns.CHART_OF_ACCOUNT)),
        )
        memo = _text(_cell(row, columns.DESCRIPTION)) or _text(_cell(row, columns.MEMO))
        received_from = _text(_cell(row, columns.CUSTOMER)) or config.default_received_from

        deposit = by_child_id.get(child_id)
        if deposit is None:
            deposit = Deposit(
                key=child_id,
                deposit_date=_deposit_date(row, row_number),
                deposit_to_account=config.deposit_to_account,
                total=Money.zero(),
            )
            by_child_id[child_id] = deposit

        deposit.add_line(
            DepositLine(
                amount=amount,
                account_name=account,
                received_from_name=received_from,
                memo=memo,
            )
        )
        logger.debug("Added line to deposit %s: amount=%s, account=%s", child_id, amount, account)

    result.deposits = list(by_child_id.values())
    logger.info(
        "Parsed %d deposits with a total of %d lines (%d rows skipped)",
        len(result.deposits),
        result.line_count,
        len(result.skipped),
    )
    return result


def _deposit_date(row: dict[str, Any], row_number: int) -> FinancialDate:
    """Bank Date of the row when usable, otherwise today."""
    value = _cell(row, columns.BANK_DATE)
    if value is None:
        return FinancialDate.today()
    try:
        return FinancialDate.from_value(value)
    except ValueError:
        logger.warning("Row %d: could not parse Bank Date %r, using today", row_number, value)
        return FinancialDate.today()


def _skip(result: LoadResult, row_number: int, reason: str) -> None:
    logger.warning("Row %d: %s, skipping row", row_number, reason)
    result.skipped.append(SkippedRow(row_number=row_number, reason=reason))
