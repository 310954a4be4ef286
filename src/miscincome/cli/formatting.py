#!/usr/bin/env python3
"""
Console formatting for deposits and reconciliation results.

Functions return lists of lines so commands decide where they go.
"""

from ..core.models import Deposit
from ..core.money import sum_money
from ..reconcile.models import ReconciledDeposit, ReconciliationResult, ReconciliationStatus
from ..source.loader import SkippedRow

# (header, width)
DEPOSIT_COLUMNS = [
    ("Date", 10),
    ("Memo", 14),
    ("Deposit Account", 16),
    ("Account", 26),
    ("Received From", 20),
    ("Amount", 12),
]

STATUS_ICONS = {
    ReconciliationStatus.NEW: "➕",
    ReconciliationStatus.UNCHANGED: "✅",
    ReconciliationStatus.DIFFERENT: "⚠️ ",
    ReconciliationStatus.MISSING: "❓",
    ReconciliationStatus.FAILED_TO_ADD: "❌",
}


def truncate(text: str, width: int) -> str:
    """Cut text to width, marking the cut with '...'."""
    if len(text) <= width:
        return text
    if width <= 3:
        return text[:width]
    return text[: width - 3] + "..."


def _row(values: list[str]) -> str:
    cells = []
    for (header, width), value in zip(DEPOSIT_COLUMNS, values):
        value = truncate(value, width)
        cells.append(value.rjust(width) if header == "Amount" else value.ljust(width))
    return " ".join(cells).rstrip()


def deposit_table(deposits: list[Deposit]) -> list[str]:
    """
    One row per deposit line; date, memo and deposit account are shown on
    the first line of each deposit only.
    """
    lines = [_row([header for header, _ in DEPOSIT_COLUMNS])]
    lines.append(" ".join("-" * width for _, width in DEPOSIT_COLUMNS))

    for deposit in deposits:
        if not deposit.lines:
            lines.append(
                _row([str(deposit.deposit_date), deposit.key, deposit.deposit_to_account, "", "", str(deposit.total)])
            )
            continue
        for index, line in enumerate(deposit.lines):
            head = [str(deposit.deposit_date), deposit.key, deposit.deposit_to_account] if index == 0 else ["", "", ""]
            lines.append(_row(head + [line.account_name, line.received_from_name, str(line.amount)]))

    return lines


def deposit_summary(deposits: list[Deposit]) -> str:
    """E.g. "3 deposits, 5 lines, total $1234.56"."""
    line_count = sum(deposit.line_count for deposit in deposits)
    total = sum_money([deposit.total for deposit in deposits])
    return f"{len(deposits)} deposits, {line_count} lines, total {total}"


def skipped_lines(skipped: list[SkippedRow]) -> list[str]:
    return [f"   Row {row.row_number}: {row.reason}" for row in skipped]


def status_lines(record: ReconciledDeposit) -> list[str]:
    """Status line for one record plus its differences or error."""
    icon = STATUS_ICONS.get(record.status, " ")
    deposit = record.deposit
    head = f"{icon} {record.key}: {record.status.value} ({deposit.deposit_date}, {deposit.total})"
    if record.status == ReconciliationStatus.NEW and deposit.is_committed:
        head += f" -> TxnID {deposit.txn_id}"

    lines = [head]
    lines.extend(f"      {delta.describe()}" for delta in record.differences)
    if record.error:
        lines.append(f"      Error: {record.error}")
    return lines


def result_lines(result: ReconciliationResult) -> list[str]:
    lines: list[str] = []
    for record in result.records:
        lines.extend(status_lines(record))
    return lines


def summary_lines(result: ReconciliationResult) -> list[str]:
    """Summary block printed at the end of compare and sync."""
    lines = [
        "Reconciliation Summary:",
        f"   Incoming deposits: {result.incoming_count}",
        f"   Ledger deposits:   {result.existing_count}",
        f"   Unchanged:         {result.unchanged_count}",
        f"   Different:         {result.different_count}",
        f"   New:               {result.new_count}",
        f"   Missing:           {result.missing_count}",
    ]
    if result.failed_count:
        lines.append(f"   Failed to add:     {result.failed_count}")
    return lines
