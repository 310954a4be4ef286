#!/usr/bin/env python3
"""
Core Data Models for MiscIncome Sync

The canonical in-memory shape of a "Misc Income" deposit. Spreadsheet
importers and ledger readers both produce these models, and the
reconciliation engine compares them.
"""

from dataclasses import dataclass, field
from typing import Any

from .dates import FinancialDate
from .money import Money, sum_money


@dataclass
class DepositLine:
    """
    One allocation of a deposit's total to a counterparty/account pair.

    List IDs are the ledger's internal references; they are empty for lines
    that came from a spreadsheet and are only used when submitting.
    """

    amount: Money
    account_name: str = ""
    account_list_id: str = ""
    received_from_name: str = ""
    received_from_list_id: str = ""
    memo: str = ""

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "amount": self.amount.to_cents(),
            "account_name": self.account_name,
            "account_list_id": self.account_list_id,
            "received_from_name": self.received_from_name,
            "received_from_list_id": self.received_from_list_id,
            "memo": self.memo,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "DepositLine":
        """Create DepositLine from dictionary (amount in cents)."""
        return cls(
            amount=Money.from_cents(int(data["amount"])),
            account_name=data.get("account_name", ""),
            account_list_id=data.get("account_list_id", ""),
            received_from_name=data.get("received_from_name", ""),
            received_from_list_id=data.get("received_from_list_id", ""),
            memo=data.get("memo", ""),
        )


@dataclass
class Deposit:
    """
    A deposit transaction with its line items.

    `key` is the business identity used to match a spreadsheet row group to a
    ledger deposit: the Child ID, stored in the deposit memo in QuickBooks.
    `txn_id` stays empty until the ledger confirms the deposit was stored.

    Producers are responsible for keeping `total` equal to the sum of the
    line amounts; see `line_total`.
    """

    key: str
    deposit_date: FinancialDate
    deposit_to_account: str
    total: Money
    lines: list[DepositLine] = field(default_factory=list)
    txn_id: str = ""

    @property
    def line_total(self) -> Money:
        """Sum of the line amounts."""
        return sum_money([line.amount for line in self.lines])

    @property
    def line_count(self) -> int:
        return len(self.lines)

    @property
    def is_committed(self) -> bool:
        """True once the ledger has assigned a transaction ID."""
        return bool(self.txn_id)

    def add_line(self, line: DepositLine) -> None:
        """Append a line and add its amount to the total."""
        self.lines.append(line)
        self.total = self.total + line.amount

    def amounts_by_account(self) -> dict[str, Money]:
        """
        Sum line amounts per account name.

        Returns:
            Dict of account name -> summed amount, in order of first appearance
        """
        grouped: dict[str, Money] = {}
        for line in self.lines:
            grouped[line.account_name] = grouped.get(line.account_name, Money.zero()) + line.amount
        return grouped

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization (amounts in cents)."""
        return {
            "key": self.key,
            "txn_id": self.txn_id,
            "deposit_date": self.deposit_date.to_iso_string(),
            "deposit_to_account": self.deposit_to_account,
            "total": self.total.to_cents(),
            "lines": [line.to_dict() for line in self.lines],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Deposit":
        """Create Deposit from dictionary produced by `to_dict`."""
        return cls(
            key=str(data.get("key", "")),
            txn_id=data.get("txn_id", ""),
            deposit_date=FinancialDate.from_string(data["deposit_date"], "%Y-%m-%d"),
            deposit_to_account=data.get("deposit_to_account", ""),
            total=Money.from_cents(int(data["total"])),
            lines=[DepositLine.from_dict(line) for line in data.get("lines", [])],
        )
