#!/usr/bin/env python3
"""Tests for loading deposits from spreadsheet exports."""

import logging
from datetime import date

import pandas as pd
import pytest

from miscincome.core.config import ImportConfig
from miscincome.core.money import Money
from miscincome.source.columns import account_for
from miscincome.source.loader import (
    SourceFormatError,
    deposits_from_frame,
    load_deposits,
)
from tests.fixtures.deposits import SOURCE_HEADER, source_rows, write_source_csv, write_source_excel


def row(**overrides):
    """One export row with every column filled in."""
    base = dict(source_rows()[0])
    base.update(overrides)
    return base


@pytest.mark.source
@pytest.mark.unit
class TestAccountMapping:
    """Test Tier 1 type -> ledger account mapping."""

    @pytest.mark.parametrize(
        "tier1, tier2, account",
        [
            ("Income", "Consulting", "Sales"),
            ("Expense", "Fuel", "Automobile Expense"),
            ("Equity", "Draw", "Shareholder Distributions"),
            ("Other Income", "Rental", "Rental"),
            ("Other Income", "Refund", "Misc Credits"),
            ("Liability", "Loan", "Sales"),
            ("", "", "Sales"),
            (None, None, "Sales"),
        ],
    )
    def test_account_for(self, tier1, tier2, account):
        assert account_for(tier1, tier2) == account


@pytest.mark.source
@pytest.mark.unit
class TestDepositsFromFrame:
    """Test grouping rows into deposits."""

    def test_groups_rows_by_child_id_in_first_appearance_order(self):
        result = deposits_from_frame(pd.DataFrame(source_rows()))

        assert [deposit.key for deposit in result.deposits] == ["C-100", "C-200"]
        first = result.deposits[0]
        assert first.line_count == 2
        assert first.total == Money.from_cents(150050)
        assert [line.account_name for line in first.lines] == ["Sales", "Rental"]
        assert first.deposit_date.date == date(2024, 3, 15)
        assert first.deposit_to_account == "Checking"

    def test_line_fields(self):
        result = deposits_from_frame(pd.DataFrame(source_rows()))

        line = result.deposits[0].lines[0]
        assert line.received_from_name == "Acme Corp"
        assert line.memo == "March retainer"
        assert line.account_list_id == ""

        refund = result.deposits[1].lines[0]
        assert refund.amount == Money.from_cents(-4000)
        assert refund.account_name == "Automobile Expense"
        assert refund.received_from_name == "Misc Income"

    def test_configured_defaults(self):
        config = ImportConfig(deposit_to_account="Savings", default_received_from="Walk-in")

        result = deposits_from_frame(pd.DataFrame(source_rows()), config)

        assert result.deposits[0].deposit_to_account == "Savings"
        assert result.deposits[1].lines[0].received_from_name == "Walk-in"

    def test_memo_column_used_when_description_missing(self):
        frame = pd.DataFrame([row(Description="", Memo="from memo")])
        assert deposits_from_frame(frame).deposits[0].lines[0].memo == "from memo"

    def test_headers_are_stripped(self):
        frame = pd.DataFrame(source_rows()).rename(columns={"Child ID": " Child ID ", "Check Amount": "Check Amount "})
        assert len(deposits_from_frame(frame).deposits) == 2

    def test_missing_required_column_raises(self):
        frame = pd.DataFrame(source_rows()).drop(columns=["Tier 1 - Type"])
        with pytest.raises(SourceFormatError, match="Tier 1 - Type"):
            deposits_from_frame(frame)

    def test_rows_without_child_id_or_amount_are_skipped(self, caplog):
        frame = pd.DataFrame(
            [
                row(**{"Child ID": ""}),
                row(**{"Check Amount": ""}),
                row(**{"Check Amount": "twelve"}),
                row(**{"Child ID": "C-300", "Check Amount": "10.00"}),
            ]
        )

        with caplog.at_level(logging.WARNING):
            result = deposits_from_frame(frame)

        assert [deposit.key for deposit in result.deposits] == ["C-300"]
        assert [skipped.row_number for skipped in result.skipped] == [2, 3, 4]
        assert result.skipped[0].reason == "Missing Child ID"
        assert result.skipped[1].reason == "Missing Check Amount"
        assert "Row 4" in caplog.text

    def test_unparseable_bank_date_falls_back_to_today(self, caplog):
        frame = pd.DataFrame([row(**{"Bank Date": "not a date"})])

        with caplog.at_level(logging.WARNING):
            result = deposits_from_frame(frame)

        assert result.deposits[0].deposit_date.date == date.today()
        assert "Bank Date" in caplog.text

    def test_missing_bank_date_column_uses_today(self):
        frame = pd.DataFrame(source_rows()).drop(columns=["Bank Date"])
        assert deposits_from_frame(frame).deposits[0].deposit_date.date == date.today()

    def test_numeric_cells(self):
        frame = pd.DataFrame([row(**{"Child ID": 4512.0, "Check Amount": 99.99})])

        deposit = deposits_from_frame(frame).deposits[0]

        assert deposit.key == "4512"
        assert deposit.total == Money.from_cents(9999)

    def test_sub_cent_amounts_are_skipped(self, caplog):
        frame = pd.DataFrame(
            [
                row(**{"Child ID": "C-100", "Check Amount": "50.014"}),
                row(**{"Child ID": "C-100", "Check Amount": 99.995}),
                row(**{"Child ID": "C-100", "Check Amount": "50.010"}),
            ]
        )

        with caplog.at_level(logging.WARNING):
            result = deposits_from_frame(frame)

        assert [skipped.row_number for skipped in result.skipped] == [2, 3]
        assert result.skipped[0].reason == "Amount '50.014' has fractions of a cent"
        assert "fractions of a cent" in result.skipped[1].reason
        assert result.deposits[0].line_count == 1
        assert result.deposits[0].total == Money.from_cents(5001)
        assert "Row 2: Amount '50.014' has fractions of a cent, skipping row" in caplog.text


@pytest.mark.source
@pytest.mark.unit
class TestLoadDeposits:
    """Test reading files from disk."""

    def test_csv(self, tmp_path):
        path = write_source_csv(tmp_path / "export.csv")

        result = load_deposits(path)

        assert [deposit.key for deposit in result.deposits] == ["C-100", "C-200"]
        assert result.line_count == 3
        assert result.deposits[0].total == Money.from_cents(150050)

    def test_tab_delimited(self, tmp_path):
        path = tmp_path / "export.tsv"
        pd.DataFrame(source_rows(), columns=SOURCE_HEADER).to_csv(path, index=False, sep="\t")

        assert len(load_deposits(path).deposits) == 2

    def test_excel(self, tmp_path):
        path = write_source_excel(tmp_path / "export.xlsx")

        result = load_deposits(path)

        assert [deposit.key for deposit in result.deposits] == ["C-100", "C-200"]
        assert result.deposits[1].total == Money.from_cents(-4000)
        assert result.deposits[1].deposit_date.date == date(2024, 3, 20)

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_deposits(tmp_path / "nope.csv")

    def test_unsupported_extension(self, tmp_path):
        path = tmp_path / "export.pdf"
        path.write_text("not a spreadsheet")
        with pytest.raises(SourceFormatError, match="Unsupported"):
            load_deposits(path)

    def test_empty_csv_is_empty_result(self, tmp_path):
        path = tmp_path / "empty.csv"
        path.write_text("")

        result = load_deposits(path)

        assert result.deposits == []
        assert result.skipped == []

    def test_csv_without_required_columns(self, tmp_path):
        path = tmp_path / "wrong.csv"
        path.write_text("Name,Amount\nBob,12.00\n")
        with pytest.raises(SourceFormatError, match="missing required columns"):
            load_deposits(path)
