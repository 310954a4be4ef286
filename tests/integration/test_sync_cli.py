#!/usr/bin/env python3
"""
Integration tests for the source, ledger, compare and sync commands.

Runs the real CLI against the JSON ledger backend in a temp data directory.
"""

import json

import pytest
from click.testing import CliRunner

from miscincome.cli.main import main
from miscincome.core.config import get_config
from miscincome.core.json_utils import write_json
from miscincome.ledger import json_ledger, quickbooks
from miscincome.ledger.base import LedgerConnectionError
from miscincome.ledger.json_ledger import JsonLedger
from tests.fixtures.deposits import make_deposit, write_source_csv, write_source_excel


@pytest.fixture
def source_file(tmp_path):
    return write_source_csv(tmp_path / "export.csv")


@pytest.fixture
def ledger_file():
    """JSON ledger already holding C-100 (unchanged) and C-900 (missing from the source)."""
    path = get_config().ledger.json_file
    write_json(
        path,
        {
            "deposits": [
                make_deposit("C-100", lines=[("Sales", 125000), ("Rental", 25050)], txn_id="JSON-1").to_dict(),
                make_deposit("C-900", txn_id="JSON-2").to_dict(),
            ]
        },
    )
    return path


@pytest.mark.integration
@pytest.mark.cli
class TestSourceCLI:
    """Test miscincome source show."""

    def setup_method(self):
        self.runner = CliRunner()

    def test_show_csv(self, source_file):
        result = self.runner.invoke(main, ["source", "show", str(source_file)])

        assert result.exit_code == 0, result.output
        assert "C-100" in result.output
        assert "Automobile Expense" in result.output
        assert "2 deposits, 3 lines, total $1460.50" in result.output

    def test_show_excel(self, tmp_path):
        path = write_source_excel(tmp_path / "export.xlsx")

        result = self.runner.invoke(main, ["source", "show", str(path)])

        assert result.exit_code == 0, result.output
        assert "2 deposits" in result.output

    def test_show_reports_skipped_rows(self, tmp_path):
        path = tmp_path / "export.csv"
        path.write_text(
            "Child ID,Check Amount,Tier 2 - Chart of Account,Tier 1 - Type\n"
            "C-1,10.00,Consulting,Income\n"
            ",5.00,Consulting,Income\n"
        )

        result = self.runner.invoke(main, ["source", "show", str(path)])

        assert result.exit_code == 0, result.output
        assert "Skipped 1 rows" in result.output
        assert "Row 3: Missing Child ID" in result.output

    def test_missing_file(self, tmp_path):
        result = self.runner.invoke(main, ["source", "show", str(tmp_path / "missing.csv")])

        assert result.exit_code != 0
        assert "Source file not found" in result.output


@pytest.mark.integration
@pytest.mark.cli
class TestLedgerCLI:
    """Test miscincome ledger list."""

    def setup_method(self):
        self.runner = CliRunner()

    def test_list_empty_ledger(self):
        result = self.runner.invoke(main, ["ledger", "list"])

        assert result.exit_code == 0, result.output
        assert "No deposits found" in result.output

    def test_list_deposits(self, ledger_file):
        result = self.runner.invoke(main, ["ledger", "list", "--ledger", "json"])

        assert result.exit_code == 0, result.output
        assert "C-900" in result.output
        assert "2 deposits, 3 lines, total $1600.50" in result.output

    def test_quickbooks_unavailable_is_clean_error(self, monkeypatch):
        def no_quickbooks(sdk_major_version):
            raise LedgerConnectionError("QuickBooks is not installed")

        monkeypatch.setattr(quickbooks, "_dispatch_session_manager", no_quickbooks)

        result = self.runner.invoke(main, ["ledger", "list", "--ledger", "quickbooks"])

        assert result.exit_code == 1
        assert "QuickBooks is not installed" in result.output


@pytest.mark.integration
@pytest.mark.cli
class TestCompareCLI:
    """Test miscincome compare."""

    def setup_method(self):
        self.runner = CliRunner()

    def test_compare_prints_statuses_and_summary(self, source_file, ledger_file):
        result = self.runner.invoke(main, ["compare", str(source_file)])

        assert result.exit_code == 0, result.output
        assert "C-100: Unchanged" in result.output
        assert "C-200: New" in result.output
        assert "C-900: Missing" in result.output
        assert "Reconciliation Summary:" in result.output

    def test_compare_never_writes(self, source_file, ledger_file):
        self.runner.invoke(main, ["compare", str(source_file)])

        assert len(JsonLedger(ledger_file).list_all()) == 2

    def test_compare_shows_differences(self, tmp_path, ledger_file):
        path = tmp_path / "export.csv"
        path.write_text(
            "Child ID,Check Amount,Tier 2 - Chart of Account,Tier 1 - Type\n"
            "C-900,65.00,Consulting,Income\n"
        )

        result = self.runner.invoke(main, ["compare", str(path)])

        assert "C-900: Different" in result.output
        assert "Sales: existing $100.00 vs incoming $65.00" in result.output

    def test_compare_writes_json_report(self, source_file, ledger_file, tmp_path):
        report_path = tmp_path / "out" / "report.json"

        result = self.runner.invoke(main, ["compare", str(source_file), "--output-file", str(report_path)])

        assert result.exit_code == 0, result.output
        report = json.loads(report_path.read_text())
        assert report["metadata"]["mode"] == "compare"
        assert report["summary"]["new"] == 1
        assert report["summary"]["missing"] == 1
        assert {record["status"] for record in report["records"]} == {"Unchanged", "New", "Missing"}

    def test_bad_source_is_clean_error(self, tmp_path):
        path = tmp_path / "export.csv"
        path.write_text("Name,Amount\nBob,1.00\n")

        result = self.runner.invoke(main, ["compare", str(path)])

        assert result.exit_code == 1
        assert "missing required columns" in result.output


@pytest.mark.integration
@pytest.mark.cli
class TestSyncCLI:
    """Test miscincome sync."""

    def setup_method(self):
        self.runner = CliRunner()

    def test_sync_force_adds_new_deposits(self, source_file, ledger_file):
        result = self.runner.invoke(main, ["sync", str(source_file), "--force"])

        assert result.exit_code == 0, result.output
        assert "Added 1 of 1 deposits" in result.output
        assert "C-200 -> TxnID JSON-3" in result.output
        stored = JsonLedger(ledger_file).list_all()
        assert [deposit.key for deposit in stored] == ["C-100", "C-900", "C-200"]

    def test_sync_is_idempotent(self, source_file, ledger_file):
        self.runner.invoke(main, ["sync", str(source_file), "--force"])
        result = self.runner.invoke(main, ["sync", str(source_file), "--force"])

        assert result.exit_code == 0, result.output
        assert "nothing to add" in result.output
        assert len(JsonLedger(ledger_file).list_all()) == 3

    def test_sync_dry_run(self, source_file, ledger_file):
        result = self.runner.invoke(main, ["sync", str(source_file), "--dry-run"])

        assert result.exit_code == 0, result.output
        assert "Dry run: 1 deposits would be added" in result.output
        assert len(JsonLedger(ledger_file).list_all()) == 2

    def test_sync_prompts_and_can_be_cancelled(self, source_file, ledger_file):
        result = self.runner.invoke(main, ["sync", str(source_file)], input="n\n")

        assert result.exit_code == 0, result.output
        assert "Add 1 new deposits to the ledger?" in result.output
        assert "Sync cancelled." in result.output
        assert len(JsonLedger(ledger_file).list_all()) == 2

    def test_sync_prompt_confirmed(self, source_file, ledger_file):
        result = self.runner.invoke(main, ["sync", str(source_file)], input="y\n")

        assert result.exit_code == 0, result.output
        assert len(JsonLedger(ledger_file).list_all()) == 3

    def test_sync_reports_failed_deposits(self, source_file, ledger_file, monkeypatch):
        monkeypatch.setattr(
            json_ledger, "validate_deposit", lambda deposit: "Account is inactive" if deposit.key == "C-200" else None
        )

        result = self.runner.invoke(main, ["sync", str(source_file), "--force"])

        assert result.exit_code == 0, result.output
        assert "Added 0 of 1 deposits" in result.output
        assert "C-200: Account is inactive" in result.output
        assert len(JsonLedger(ledger_file).list_all()) == 2

    def test_sync_connection_drop_reports_deposits_already_added(self, source_file, tmp_path, monkeypatch):
        def drop_on_c200(deposit):
            if deposit.key == "C-200":
                raise LedgerConnectionError("QuickBooks connection lost")
            return None

        monkeypatch.setattr(json_ledger, "validate_deposit", drop_on_c200)
        report_path = tmp_path / "sync.json"

        result = self.runner.invoke(main, ["sync", str(source_file), "--force", "--output-file", str(report_path)])

        assert result.exit_code == 1
        assert "Added 1 of 1 deposits" in result.output
        assert "C-100 -> TxnID JSON-1" in result.output
        assert "C-200 -> TxnID" not in result.output
        assert "QuickBooks connection lost" in result.output
        report = json.loads(report_path.read_text())
        assert report["added"] == 1
        records = {record["key"]: record for record in report["records"]}
        assert records["C-100"]["txn_id"] == "JSON-1"
        assert records["C-200"]["status"] == "New"
        assert records["C-200"]["txn_id"] == ""

    def test_sync_writes_report(self, source_file, ledger_file, tmp_path):
        report_path = tmp_path / "sync.json"

        self.runner.invoke(main, ["sync", str(source_file), "--force", "--output-file", str(report_path)])

        report = json.loads(report_path.read_text())
        assert report["metadata"]["mode"] == "sync"
        assert report["added"] == 1
        new_record = next(record for record in report["records"] if record["key"] == "C-200")
        assert new_record["txn_id"] == "JSON-3"
