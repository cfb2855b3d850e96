"""
Tests for ValidationReport and validate_inputs.
"""

import pytest
from finsimlab import Account, OneTimeTransaction, RecurringItem, ValidationReport, validate_inputs


def _item(item_id, frequency="monthly", account_id="a"):
    return RecurringItem(
        id=item_id, name=item_id, amount=1, type="income", frequency=frequency,
        account_id=account_id, start_date="2026-01-01",
    )


class TestValidationReport:
    def test_clean_report(self):
        report = ValidationReport()
        assert report.is_valid()
        assert not report.has_warnings()
        assert report.get_exit_code() == 0
        assert str(report) == "✅ Validation passed"

    def test_warnings_only(self):
        report = ValidationReport(unknown_account_refs=[("r1", "ghost")])
        assert report.is_valid()
        assert report.get_exit_code() == 2
        assert "'r1' references unknown account 'ghost'" in str(report)

    def test_errors_win_over_warnings(self):
        report = ValidationReport(
            invalid_frequencies=[("r1", "daily")], below_floor_at_start=["a"]
        )
        assert not report.is_valid()
        assert report.get_exit_code() == 1
        text = str(report)
        assert text.startswith("❌ Validation failed")
        assert "Unknown frequency on 'r1': 'daily'" in text
        assert "Starting below minimum balance: a" in text

    def test_to_dict(self):
        data = ValidationReport(duplicate_account_ids=["a"]).to_dict()
        assert data["duplicate_account_ids"] == ["a"]
        assert data["has_errors"] is True
        assert data["exit_code"] == 1


class TestValidateInputs:
    def test_collects_every_problem(self):
        accounts = [
            Account(id="a", name="A", initial_balance=10, min_balance=100),
            Account(id="b", name="B"),
            Account(id="b", name="B again"),
        ]
        items = [_item("r1", frequency="quarterly"), _item("r2", account_id="zzz")]
        txns = [
            OneTimeTransaction(id="t1", name="t1", amount=1, type="expense", date="2026-01-02", account_id="yyy")
        ]
        report = validate_inputs(accounts, items, txns)

        assert report.invalid_frequencies == [("r1", "quarterly")]
        assert report.duplicate_account_ids == ["b"]
        assert report.unknown_account_refs == [("r2", "zzz"), ("t1", "yyy")]
        assert report.below_floor_at_start == ["a"]

    def test_valid_inputs(self):
        report = validate_inputs([Account(id="a", name="A")], [_item("r1")])
        assert report.get_exit_code() == 0

    def test_warn_flag_emits_user_warning(self):
        accounts = [Account(id="a", name="A", initial_balance=10, min_balance=100)]
        with pytest.warns(UserWarning, match="no alert fires until it recovers"):
            validate_inputs(accounts, warn=True)

    def test_shared_ids_across_entity_kinds_are_kept(self):
        items = [_item("x1", account_id="ghost")]
        txns = [
            OneTimeTransaction(id="x1", name="x1", amount=1, type="expense", date="2026-01-02", account_id="void")
        ]
        report = validate_inputs([Account(id="a", name="A")], items, txns)
        assert report.unknown_account_refs == [("x1", "ghost"), ("x1", "void")]
        assert report.to_dict()["unknown_account_refs"] == [
            {"id": "x1", "account_id": "ghost"},
            {"id": "x1", "account_id": "void"},
        ]
