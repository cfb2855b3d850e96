"""
Smoke tests to verify basic imports and functionality.
"""


def test_import_finsimlab():
    """Test that we can import the main package."""
    import finsimlab

    assert hasattr(finsimlab, "__version__")
    assert finsimlab.__version__ == "0.1.0"


def test_public_api_is_exported():
    import finsimlab

    missing = [name for name in finsimlab.__all__ if not hasattr(finsimlab, name)]
    assert missing == []


def test_quick_start_runs():
    from finsimlab import Account, RecurringItem, run_simulation

    checking = Account(id="chk", name="Checking", initial_balance=15000, min_balance=5000)
    rent = RecurringItem(
        id="rent", name="Rent", amount=3500, type="expense",
        frequency="monthly", account_id="chk", start_date="2026-01-01",
    )
    result = run_simulation([checking], [rent], today="2026-01-01")
    # 15000 -> 11500 -> 8000 -> 4500 on the third rent day
    assert result.alerts[0].date.isoformat() == "2026-03-01"
    assert result.final_net_worth == 15000 - 3500 * 25
