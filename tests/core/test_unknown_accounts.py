"""
Transactions booked against account ids that were not supplied.
"""

import logging

import pytest
from finsimlab import (
    Account,
    OneTimeTransaction,
    RecurringItem,
    SimulationConfig,
    UnknownAccountError,
    run_simulation,
)

TODAY = "2026-01-01"


def _inputs():
    accounts = [Account(id="chk", name="Checking", initial_balance=1000)]
    items = [
        RecurringItem(
            id="gym", name="Gym", amount=40, type="expense", frequency="monthly",
            account_id="ghost", start_date="2026-01-05",
        )
    ]
    txns = [
        OneTimeTransaction(
            id="gift", name="Gift", amount=99, type="income", date="2026-01-20", account_id="nowhere"
        )
    ]
    return accounts, items, txns


def _run(policy):
    accounts, items, txns = _inputs()
    return run_simulation(
        accounts,
        items,
        txns,
        today=TODAY,
        config=SimulationConfig(horizon_months=2, unknown_account_policy=policy),
    )


def test_ignore_drops_and_records():
    result = _run("ignore")
    assert all(p.total == 1000.0 for p in result.daily)
    assert all(not p.events for p in result.daily)
    assert [(d.source_id, d.date.isoformat()) for d in result.dropped] == [
        ("gym", "2026-01-05"),
        ("gift", "2026-01-20"),
        ("gym", "2026-02-05"),
    ]
    assert result.dropped[0].amount == -40.0
    assert result.summary()["dropped"] == 3


def test_dropped_days_are_not_activity():
    result = _run("ignore")
    assert [p.date.isoformat() for p in result.events] == ["2026-01-01", "2026-03-01"]


def test_warn_logs_each_offending_source(caplog):
    with caplog.at_level(logging.WARNING, logger="finsimlab.core.engine"):
        result = _run("warn")
    messages = [r.getMessage() for r in caplog.records]
    assert any("'gym' references unknown account 'ghost'" in m for m in messages)
    assert any("'gift' references unknown account 'nowhere'" in m for m in messages)
    assert len(result.dropped) == 3


def test_ignore_is_silent(caplog):
    with caplog.at_level(logging.WARNING, logger="finsimlab.core.engine"):
        _run("ignore")
    assert caplog.records == []


def test_warn_is_the_default_policy():
    assert SimulationConfig().unknown_account_policy == "warn"


def test_raise_rejects_the_run():
    with pytest.raises(UnknownAccountError) as excinfo:
        _run("RAISE")
    err = excinfo.value
    assert err.problem_ids == ["gym", "gift"]
    assert err.account_ids == ["ghost", "nowhere"]
    assert "problem_ids: [gym, gift]" in str(err)


def test_shared_ids_are_reported_once_each(caplog):
    accounts = [Account(id="chk", name="Checking")]
    items = [
        RecurringItem(
            id="dup", name="Gym", amount=40, type="expense", frequency="monthly",
            account_id="ghost", start_date="2026-01-05",
        )
    ]
    txns = [
        OneTimeTransaction(
            id="dup", name="Gift", amount=99, type="income", date="2026-01-20", account_id="nowhere"
        )
    ]
    with caplog.at_level(logging.WARNING, logger="finsimlab.core.engine"):
        run_simulation(accounts, items, txns, today=TODAY)
    assert len(caplog.records) == 2

    with pytest.raises(UnknownAccountError) as excinfo:
        run_simulation(
            accounts, items, txns, today=TODAY,
            config=SimulationConfig(unknown_account_policy="raise"),
        )
    assert excinfo.value.problem_ids == ["dup", "dup"]
    assert excinfo.value.account_ids == ["ghost", "nowhere"]
