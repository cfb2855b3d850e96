"""
Simulation engine: the day-by-day balance projection.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from datetime import date

from .alerts import AlertDetector
from .context import SimulationConfig, SimulationContext
from .entities import Account, OneTimeTransaction, RecurringItem
from .errors import ConfigError, UnknownAccountError
from .ledger import Ledger
from .recurrence import occurrence_mask
from .results import Alert, DroppedTransaction, SimulationResult, TransactionEvent
from .series import SeriesAggregator
from .validation import validate_inputs

logger = logging.getLogger(__name__)


def run_simulation(
    accounts: Iterable[Account],
    recurring_items: Iterable[RecurringItem] = (),
    one_time_transactions: Iterable[OneTimeTransaction] = (),
    *,
    today: date | str,
    config: SimulationConfig | None = None,
) -> SimulationResult:
    """
    Project account balances from ``today`` to ``today + horizon``.

    The run is a single forward pass over every calendar day of the horizon.
    Each day:

    1. Recurring items that fire that day are applied, in input order
    2. One-time transactions dated that day are applied, in input order
    3. Balances are checked against account floors (edge-triggered alerts)
    4. The ledger is snapshotted into the daily/monthly/event series

    Inputs are never mutated and no state survives the call, so calling it
    twice with identical arguments yields identical results.

    Args:
        accounts: Accounts with starting balances and optional floors
        recurring_items: Recurring income/expense rules
        one_time_transactions: One-off transactions
        today: First simulated day (explicit, never read from the clock)
        config: Horizon length and unknown-account policy

    Returns:
        SimulationResult with all three series, net worth extremes and alerts

    Raises:
        ConfigError: On an unknown frequency or duplicate account ids. Raised
            before any day is simulated.
        UnknownAccountError: Under the ``raise`` policy, when a rule or
            transaction references an account that was not supplied

    **Example:**
        ```python
        from finsimlab import Account, RecurringItem, run_simulation

        result = run_simulation(
            [Account(id="chk", name="Checking", initial_balance=1000)],
            [RecurringItem(id="pay", name="Salary", amount=500, type="income",
                           frequency="monthly", account_id="chk",
                           start_date="2026-01-15")],
            today="2026-01-15",
        )
        result.final_net_worth  # 13500.0 after 25 paydays
        ```
    """
    config = config or SimulationConfig()
    accounts = list(accounts)
    recurring_items = list(recurring_items)
    one_time_transactions = list(one_time_transactions)

    report = validate_inputs(
        accounts, recurring_items, one_time_transactions, warn=True
    )
    if report.invalid_frequencies:
        item_id, freq = report.invalid_frequencies[0]
        raise ConfigError(f"RecurringItem '{item_id}': unknown frequency {freq!r}")
    if report.duplicate_account_ids:
        raise ConfigError(
            f"Duplicate account ids: {', '.join(report.duplicate_account_ids)}"
        )
    if report.unknown_account_refs:
        _handle_unknown_accounts(report.unknown_account_refs, config)

    ctx = SimulationContext.build(today, config)
    logger.debug(
        "Simulating %d accounts, %d recurring items, %d one-time transactions "
        "from %s to %s (%d days)",
        len(accounts),
        len(recurring_items),
        len(one_time_transactions),
        ctx.today,
        ctx.end,
        len(ctx),
    )

    # Pre-process recurring rules once over the whole horizon
    masks = [
        occurrence_mask(item.frequency, item.start_date, ctx.t_index)
        for item in recurring_items
    ]
    one_time_by_day: dict[date, list[OneTimeTransaction]] = {}
    for txn in one_time_transactions:
        if ctx.today <= txn.date <= ctx.end:
            one_time_by_day.setdefault(txn.date, []).append(txn)

    ledger = Ledger(accounts)
    detector = AlertDetector(accounts)
    aggregator = SeriesAggregator(ctx.today, ctx.end)
    alerts: list[Alert] = []
    dropped: list[DroppedTransaction] = []

    for t, day64 in enumerate(ctx.t_index):
        day = day64.astype(date)
        day_events: list[TransactionEvent] = []

        for item, mask in zip(recurring_items, masks):
            if mask[t]:
                _book(ledger, day, item, day_events, dropped)

        for txn in one_time_by_day.get(day, ()):
            _book(ledger, day, txn, day_events, dropped)

        alerts.extend(detector.observe(day, ledger.balances))
        aggregator.record(day, ledger, day_events)

    result = aggregator.build(
        alerts=alerts, dropped=dropped, horizon_months=config.horizon_months
    )
    logger.debug(
        "Simulation finished: final=%.2f min=%.2f max=%.2f alerts=%d dropped=%d",
        result.final_net_worth,
        result.min_net_worth,
        result.max_net_worth,
        len(result.alerts),
        len(result.dropped),
    )
    return result


def _book(
    ledger: Ledger,
    day: date,
    source: RecurringItem | OneTimeTransaction,
    day_events: list[TransactionEvent],
    dropped: list[DroppedTransaction],
) -> None:
    amount = source.signed_amount
    if ledger.apply(source.account_id, amount):
        day_events.append(
            TransactionEvent(
                name=source.name,
                amount=amount,
                type=source.type,
                account_id=source.account_id,
                source_id=source.id,
            )
        )
    else:
        dropped.append(
            DroppedTransaction(
                date=day,
                source_id=source.id,
                name=source.name,
                account_id=source.account_id,
                amount=amount,
            )
        )


def _handle_unknown_accounts(
    refs: list[tuple[str, str]], config: SimulationConfig
) -> None:
    policy = config.unknown_account_policy
    if policy == "raise":
        unknown = sorted({acc_id for _, acc_id in refs})
        raise UnknownAccountError(
            "Transactions reference unknown accounts: " + ", ".join(unknown),
            problem_ids=[source_id for source_id, _ in refs],
            account_ids=unknown,
        )
    if policy == "warn":
        for source_id, acc_id in refs:
            logger.warning(
                "'%s' references unknown account '%s'; its transactions will be dropped",
                source_id,
                acc_id,
            )


__all__ = ["run_simulation", "SimulationConfig"]
