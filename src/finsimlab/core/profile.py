"""
User profiles and entity builders.

A profile bundles everything one simulation needs. Entity ids are produced by
an injected ``IdFactory`` so that callers (and tests) control identity; the
engine itself never generates ids.
"""

from __future__ import annotations

import itertools
import uuid
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import date

from .context import SimulationConfig
from .engine import run_simulation
from .entities import Account, OneTimeTransaction, RecurringItem
from .kinds import Direction, Frequency
from .results import SimulationResult

IdFactory = Callable[[], str]


def uuid_id_factory() -> str:
    """Default identity generator: a random UUID4 string."""
    return str(uuid.uuid4())


def sequential_id_factory(prefix: str = "", start: int = 1) -> IdFactory:
    """
    Deterministic identity generator yielding ``prefix1``, ``prefix2``, ...

    **Example:**
        ```python
        next_id = sequential_id_factory("acc-")
        next_id(), next_id()  # ('acc-1', 'acc-2')
        ```
    """
    counter = itertools.count(start)

    def _next() -> str:
        return f"{prefix}{next(counter)}"

    return _next


@dataclass
class UserProfile:
    """
    A named input set for the simulation engine.

    Attributes:
        id: Profile identifier (the persistence key)
        name: Display name
        accounts: Accounts in display order
        recurring_items: Recurring rules
        one_time_transactions: One-off transactions
    """

    id: str
    name: str
    accounts: list[Account] = field(default_factory=list)
    recurring_items: list[RecurringItem] = field(default_factory=list)
    one_time_transactions: list[OneTimeTransaction] = field(default_factory=list)

    def account(self, account_id: str) -> Account | None:
        return next((a for a in self.accounts if a.id == account_id), None)

    def run(
        self, today: date | str, config: SimulationConfig | None = None
    ) -> SimulationResult:
        """Simulate this profile from ``today``."""
        return run_simulation(
            self.accounts,
            self.recurring_items,
            self.one_time_transactions,
            today=today,
            config=config,
        )


def new_account(
    name: str,
    initial_balance: float = 0.0,
    *,
    color: str = "#0ea5e9",
    min_balance: float | None = None,
    id_factory: IdFactory = uuid_id_factory,
) -> Account:
    return Account(
        id=id_factory(),
        name=name,
        initial_balance=initial_balance,
        color=color,
        min_balance=min_balance,
    )


def new_recurring_item(
    name: str,
    amount: float,
    type: str,
    frequency: str,
    account_id: str,
    start_date: date | str,
    *,
    id_factory: IdFactory = uuid_id_factory,
) -> RecurringItem:
    return RecurringItem(
        id=id_factory(),
        name=name,
        amount=amount,
        type=type,
        frequency=frequency,
        account_id=account_id,
        start_date=start_date,
    )


def new_one_time_transaction(
    name: str,
    amount: float,
    type: str,
    on: date | str,
    account_id: str,
    *,
    id_factory: IdFactory = uuid_id_factory,
) -> OneTimeTransaction:
    return OneTimeTransaction(
        id=id_factory(),
        name=name,
        amount=amount,
        type=type,
        date=on,
        account_id=account_id,
    )


def create_empty_profile(
    name: str, *, id_factory: IdFactory = uuid_id_factory
) -> UserProfile:
    """Profile with no accounts or transactions."""
    return UserProfile(id=id_factory(), name=name)


def create_default_profile(
    name: str = "Demo User",
    *,
    today: date | str,
    id_factory: IdFactory = uuid_id_factory,
) -> UserProfile:
    """
    Demo profile: a checking account with a 5,000 floor and a savings account.

    Checking receives a monthly salary and pays rent and a savings deposit;
    savings receives the deposit. All rules are anchored on ``today``.
    """
    checking = Account(
        id="1",
        name="Checking (Chase)",
        initial_balance=15000,
        color="#0ea5e9",
        min_balance=5000,
    )
    savings = Account(
        id="2", name="Savings (HYSA)", initial_balance=50000, color="#f59e0b"
    )
    monthly = Frequency.MONTHLY
    items = [
        RecurringItem("1", "Salary", 12000, Direction.INCOME, monthly, "1", today),
        RecurringItem("2", "Rent", 3500, Direction.EXPENSE, monthly, "1", today),
        RecurringItem(
            "3", "Savings Deposit", 2000, Direction.EXPENSE, monthly, "1", today
        ),
        RecurringItem(
            "4", "Savings Interest/In", 2000, Direction.INCOME, monthly, "2", today
        ),
    ]
    return UserProfile(
        id=id_factory(),
        name=name,
        accounts=[checking, savings],
        recurring_items=items,
    )
