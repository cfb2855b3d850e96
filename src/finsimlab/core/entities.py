"""
Input entities for FinSimLab simulations.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import date

from .errors import ConfigError
from .kinds import Direction
from .utils import to_date


def _coerce_amount(owner: str, value, *, allow_negative: bool) -> float:
    try:
        amount = float(value)
    except (TypeError, ValueError) as e:
        raise ConfigError(f"{owner}: invalid amount {value!r}: {e}") from e
    if not math.isfinite(amount):
        raise ConfigError(f"{owner}: amount must be finite, got {value!r}")
    if not allow_negative and amount < 0:
        raise ConfigError(f"{owner}: amount must be >= 0, got {amount}")
    return amount


@dataclass(frozen=True)
class Account:
    """
    A balance-carrying account.

    Attributes:
        id: Opaque identifier, unique within a simulation
        name: Human-readable name
        initial_balance: Signed starting balance
        color: Display color (ignored by the engine)
        min_balance: Optional floor; crossing below it raises an alert
    """

    id: str
    name: str
    initial_balance: float = 0.0
    color: str = "#0ea5e9"
    min_balance: float | None = None

    def __post_init__(self) -> None:
        if not self.id:
            raise ConfigError(f"Account '{self.name}' must define an id")
        object.__setattr__(
            self,
            "initial_balance",
            _coerce_amount(
                f"Account '{self.id}'", self.initial_balance, allow_negative=True
            ),
        )
        if self.min_balance is not None:
            object.__setattr__(
                self,
                "min_balance",
                _coerce_amount(
                    f"Account '{self.id}' min_balance",
                    self.min_balance,
                    allow_negative=True,
                ),
            )


@dataclass(frozen=True)
class RecurringItem:
    """
    A rule that repeats a transaction from ``start_date`` onwards.

    The rule never terminates on its own. The frequency is validated lazily by
    the recurrence matcher so that loading a profile with a bad frequency
    still succeeds and the error surfaces when the run starts.

    Attributes:
        id: Opaque identifier
        name: Human-readable name, copied to each realized event
        amount: Unsigned magnitude
        type: ``income`` or ``expense``
        frequency: ``weekly``, ``bi-weekly``, ``monthly`` or ``yearly``
        account_id: Account the transaction is booked against
        start_date: Anchor date of the recurrence
    """

    id: str
    name: str
    amount: float
    type: str
    frequency: str
    account_id: str
    start_date: date

    def __post_init__(self) -> None:
        object.__setattr__(
            self,
            "amount",
            _coerce_amount(
                f"RecurringItem '{self.id}'", self.amount, allow_negative=False
            ),
        )
        object.__setattr__(
            self, "start_date", to_date(self.start_date, f"start_date of '{self.id}'")
        )
        if self.type not in Direction.all_kinds():
            raise ConfigError(
                f"RecurringItem '{self.id}': type must be 'income'|'expense', got {self.type!r}"
            )

    @property
    def signed_amount(self) -> float:
        return Direction.sign(self.type) * self.amount


@dataclass(frozen=True)
class OneTimeTransaction:
    """A single transaction booked on exactly one calendar date."""

    id: str
    name: str
    amount: float
    type: str
    date: date
    account_id: str

    def __post_init__(self) -> None:
        object.__setattr__(
            self,
            "amount",
            _coerce_amount(
                f"OneTimeTransaction '{self.id}'", self.amount, allow_negative=False
            ),
        )
        object.__setattr__(self, "date", to_date(self.date, f"date of '{self.id}'"))
        if self.type not in Direction.all_kinds():
            raise ConfigError(
                f"OneTimeTransaction '{self.id}': type must be 'income'|'expense', got {self.type!r}"
            )

    @property
    def signed_amount(self) -> float:
        return Direction.sign(self.type) * self.amount
