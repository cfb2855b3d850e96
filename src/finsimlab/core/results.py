"""
Results and output structures for FinSimLab.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from datetime import date
from typing import Any

import numpy as np
import pandas as pd

RESOLUTIONS = ("daily", "monthly", "events")


@dataclass(frozen=True)
class TransactionEvent:
    """
    Signed effect of a rule or one-time transaction realized on one day.

    Attributes:
        name: Name of the originating rule/transaction
        amount: Signed amount (+ income, - expense)
        type: ``income`` or ``expense``
        account_id: Account the amount was booked against
        source_id: Id of the originating recurring item or one-time transaction
    """

    name: str
    amount: float
    type: str
    account_id: str = ""
    source_id: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "amount": self.amount,
            "type": self.type,
            "account_id": self.account_id,
            "source_id": self.source_id,
        }


@dataclass(frozen=True)
class SimulationPoint:
    """
    Snapshot of the ledger at the end of one simulated day.

    The header (``date``, ``total``, ``events``) is fixed; per-account
    balances live in the ``balances`` mapping keyed by account id, in the
    order the accounts were supplied.
    """

    date: date
    total: float
    balances: dict[str, float] = field(default_factory=dict)
    events: tuple[TransactionEvent, ...] = ()

    @property
    def has_activity(self) -> bool:
        return bool(self.events)

    def balance(self, account_id: str) -> float | None:
        """Balance of ``account_id`` or None if the account was not simulated."""
        return self.balances.get(account_id)

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {
            "date": self.date.isoformat(),
            "total": self.total,
            "balances": dict(self.balances),
        }
        if self.events:
            out["events"] = [e.to_dict() for e in self.events]
        return out


@dataclass(frozen=True)
class Alert:
    """A balance crossing below its account's floor."""

    date: date
    account_id: str
    account_name: str
    balance: float
    threshold: float
    message: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "date": self.date.isoformat(),
            "account_id": self.account_id,
            "account_name": self.account_name,
            "balance": self.balance,
            "threshold": self.threshold,
            "message": self.message,
        }


@dataclass(frozen=True)
class DroppedTransaction:
    """An occurrence absorbed because its account id is not a known account."""

    date: date
    source_id: str
    name: str
    account_id: str
    amount: float

    def to_dict(self) -> dict[str, Any]:
        return {
            "date": self.date.isoformat(),
            "source_id": self.source_id,
            "name": self.name,
            "account_id": self.account_id,
            "amount": self.amount,
        }


@dataclass
class SimulationResult:
    """
    Complete output of one simulation run.

    Attributes:
        daily: One point per simulated day, in date order
        monthly: Points dated on the 1st of a month, plus the last day
        events: First day, last day and every day with realized activity
        final_net_worth: Total of the last monthly point (0 if none)
        min_net_worth: Lowest daily total (0 if no days were simulated)
        max_net_worth: Highest daily total (0 if no days were simulated)
        alerts: Low-balance alerts in date order
        dropped: Occurrences booked against unknown accounts
        start: First simulated day
        end: Last simulated day
        horizon_months: Calendar months the run was configured to cover
    """

    daily: list[SimulationPoint]
    monthly: list[SimulationPoint]
    events: list[SimulationPoint]
    final_net_worth: float
    min_net_worth: float
    max_net_worth: float
    alerts: list[Alert] = field(default_factory=list)
    dropped: list[DroppedTransaction] = field(default_factory=list)
    start: date | None = None
    end: date | None = None
    horizon_months: int | None = None

    def series(self, resolution: str = "daily") -> list[SimulationPoint]:
        """Return the point list for ``resolution`` (daily|monthly|events)."""
        if resolution not in RESOLUTIONS:
            raise ValueError(
                f"resolution must be one of {RESOLUTIONS}, got {resolution!r}"
            )
        return getattr(self, resolution)

    def frame(self, resolution: str = "daily") -> pd.DataFrame:
        """
        Tabular view of a series.

        Returns:
            DataFrame indexed by a DatetimeIndex named ``date`` with one column
            per account id, then ``total`` and ``n_events``. Accounts are the
            union over the series, so a sparse caller never sees a KeyError.
        """
        points = self.series(resolution)
        account_ids: list[str] = []
        for point in points:
            for acc_id in point.balances:
                if acc_id not in account_ids:
                    account_ids.append(acc_id)

        index = pd.DatetimeIndex(
            [pd.Timestamp(p.date) for p in points], name="date"
        )
        data: dict[str, Any] = {
            acc_id: [p.balances.get(acc_id, np.nan) for p in points]
            for acc_id in account_ids
        }
        data["total"] = [p.total for p in points]
        data["n_events"] = [len(p.events) for p in points]
        columns = [*account_ids, "total", "n_events"]
        df = pd.DataFrame(data, index=index, columns=columns)
        df["n_events"] = df["n_events"].astype(int)
        return df

    def summary(self) -> dict[str, Any]:
        """Lightweight summary for API/CLI usage."""
        initial = self.daily[0].total if self.daily else 0.0
        return {
            "start": self.start.isoformat() if self.start else None,
            "end": self.end.isoformat() if self.end else None,
            "horizon_months": self.horizon_months,
            "days": len(self.daily),
            "initial_net_worth": initial,
            "final_net_worth": self.final_net_worth,
            "min_net_worth": self.min_net_worth,
            "max_net_worth": self.max_net_worth,
            "alerts": len(self.alerts),
            "dropped": len(self.dropped),
        }

    def to_dict(self) -> dict[str, Any]:
        """JSON-ready representation (stable key order)."""
        return {
            "start": self.start.isoformat() if self.start else None,
            "end": self.end.isoformat() if self.end else None,
            "horizon_months": self.horizon_months,
            "daily": [p.to_dict() for p in self.daily],
            "monthly": [p.to_dict() for p in self.monthly],
            "events": [p.to_dict() for p in self.events],
            "final_net_worth": self.final_net_worth,
            "min_net_worth": self.min_net_worth,
            "max_net_worth": self.max_net_worth,
            "alerts": [a.to_dict() for a in self.alerts],
            "dropped": [d.to_dict() for d in self.dropped],
        }

    def to_json(self, indent: int | None = None) -> str:
        return json.dumps(self.to_dict(), indent=indent)
