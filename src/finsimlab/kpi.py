"""
KPI calculation utilities for simulation results.

All functions take a ``SimulationResult`` and work on its daily DataFrame
view, returning plain floats or pandas Series/DataFrames.
"""

from __future__ import annotations

from collections.abc import Iterable

import numpy as np
import pandas as pd

from finsimlab.core.entities import Account
from finsimlab.core.results import SimulationResult


def net_change(result: SimulationResult) -> float:
    """Final net worth minus the net worth on the first simulated day."""
    if not result.daily:
        return 0.0
    return round(result.final_net_worth - result.daily[0].total, 2)


def max_drawdown(result: SimulationResult, column: str = "total") -> float:
    """
    Largest peak-to-trough drop of ``column`` over the daily series.

    Measured in currency units rather than percent, since balances may be
    zero or negative.

    Args:
        result: Simulation result
        column: ``total`` or an account id

    Returns:
        Drawdown as a non-negative amount (0.0 when the series never falls)
    """
    df = result.frame("daily")
    if df.empty:
        return 0.0
    series = df[column]
    running_max = series.expanding().max()
    drawdown = running_max - series
    return float(round(drawdown.max(), 2))


def lowest_balances(result: SimulationResult) -> pd.DataFrame:
    """
    Lowest balance per account and the first date it occurred.

    Returns:
        DataFrame indexed by account id with columns ``min_balance`` and ``date``
    """
    df = result.frame("daily").drop(columns=["total", "n_events"])
    if df.empty:
        return pd.DataFrame(columns=["min_balance", "date"])
    return pd.DataFrame(
        {
            "min_balance": df.min(),
            "date": df.idxmin(),
        }
    )


def days_below_floor(
    result: SimulationResult, accounts: Iterable[Account]
) -> pd.Series:
    """
    Number of simulated days each floored account spends below its floor.

    Accounts without a floor are omitted.
    """
    df = result.frame("daily")
    counts = {}
    for account in accounts:
        if account.min_balance is None or account.id not in df.columns:
            continue
        counts[account.id] = int((df[account.id] < account.min_balance).sum())
    return pd.Series(counts, dtype=int, name="days_below_floor")


def monthly_net_flow(result: SimulationResult) -> pd.Series:
    """
    Sum of realized signed transaction amounts per calendar month.

    Returns:
        Series indexed by monthly Period; months without activity are 0.0
    """
    if not result.daily:
        return pd.Series(dtype=float, name="net_flow")
    rows = [
        (pd.Timestamp(point.date), event.amount)
        for point in result.daily
        for event in point.events
    ]
    periods = pd.period_range(
        pd.Timestamp(result.daily[0].date), pd.Timestamp(result.daily[-1].date), freq="M"
    )
    if not rows:
        return pd.Series(np.zeros(len(periods)), index=periods, name="net_flow")
    flows = pd.DataFrame(rows, columns=["date", "amount"])
    grouped = flows.groupby(flows["date"].dt.to_period("M"))["amount"].sum()
    return grouped.reindex(periods, fill_value=0.0).round(2).rename("net_flow")
