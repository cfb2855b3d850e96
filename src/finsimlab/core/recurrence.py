"""
Recurrence matching for recurring items.

A recurring item fires on a candidate date when the candidate is on or after
the anchor and the frequency rule holds:

- ``weekly``: whole-day distance from the anchor is a multiple of 7
- ``bi-weekly``: whole-day distance is a multiple of 14
- ``monthly``: day-of-month equals the anchor's day-of-month
- ``yearly``: day-of-month and month-of-year both equal the anchor's

An anchor on the 29th-31st produces no occurrence in months that lack that
day. Any other frequency is a configuration error.
"""

from __future__ import annotations

from datetime import date

import numpy as np

from .errors import ConfigError
from .kinds import Frequency
from .utils import day_of_month, month_of_year

_DAY_STEPS = {Frequency.WEEKLY: 7, Frequency.BIWEEKLY: 14}


def check_frequency(frequency: str) -> str:
    """Return ``frequency`` unchanged, or raise ConfigError if it is unknown."""
    if frequency not in Frequency.all_kinds():
        raise ConfigError(
            f"Unknown frequency {frequency!r}; expected one of {Frequency.all_kinds()}"
        )
    return frequency


def fires(frequency: str, anchor: date, on: date) -> bool:
    """
    Decide whether a rule with ``frequency`` anchored at ``anchor`` fires ``on``.

    Args:
        frequency: One of ``Frequency.all_kinds()``
        anchor: First possible occurrence of the rule
        on: Candidate calendar date

    Returns:
        True if the rule fires on the candidate date

    Raises:
        ConfigError: If the frequency is not recognized
    """
    check_frequency(frequency)
    if on < anchor:
        return False
    if frequency in _DAY_STEPS:
        return (on - anchor).days % _DAY_STEPS[frequency] == 0
    if frequency == Frequency.MONTHLY:
        return on.day == anchor.day
    return on.day == anchor.day and on.month == anchor.month


def occurrence_mask(frequency: str, anchor: date, t_index: np.ndarray) -> np.ndarray:
    """
    Vectorised :func:`fires` over a ``datetime64[D]`` day index.

    Args:
        frequency: One of ``Frequency.all_kinds()``
        anchor: First possible occurrence of the rule
        t_index: Daily time index, as produced by ``day_range``

    Returns:
        Boolean array aligned with ``t_index``
    """
    check_frequency(frequency)
    t_index = np.asarray(t_index, dtype="datetime64[D]")
    a = np.datetime64(anchor, "D")
    on_or_after = t_index >= a

    if frequency in _DAY_STEPS:
        delta = (t_index - a).astype(int)
        return on_or_after & (delta % _DAY_STEPS[frequency] == 0)

    same_day = day_of_month(t_index) == anchor.day
    if frequency == Frequency.MONTHLY:
        return on_or_after & same_day
    return on_or_after & same_day & (month_of_year(t_index) == anchor.month)


def occurrences(frequency: str, anchor: date, t_index: np.ndarray) -> list[date]:
    """List the calendar dates in ``t_index`` on which the rule fires."""
    mask = occurrence_mask(frequency, anchor, t_index)
    return [d.astype(date) for d in np.asarray(t_index, dtype="datetime64[D]")[mask]]
