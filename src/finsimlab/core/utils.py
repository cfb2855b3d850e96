"""
Utility functions for FinSimLab.
"""

from __future__ import annotations

from datetime import date, datetime

import numpy as np
import pandas as pd

from .errors import ConfigError


def to_date(value: date | datetime | str | np.datetime64, label: str = "date") -> date:
    """
    Coerce a calendar date given as ``date``, ``datetime``, ISO string or datetime64.

    Time-of-day components are discarded; the simulation works on whole
    calendar days only.

    Raises:
        ConfigError: If the value cannot be interpreted as a date
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, np.datetime64):
        return value.astype("datetime64[D]").astype(date)
    if isinstance(value, str):
        try:
            return date.fromisoformat(value.strip()[:10])
        except ValueError as e:
            raise ConfigError(f"Invalid {label} {value!r}: {e}") from e
    raise ConfigError(f"Invalid {label} {value!r}: expected a date or ISO string")


def horizon_end(start: date, months: int) -> date:
    """
    Last simulated day for a horizon of ``months`` calendar months.

    Month arithmetic clamps to the end of the target month, e.g.
    2024-01-31 + 1 month is 2024-02-29.

    **Example:**
        ```python
        horizon_end(date(2026, 3, 10), 24)  # date(2028, 3, 10)
        ```
    """
    if months < 0:
        raise ConfigError(f"horizon_months must be >= 0, got {months}")
    return (pd.Timestamp(start) + pd.DateOffset(months=months)).date()


def day_range(start: date, end: date) -> np.ndarray:
    """
    Generate the inclusive daily index ``[start, end]`` as ``datetime64[D]``.

    This is the time axis every simulation run iterates over; masks produced
    by the recurrence matcher are aligned to it element by element.

    **Example:**
        ```python
        day_range(date(2026, 1, 30), date(2026, 2, 2))
        # array(['2026-01-30', '2026-01-31', '2026-02-01', '2026-02-02'],
        #       dtype='datetime64[D]')
        ```
    """
    s = np.datetime64(start, "D")
    e = np.datetime64(end, "D")
    if e < s:
        return np.array([], dtype="datetime64[D]")
    return np.arange(s, e + np.timedelta64(1, "D"), dtype="datetime64[D]")


def day_of_month(t_index: np.ndarray) -> np.ndarray:
    """Day-of-month (1-31) for each element of a ``datetime64[D]`` array."""
    return (t_index - t_index.astype("datetime64[M]")).astype(int) + 1


def month_of_year(t_index: np.ndarray) -> np.ndarray:
    """Month-of-year (1-12) for each element of a ``datetime64[D]`` array."""
    return t_index.astype("datetime64[M]").astype(int) % 12 + 1
