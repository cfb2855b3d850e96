"""
Configuration and context classes for FinSimLab simulation.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date

import numpy as np

from .errors import ConfigError
from .utils import day_range, horizon_end, to_date

SIMULATION_MONTHS = 24
UNKNOWN_ACCOUNT_POLICIES = ("ignore", "warn", "raise")


@dataclass
class SimulationConfig:
    """
    Configuration options for simulation runs.

    Attributes:
        horizon_months: Calendar months projected past ``today`` (default 24)
        unknown_account_policy: What to do with transactions booked against
            account ids that were not supplied:
            ``ignore`` drops them silently, ``warn`` drops them and logs a
            warning per offending rule, ``raise`` rejects the run.
            Dropped occurrences are listed on the result under both
            ``ignore`` and ``warn``.
    """

    horizon_months: int = SIMULATION_MONTHS
    unknown_account_policy: str = "warn"

    def __post_init__(self) -> None:
        try:
            months = int(self.horizon_months)
        except (TypeError, ValueError) as e:
            raise ConfigError(
                f"horizon_months must be a non-negative integer, got {self.horizon_months!r}"
            ) from e
        if months != self.horizon_months or months < 0:
            raise ConfigError(
                f"horizon_months must be a non-negative integer, got {self.horizon_months!r}"
            )
        self.horizon_months = months
        policy = str(self.unknown_account_policy).lower()
        if policy not in UNKNOWN_ACCOUNT_POLICIES:
            raise ConfigError(
                f"unknown_account_policy must be 'ignore'|'warn'|'raise', got {self.unknown_account_policy!r}"
            )
        self.unknown_account_policy = policy


@dataclass
class SimulationContext:
    """
    Time axis of a single simulation run.

    Attributes:
        today: First simulated day
        end: Last simulated day (inclusive)
        t_index: Daily ``datetime64[D]`` index covering ``[today, end]``
    """

    today: date
    end: date
    t_index: np.ndarray

    @classmethod
    def build(cls, today: date | str, config: SimulationConfig) -> SimulationContext:
        start = to_date(today, "today")
        end = horizon_end(start, config.horizon_months)
        return cls(today=start, end=end, t_index=day_range(start, end))

    def __len__(self) -> int:
        return len(self.t_index)
