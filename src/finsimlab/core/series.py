"""
Multi-resolution aggregation of daily ledger snapshots.
"""

from __future__ import annotations

from collections.abc import Iterable
from datetime import date

from .currency import rounded_total
from .ledger import Ledger
from .results import Alert, DroppedTransaction, SimulationPoint, SimulationResult, TransactionEvent


class SeriesAggregator:
    """
    Record one snapshot per simulated day and classify it into resolutions.

    Every snapshot lands in the daily series. It is also published to the
    monthly series when it falls on the 1st of a month or on the last day of
    the horizon, and to the event series when it is the first or last day or
    carries at least one realized transaction. Running min/max of the total
    is tracked over the daily series.

    Args:
        start: First day of the horizon
        end: Last day of the horizon
    """

    def __init__(self, start: date, end: date):
        self.start = start
        self.end = end
        self.daily: list[SimulationPoint] = []
        self.monthly: list[SimulationPoint] = []
        self.events: list[SimulationPoint] = []
        self._min: float | None = None
        self._max: float | None = None

    def record(
        self, day: date, ledger: Ledger, events: Iterable[TransactionEvent] = ()
    ) -> SimulationPoint:
        """
        Snapshot ``ledger`` for ``day``.

        Balances are rounded per account first; the total is the rounded sum
        of those rounded balances.
        """
        balances = ledger.rounded()
        point = SimulationPoint(
            date=day,
            total=rounded_total(balances.values()),
            balances=balances,
            events=tuple(events),
        )

        self.daily.append(point)
        is_last = day == self.end
        if day.day == 1 or is_last:
            self.monthly.append(point)
        if day == self.start or is_last or point.has_activity:
            self.events.append(point)

        if self._min is None or point.total < self._min:
            self._min = point.total
        if self._max is None or point.total > self._max:
            self._max = point.total
        return point

    def build(
        self,
        alerts: list[Alert] | None = None,
        dropped: list[DroppedTransaction] | None = None,
        horizon_months: int | None = None,
    ) -> SimulationResult:
        """Assemble the SimulationResult from what has been recorded."""
        return SimulationResult(
            daily=list(self.daily),
            monthly=list(self.monthly),
            events=list(self.events),
            final_net_worth=self.monthly[-1].total if self.monthly else 0.0,
            min_net_worth=self._min if self._min is not None else 0.0,
            max_net_worth=self._max if self._max is not None else 0.0,
            alerts=list(alerts or []),
            dropped=list(dropped or []),
            start=self.start,
            end=self.end,
            horizon_months=horizon_months,
        )
