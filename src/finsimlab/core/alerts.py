"""
Edge-triggered low-balance alerts.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from datetime import date

from .currency import round_money
from .entities import Account
from .results import Alert


def threshold_message(threshold: float) -> str:
    """Human-readable alert text, e.g. ``Balance below threshold ($5,000.00)``."""
    return f"Balance below threshold (${threshold:,.2f})"


class AlertDetector:
    """
    Emit an Alert the day a balance first drops below its account's floor.

    The detector remembers only the previous day's balance per account. An
    alert fires when ``today < floor <= yesterday``; a balance that stays
    below the floor does not alert again until it has recovered to at least
    the floor and crossed below once more.

    The previous-day map is seeded from the starting balances, so an account
    that starts below its floor cannot alert before it recovers.
    """

    def __init__(self, accounts: Iterable[Account]):
        self._accounts: dict[str, Account] = {}
        self._previous: dict[str, float] = {}
        for account in accounts:
            self._accounts[account.id] = account
            self._previous[account.id] = account.initial_balance

    def observe(self, day: date, balances: Mapping[str, float]) -> list[Alert]:
        """
        Compare today's balances with yesterday's and roll the window forward.

        Args:
            day: The simulated day the balances belong to
            balances: Raw balances after all of the day's transactions

        Returns:
            Alerts raised on ``day`` (usually empty)
        """
        alerts: list[Alert] = []
        for acc_id, current in balances.items():
            account = self._accounts.get(acc_id)
            previous = self._previous.get(acc_id, current)
            floor = account.min_balance if account is not None else None
            if floor is not None and current < floor and previous >= floor:
                alerts.append(
                    Alert(
                        date=day,
                        account_id=acc_id,
                        account_name=account.name,
                        balance=round_money(current),
                        threshold=floor,
                        message=threshold_message(floor),
                    )
                )
            self._previous[acc_id] = current
        return alerts
