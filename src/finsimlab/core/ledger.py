"""
Running account balances for a simulation run.
"""

from __future__ import annotations

from collections.abc import Iterable

from .currency import round_money
from .entities import Account


class Ledger:
    """
    Mapping from account id to current balance.

    Balances are seeded from each account's ``initial_balance`` and keep the
    input order of the accounts, which is the order snapshots report them in.
    Amounts arriving here are already signed.
    """

    def __init__(self, accounts: Iterable[Account]):
        self._balances: dict[str, float] = {}
        for account in accounts:
            self._balances[account.id] = account.initial_balance

    def __contains__(self, account_id: object) -> bool:
        return account_id in self._balances

    def __len__(self) -> int:
        return len(self._balances)

    def get(self, account_id: str) -> float | None:
        return self._balances.get(account_id)

    def apply(self, account_id: str, signed_amount: float) -> bool:
        """
        Add ``signed_amount`` to the account's balance.

        Returns:
            True if applied, False if ``account_id`` is not a known account
            (the ledger is left untouched)
        """
        if account_id not in self._balances:
            return False
        self._balances[account_id] += signed_amount
        return True

    @property
    def balances(self) -> dict[str, float]:
        """Copy of the raw (unrounded) balances."""
        return dict(self._balances)

    def rounded(self) -> dict[str, float]:
        """Per-account balances rounded to cents, in account order."""
        return {acc_id: round_money(bal) for acc_id, bal in self._balances.items()}
