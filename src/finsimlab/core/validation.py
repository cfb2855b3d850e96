"""
Validation and reporting utilities for FinSimLab.

Provides a structured validation report over a simulation input set.
"""
from __future__ import annotations

import warnings
from collections import Counter
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any

from .entities import Account, OneTimeTransaction, RecurringItem
from .kinds import Frequency


@dataclass
class ValidationReport:
    """
    Structured validation report for a simulation input set.

    Errors abort a run; warnings describe input that will simulate but
    probably not the way the user expects.

    Attributes:
        invalid_frequencies: (recurring item id, offending frequency) pairs
        duplicate_account_ids: Account ids supplied more than once
        unknown_account_refs: (item or transaction id, unknown account id) pairs,
            one per offending entity even when ids repeat
        below_floor_at_start: Accounts whose starting balance is under their floor
    """

    invalid_frequencies: list[tuple[str, str]] = field(default_factory=list)
    duplicate_account_ids: list[str] = field(default_factory=list)
    unknown_account_refs: list[tuple[str, str]] = field(default_factory=list)
    below_floor_at_start: list[str] = field(default_factory=list)

    def has_errors(self) -> bool:
        """Check if there are any hard errors (bad frequencies, duplicate ids)."""
        return bool(self.invalid_frequencies or self.duplicate_account_ids)

    def has_warnings(self) -> bool:
        """Check if there are any warnings (unknown references, floor breaches)."""
        return bool(self.unknown_account_refs or self.below_floor_at_start)

    def is_valid(self) -> bool:
        """Check if validation passed (no errors, warnings are OK)."""
        return not self.has_errors()

    def get_exit_code(self) -> int:
        """
        Get appropriate CLI exit code.

        Returns:
            0: Valid (no errors)
            1: Errors present
            2: Warnings only
        """
        if self.has_errors():
            return 1
        elif self.has_warnings():
            return 2
        else:
            return 0

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "invalid_frequencies": [
                {"id": item_id, "frequency": freq}
                for item_id, freq in self.invalid_frequencies
            ],
            "duplicate_account_ids": self.duplicate_account_ids,
            "unknown_account_refs": [
                {"id": item_id, "account_id": acc_id}
                for item_id, acc_id in self.unknown_account_refs
            ],
            "below_floor_at_start": self.below_floor_at_start,
            "has_errors": self.has_errors(),
            "has_warnings": self.has_warnings(),
            "is_valid": self.is_valid(),
            "exit_code": self.get_exit_code(),
        }

    def __str__(self) -> str:
        """Human-readable string representation."""
        lines = []

        if self.is_valid():
            lines.append("✅ Validation passed")
        else:
            lines.append("❌ Validation failed")

        for item_id, freq in self.invalid_frequencies:
            lines.append(f"Unknown frequency on '{item_id}': {freq!r}")

        if self.duplicate_account_ids:
            lines.append(
                f"Duplicate account ids: {', '.join(self.duplicate_account_ids)}"
            )

        for item_id, acc_id in self.unknown_account_refs:
            lines.append(f"'{item_id}' references unknown account '{acc_id}'")

        if self.below_floor_at_start:
            lines.append(
                f"Starting below minimum balance: {', '.join(self.below_floor_at_start)}"
            )

        return "\n".join(lines)


def validate_inputs(
    accounts: Iterable[Account],
    recurring_items: Iterable[RecurringItem] = (),
    one_time_transactions: Iterable[OneTimeTransaction] = (),
    *,
    warn: bool = False,
) -> ValidationReport:
    """
    Check a simulation input set without running it.

    Args:
        accounts: Accounts to simulate
        recurring_items: Recurring rules
        one_time_transactions: One-off transactions
        warn: Emit a ``UserWarning`` for each account that starts below its
            floor (such an account cannot alert until it recovers)

    Returns:
        ValidationReport describing errors and warnings
    """
    accounts = list(accounts)
    report = ValidationReport()

    counts = Counter(acc.id for acc in accounts)
    report.duplicate_account_ids = sorted(
        acc_id for acc_id, n in counts.items() if n > 1
    )
    known = set(counts)

    for item in recurring_items:
        if item.frequency not in Frequency.all_kinds():
            report.invalid_frequencies.append((item.id, item.frequency))
        if item.account_id not in known:
            report.unknown_account_refs.append((item.id, item.account_id))

    for txn in one_time_transactions:
        if txn.account_id not in known:
            report.unknown_account_refs.append((txn.id, txn.account_id))

    for acc in accounts:
        if acc.min_balance is not None and acc.initial_balance < acc.min_balance:
            report.below_floor_at_start.append(acc.id)
            if warn:
                warnings.warn(
                    f"{acc.id}: initial_balance ({acc.initial_balance:,.2f}) < "
                    f"min_balance ({acc.min_balance:,.2f}); no alert fires until it recovers.",
                    category=UserWarning,
                    stacklevel=2,
                )

    return report
