"""
FinSimLab discriminator constants for recurrence frequencies and directions.
"""


class Frequency:
    WEEKLY = "weekly"  # every 7 days from the anchor
    BIWEEKLY = "bi-weekly"  # every 14 days from the anchor
    MONTHLY = "monthly"  # same day-of-month as the anchor
    YEARLY = "yearly"  # same day and month as the anchor

    @classmethod
    def all_kinds(cls) -> list[str]:
        """Enumerate all known frequencies (for validation and docs)."""
        return [cls.WEEKLY, cls.BIWEEKLY, cls.MONTHLY, cls.YEARLY]


class Direction:
    INCOME = "income"  # adds the magnitude
    EXPENSE = "expense"  # subtracts the magnitude

    @classmethod
    def all_kinds(cls) -> list[str]:
        """Enumerate all known directions."""
        return [cls.INCOME, cls.EXPENSE]

    @classmethod
    def sign(cls, direction: str) -> int:
        """Return +1 for income and -1 for expense."""
        if direction == cls.INCOME:
            return 1
        if direction == cls.EXPENSE:
            return -1
        raise ValueError(f"Unknown transaction type {direction!r}")
