"""
Error classes for FinSimLab.

This module defines the exceptions raised while validating simulation inputs,
running a projection and loading stored profiles.
"""

from __future__ import annotations


class ConfigError(Exception):
    """
    Configuration error detected before or during a simulation run.

    Configuration errors are deterministic faults in the input set. They are
    raised before any day is simulated, so a run either completes fully or
    produces nothing.

    **Common Causes:**
    - Unrecognized frequency on a recurring item (e.g. ``"daily"``)
    - Unrecognized transaction type (anything but ``income``/``expense``)
    - Negative magnitudes (direction is carried by ``type``, not the sign)
    - Duplicate account ids
    - A negative horizon

    **Example Usage:**
        ```python
        from finsimlab.core.errors import ConfigError
        from finsimlab.core.recurrence import fires

        try:
            fires("fortnightly", date(2026, 1, 1), date(2026, 1, 15))
        except ConfigError as e:
            print(f"Configuration error: {e}")
        ```
    """

    pass


class UnknownAccountError(ConfigError):
    """
    Raised when transactions reference account ids that were not supplied.

    Only raised under the ``"raise"`` unknown-account policy; the other
    policies absorb these transactions and report them on the result.

    Attributes:
        problem_ids: Ids of the recurring items / one-time transactions
            that point at unknown accounts
        account_ids: The unknown account ids themselves
    """

    def __init__(
        self,
        message: str,
        problem_ids: list[str] | None = None,
        account_ids: list[str] | None = None,
    ):
        self.problem_ids = problem_ids or []
        self.account_ids = account_ids or []
        super().__init__(self._fmt(message))

    def _fmt(self, msg: str) -> str:
        """Format the error message with additional context."""
        suffix = ""
        if self.problem_ids:
            preview = ", ".join(self.problem_ids[:10])
            more = (
                f" (+{len(self.problem_ids)-10} more)"
                if len(self.problem_ids) > 10
                else ""
            )
            suffix = f" | problem_ids: [{preview}]{more}"
        return f"{msg}{suffix}"


class ProfileError(ValueError):
    """Raised when a profile file cannot be parsed or validated."""
