"""
FinSimLab - Day-by-Day Account Balance Forecasting

FinSimLab projects the balances of a set of accounts over a fixed horizon
(24 months by default) from a starting snapshot, recurring income/expense
rules and one-off transactions.

Key Features:
- **Deterministic**: "today" is an explicit input; identical inputs give identical results
- **Recurrence Rules**: weekly, bi-weekly, monthly and yearly rules anchored on a start date
- **Edge-triggered Alerts**: one alert per crossing below an account's minimum balance
- **Multi-resolution Output**: daily, first-of-month and activity-only series
- **Explicit Data Loss**: transactions on unknown accounts are reported, not hidden

Architecture Overview:
- **Recurrence Matcher**: decides whether a rule fires on a given day
- **Ledger**: per-account running balances
- **Alert Detector**: compares today's balances with yesterday's against each floor
- **Series Aggregator**: snapshots the ledger and publishes it at three resolutions
- **Engine**: a single forward pass over the horizon wiring the four together

Quick Start:
    ```python
    from finsimlab import Account, RecurringItem, run_simulation

    checking = Account(id="chk", name="Checking", initial_balance=15000, min_balance=5000)
    rent = RecurringItem(id="rent", name="Rent", amount=3500, type="expense",
                         frequency="monthly", account_id="chk", start_date="2026-01-01")

    result = run_simulation([checking], [rent], today="2026-01-01")
    result.final_net_worth, result.alerts[0].date
    ```

License:
    This is a proof-of-concept for educational and research purposes.
"""

# Version information
__version__ = "0.1.0"
__author__ = "FinSimLab Team"
__description__ = "Day-by-Day Account Balance Forecasting"

from .advisory import (
    AdvisoryClient,
    PlanSummary,
    build_plan_summary,
    render_advisory_prompt,
    request_advice,
)
from .core import (
    SIMULATION_MONTHS,
    Account,
    Alert,
    ConfigError,
    Direction,
    DroppedTransaction,
    Frequency,
    OneTimeTransaction,
    ProfileError,
    ProfileStore,
    RecurringItem,
    SimulationConfig,
    SimulationPoint,
    SimulationResult,
    TransactionEvent,
    UnknownAccountError,
    UserProfile,
    ValidationReport,
    create_default_profile,
    create_empty_profile,
    fires,
    load_profile,
    load_profiles,
    new_account,
    new_one_time_transaction,
    new_recurring_item,
    run_simulation,
    validate_inputs,
)
from .kpi import (
    days_below_floor,
    lowest_balances,
    max_drawdown,
    monthly_net_flow,
    net_change,
)

# Define what gets imported with "from finsimlab import *"
__all__ = [
    # Engine
    "run_simulation",
    "SimulationConfig",
    "SIMULATION_MONTHS",
    "fires",
    # Entities
    "Account",
    "RecurringItem",
    "OneTimeTransaction",
    "Frequency",
    "Direction",
    # Results
    "SimulationResult",
    "SimulationPoint",
    "TransactionEvent",
    "Alert",
    "DroppedTransaction",
    # Errors
    "ConfigError",
    "UnknownAccountError",
    "ProfileError",
    # Validation
    "ValidationReport",
    "validate_inputs",
    # Profiles
    "UserProfile",
    "ProfileStore",
    "create_default_profile",
    "create_empty_profile",
    "new_account",
    "new_recurring_item",
    "new_one_time_transaction",
    "load_profile",
    "load_profiles",
    # KPI utilities
    "days_below_floor",
    "lowest_balances",
    "max_drawdown",
    "monthly_net_flow",
    "net_change",
    # Advisory collaborator
    "AdvisoryClient",
    "PlanSummary",
    "build_plan_summary",
    "render_advisory_prompt",
    "request_advice",
    # Version info
    "__version__",
    "__author__",
    "__description__",
]
