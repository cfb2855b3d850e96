"""
Core module for FinSimLab.

This module contains the forecasting engine and the data model it works on.
"""

from .alerts import AlertDetector
from .catalog_loader import load_profile, load_profiles, parse_profile, profile_to_dict
from .context import SIMULATION_MONTHS, SimulationConfig, SimulationContext
from .currency import RoundingPolicy, round_money, rounded_total
from .engine import run_simulation
from .entities import Account, OneTimeTransaction, RecurringItem
from .errors import ConfigError, ProfileError, UnknownAccountError
from .kinds import Direction, Frequency
from .ledger import Ledger
from .profile import (
    IdFactory,
    UserProfile,
    create_default_profile,
    create_empty_profile,
    new_account,
    new_one_time_transaction,
    new_recurring_item,
    sequential_id_factory,
    uuid_id_factory,
)
from .recurrence import fires, occurrence_mask, occurrences
from .results import (
    Alert,
    DroppedTransaction,
    SimulationPoint,
    SimulationResult,
    TransactionEvent,
)
from .series import SeriesAggregator
from .store import ProfileStore
from .utils import day_range, horizon_end, to_date
from .validation import ValidationReport, validate_inputs

__all__ = [
    # Errors
    "ConfigError",
    "UnknownAccountError",
    "ProfileError",
    # Kinds
    "Frequency",
    "Direction",
    # Entities
    "Account",
    "RecurringItem",
    "OneTimeTransaction",
    # Engine
    "run_simulation",
    "SimulationConfig",
    "SimulationContext",
    "SIMULATION_MONTHS",
    "Ledger",
    "AlertDetector",
    "SeriesAggregator",
    "fires",
    "occurrence_mask",
    "occurrences",
    # Results
    "TransactionEvent",
    "SimulationPoint",
    "Alert",
    "DroppedTransaction",
    "SimulationResult",
    # Profiles
    "UserProfile",
    "IdFactory",
    "uuid_id_factory",
    "sequential_id_factory",
    "new_account",
    "new_recurring_item",
    "new_one_time_transaction",
    "create_default_profile",
    "create_empty_profile",
    "ProfileStore",
    "load_profile",
    "load_profiles",
    "parse_profile",
    "profile_to_dict",
    # Validation
    "ValidationReport",
    "validate_inputs",
    # Utilities
    "RoundingPolicy",
    "round_money",
    "rounded_total",
    "day_range",
    "horizon_end",
    "to_date",
]
