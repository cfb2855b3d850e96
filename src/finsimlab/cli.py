"""
Command-line interface for FinSimLab.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from datetime import date

import numpy as np
import pandas as pd

from finsimlab.core.catalog_loader import load_profile, profile_to_dict
from finsimlab.core.context import SIMULATION_MONTHS, UNKNOWN_ACCOUNT_POLICIES, SimulationConfig
from finsimlab.core.errors import ConfigError, ProfileError
from finsimlab.core.profile import create_default_profile, sequential_id_factory
from finsimlab.core.results import RESOLUTIONS
from finsimlab.core.utils import to_date
from finsimlab.core.validation import validate_inputs

logger = logging.getLogger("finsimlab.cli")


class NumpyEncoder(json.JSONEncoder):
    """JSON encoder that handles numpy scalars, dates and pandas objects."""

    def default(self, obj):
        if isinstance(obj, np.ndarray):
            return obj.tolist()
        elif isinstance(obj, np.generic):
            return obj.item()
        elif isinstance(obj, (date, pd.Timestamp)):
            return obj.isoformat()
        elif isinstance(obj, pd.DataFrame):
            return obj.to_dict("records")
        elif isinstance(obj, pd.Series):
            return obj.to_dict()
        return super().default(obj)


def _save_json(path: str, data: dict) -> None:
    """Save data as JSON to file path."""
    with open(path, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=2, cls=NumpyEncoder)


def _print_run_summary(summary: dict, alerts: list) -> None:
    """Print run summary to stdout."""
    print(
        f"Simulated {summary['days']} days ({summary['start']} → {summary['end']})"
    )
    print(f"  Initial net worth: {summary['initial_net_worth']:,.2f}")
    print(f"  Final net worth:   {summary['final_net_worth']:,.2f}")
    print(f"  Min / max:         {summary['min_net_worth']:,.2f} / {summary['max_net_worth']:,.2f}")
    if summary["dropped"]:
        print(f"  Dropped transactions (unknown accounts): {summary['dropped']}")
    for alert in alerts:
        print(f"  ⚠ {alert.date.isoformat()} {alert.account_name}: {alert.message} (balance {alert.balance:,.2f})")


def cmd_example(args) -> int:
    """Print a demo profile as JSON."""
    try:
        today = to_date(args.today) if args.today else date.today()
    except ConfigError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    profile = create_default_profile(
        today=today, id_factory=sequential_id_factory("profile-")
    )
    json.dump(profile_to_dict(profile), sys.stdout, indent=2)
    sys.stdout.write("\n")
    return 0


def cmd_run(args) -> int:
    """Run a profile and write/print results."""
    try:
        profile = load_profile(args.input)
        config = SimulationConfig(
            horizon_months=args.months,
            unknown_account_policy=args.unknown_accounts,
        )
        today = to_date(args.today) if args.today else date.today()
        result = profile.run(today, config)
    except (ConfigError, ProfileError, FileNotFoundError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if args.output:
        payload = result.to_dict()
        if args.resolution != "all":
            payload = {
                **{k: v for k, v in payload.items() if k not in RESOLUTIONS},
                args.resolution: payload[args.resolution],
            }
        _save_json(args.output, payload)
        logger.info("Wrote results to %s", args.output)
    _print_run_summary(result.summary(), result.alerts)
    return 0


def cmd_validate(args) -> int:
    """Validate a profile without running it."""
    try:
        profile = load_profile(args.input)
    except (ConfigError, ProfileError, FileNotFoundError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    report = validate_inputs(
        profile.accounts, profile.recurring_items, profile.one_time_transactions
    )
    if args.format == "json":
        json.dump(report.to_dict(), sys.stdout, indent=2)
        sys.stdout.write("\n")
    else:
        print(report)
    return report.get_exit_code()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="finsimlab",
        description="FinSimLab - Day-by-day account balance forecasting",
    )
    parser.add_argument("--version", action="version", version="FinSimLab 0.1.0")
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: WARNING)",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")
    subparsers.required = True

    # Example command
    example_parser = subparsers.add_parser("example", help="Print a demo profile")
    example_parser.add_argument(
        "--today", help="Anchor date for the demo rules (YYYY-MM-DD, default: today)"
    )
    example_parser.set_defaults(func=cmd_example)

    # Run command
    run_parser = subparsers.add_parser("run", help="Simulate a profile")
    run_parser.add_argument(
        "-i", "--input", required=True, help="Input profile file (YAML or JSON)"
    )
    run_parser.add_argument("-o", "--output", help="Output results JSON file")
    run_parser.add_argument(
        "--today", help="First simulated day (YYYY-MM-DD, default: today)"
    )
    run_parser.add_argument(
        "--months",
        type=int,
        default=SIMULATION_MONTHS,
        help=f"Horizon in months (default: {SIMULATION_MONTHS})",
    )
    run_parser.add_argument(
        "--resolution",
        choices=[*RESOLUTIONS, "all"],
        default="all",
        help="Series written to the output file (default: all)",
    )
    run_parser.add_argument(
        "--unknown-accounts",
        choices=list(UNKNOWN_ACCOUNT_POLICIES),
        default="warn",
        help="Handling of transactions on unknown accounts (default: warn)",
    )
    run_parser.set_defaults(func=cmd_run)

    # Validate command
    validate_parser = subparsers.add_parser("validate", help="Validate a profile")
    validate_parser.add_argument(
        "-i", "--input", required=True, help="Input profile file (YAML or JSON)"
    )
    validate_parser.add_argument(
        "--format", choices=["human", "json"], default="human", help="Output format"
    )
    validate_parser.set_defaults(func=cmd_validate)

    return parser


def main(argv: list[str] | None = None) -> None:
    """FinSimLab CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(levelname)s %(name)s: %(message)s",
    )
    sys.exit(args.func(args))


if __name__ == "__main__":
    main()
