"""Utilities for loading user profiles from YAML/JSON sources."""

from __future__ import annotations

import json
from copy import deepcopy
from pathlib import Path
from typing import Any

import yaml

from .entities import Account, OneTimeTransaction, RecurringItem
from .errors import ConfigError, ProfileError
from .profile import IdFactory, UserProfile, uuid_id_factory

__all__ = [
    "load_profile",
    "load_profiles",
    "parse_profile",
    "profile_to_dict",
]

# camelCase keys written by the browser client -> snake_case field names
_ALIASES = {
    "initialBalance": "initial_balance",
    "minBalanceThreshold": "min_balance",
    "min_balance_threshold": "min_balance",
    "accountId": "account_id",
    "startDate": "start_date",
    "recurringItems": "recurring_items",
    "oneTimeTransactions": "one_time_transactions",
}

_ACCOUNT_FIELDS = {"id", "name", "initial_balance", "color", "min_balance"}
_RECURRING_FIELDS = {
    "id",
    "name",
    "amount",
    "type",
    "frequency",
    "account_id",
    "start_date",
}
_ONE_TIME_FIELDS = {"id", "name", "amount", "type", "date", "account_id"}


def load_profiles(
    source: str | Path | dict[str, Any] | list[Any],
    *,
    format: str | None = None,
    id_factory: IdFactory = uuid_id_factory,
) -> list[UserProfile]:
    """
    Parse one or many profiles from a file path or an in-memory document.

    Accepted shapes: a list of profile mappings, a mapping with a
    ``profiles`` list, or a single profile mapping.
    """
    data, label = _read_source(source, format=format)
    if isinstance(data, list):
        raw_profiles = data
    elif isinstance(data, dict) and "profiles" in data:
        raw_profiles = data["profiles"]
        if not isinstance(raw_profiles, list):
            raise ProfileError(f"{label}::profiles must be a list")
    elif isinstance(data, dict):
        raw_profiles = [data]
    else:
        raise ProfileError(f"{label} must contain a mapping or a list of profiles")

    return [
        parse_profile(raw, label=f"{label}::profiles[{idx}]", id_factory=id_factory)
        for idx, raw in enumerate(raw_profiles)
    ]


def load_profile(
    source: str | Path | dict[str, Any],
    *,
    format: str | None = None,
    id_factory: IdFactory = uuid_id_factory,
) -> UserProfile:
    """Parse exactly one profile; raise ProfileError if the source holds several."""
    profiles = load_profiles(source, format=format, id_factory=id_factory)
    if len(profiles) != 1:
        raise ProfileError(f"Expected exactly one profile, found {len(profiles)}")
    return profiles[0]


def parse_profile(
    raw: Any,
    *,
    label: str = "<mapping>",
    id_factory: IdFactory = uuid_id_factory,
) -> UserProfile:
    """
    Build a UserProfile from a mapping.

    An optional ``defaults`` section supplies values (other than ``id``) for
    keys missing on individual items, e.g. ``{"defaults": {"account_id": "checking"}}``.
    Entities without an ``id`` receive one from ``id_factory``.
    """
    mapping = _normalize_keys(_ensure_dict(raw, label))
    defaults = _normalize_keys(_ensure_dict(mapping.get("defaults"), f"{label}::defaults"))

    accounts = [
        _build(Account, _ACCOUNT_FIELDS, item, {}, f"{label}::accounts[{i}]", id_factory)
        for i, item in enumerate(_ensure_list(mapping.get("accounts"), f"{label}::accounts"))
    ]
    recurring = [
        _build(
            RecurringItem,
            _RECURRING_FIELDS,
            item,
            defaults,
            f"{label}::recurring_items[{i}]",
            id_factory,
        )
        for i, item in enumerate(
            _ensure_list(mapping.get("recurring_items"), f"{label}::recurring_items")
        )
    ]
    one_time = [
        _build(
            OneTimeTransaction,
            _ONE_TIME_FIELDS,
            item,
            defaults,
            f"{label}::one_time_transactions[{i}]",
            id_factory,
        )
        for i, item in enumerate(
            _ensure_list(
                mapping.get("one_time_transactions"), f"{label}::one_time_transactions"
            )
        )
    ]

    name = mapping.get("name") or "Unnamed"
    return UserProfile(
        id=str(mapping.get("id") or id_factory()),
        name=str(name),
        accounts=accounts,
        recurring_items=recurring,
        one_time_transactions=one_time,
    )


def profile_to_dict(profile: UserProfile) -> dict[str, Any]:
    """Serialize a profile into the mapping shape ``parse_profile`` accepts."""
    return {
        "id": profile.id,
        "name": profile.name,
        "accounts": [
            {
                "id": acc.id,
                "name": acc.name,
                "initial_balance": acc.initial_balance,
                "color": acc.color,
                **({"min_balance": acc.min_balance} if acc.min_balance is not None else {}),
            }
            for acc in profile.accounts
        ],
        "recurring_items": [
            {
                "id": item.id,
                "name": item.name,
                "amount": item.amount,
                "type": item.type,
                "frequency": item.frequency,
                "account_id": item.account_id,
                "start_date": item.start_date.isoformat(),
            }
            for item in profile.recurring_items
        ],
        "one_time_transactions": [
            {
                "id": txn.id,
                "name": txn.name,
                "amount": txn.amount,
                "type": txn.type,
                "date": txn.date.isoformat(),
                "account_id": txn.account_id,
            }
            for txn in profile.one_time_transactions
        ],
    }


def _read_source(
    source: str | Path | dict[str, Any] | list[Any], *, format: str | None
) -> tuple[Any, str]:
    if isinstance(source, (dict, list)):
        return deepcopy(source), "<mapping>"

    path = Path(source)
    if not path.exists():
        raise FileNotFoundError(path)

    fmt = (format or path.suffix.lstrip(".")).lower()
    text = path.read_text(encoding="utf-8")
    try:
        if fmt in {"yaml", "yml", ""}:
            data = yaml.safe_load(text)
        elif fmt == "json":
            data = json.loads(text)
        else:
            raise ProfileError(f"Unsupported profile format '{fmt}' for {path}")
    except (yaml.YAMLError, json.JSONDecodeError) as e:
        raise ProfileError(f"Failed to parse {path}: {e}") from e

    if data is None:
        raise ProfileError(f"Profile file {path} is empty")
    return data, str(path)


def _build(cls, fields: set[str], raw: Any, defaults: dict, label: str, id_factory):
    # ids are per entity, never inherited
    item = {k: v for k, v in defaults.items() if k in fields and k != "id"}
    item.update(_normalize_keys(_ensure_dict(raw, label)))
    unknown = sorted(set(item) - fields)
    if unknown:
        raise ProfileError(f"{label}: unknown keys {unknown}")
    if not item.get("id"):
        item["id"] = id_factory()
    item["id"] = str(item["id"])
    if "account_id" in item:
        item["account_id"] = str(item["account_id"])
    try:
        return cls(**item)
    except (TypeError, ConfigError) as e:
        raise ProfileError(f"{label}: {e}") from e


def _normalize_keys(mapping: dict[str, Any]) -> dict[str, Any]:
    return {_ALIASES.get(key, key): value for key, value in mapping.items()}


def _ensure_dict(value: Any, label: str) -> dict[str, Any]:
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ProfileError(f"{label} must be a mapping")
    return value


def _ensure_list(value: Any, label: str) -> list[Any]:
    if value is None:
        return []
    if not isinstance(value, list):
        raise ProfileError(f"{label} must be a list")
    return value
