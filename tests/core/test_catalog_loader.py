"""
Tests for loading profiles from YAML/JSON sources.
"""

import json
from datetime import date

import pytest
from finsimlab.core.catalog_loader import load_profile, load_profiles, parse_profile, profile_to_dict
from finsimlab.core.errors import ProfileError
from finsimlab.core.profile import sequential_id_factory


def _write_profile_yaml(tmp_path):
    path = tmp_path / "profile.yaml"
    path.write_text(
        """
id: home
name: Household
defaults:
  account_id: chk
accounts:
  - id: chk
    name: Checking
    initial_balance: 2500
    min_balance: 1000
  - id: sav
    name: Savings
    initial_balance: 10000
recurring_items:
  - id: salary
    name: Salary
    amount: 4000
    type: income
    frequency: monthly
    start_date: 2026-01-25
  - id: interest
    name: Interest
    amount: 20
    type: income
    frequency: monthly
    account_id: sav
    start_date: "2026-01-31"
one_time_transactions:
  - id: car
    name: Car repair
    amount: 1200
    type: expense
    date: 2026-03-03
""",
        encoding="utf-8",
    )
    return path


class TestProfileLoader:
    """Profile parsing from files and mappings."""

    def test_load_yaml_with_defaults(self, tmp_path):
        profile = load_profile(_write_profile_yaml(tmp_path))

        assert profile.id == "home"
        assert [a.id for a in profile.accounts] == ["chk", "sav"]
        assert profile.account("chk").min_balance == 1000.0
        salary, interest = profile.recurring_items
        assert salary.account_id == "chk"
        assert salary.start_date == date(2026, 1, 25)
        assert interest.account_id == "sav"
        assert profile.one_time_transactions[0].account_id == "chk"
        assert profile.one_time_transactions[0].date == date(2026, 3, 3)

    def test_browser_json_with_camel_case_keys(self, tmp_path):
        path = tmp_path / "profiles.json"
        path.write_text(
            json.dumps(
                [
                    {
                        "id": "p1",
                        "name": "Demo",
                        "accounts": [
                            {"id": 1, "name": "Checking", "initialBalance": 15000,
                             "color": "#0ea5e9", "minBalanceThreshold": 5000}
                        ],
                        "recurringItems": [
                            {"id": 1, "name": "Rent", "amount": 3500, "type": "expense",
                             "frequency": "monthly", "accountId": 1,
                             "startDate": "2026-01-01T00:00:00.000Z"}
                        ],
                        "oneTimeTransactions": [],
                    }
                ]
            ),
            encoding="utf-8",
        )
        (profile,) = load_profiles(path)
        assert profile.accounts[0].id == "1"
        assert profile.accounts[0].min_balance == 5000.0
        assert profile.recurring_items[0].account_id == "1"
        assert profile.recurring_items[0].start_date == date(2026, 1, 1)

    def test_profiles_key_and_missing_ids(self):
        next_id = sequential_id_factory("gen-")
        data = {
            "profiles": [
                {"name": "A", "accounts": [{"name": "Cash"}]},
                {"name": "B"},
            ]
        }
        profiles = load_profiles(data, id_factory=next_id)
        assert [p.name for p in profiles] == ["A", "B"]
        assert profiles[0].accounts[0].id == "gen-1"
        assert profiles[0].id == "gen-2"
        assert profiles[1].id == "gen-3"

    def test_mapping_input_is_not_mutated(self):
        raw = {"id": "p", "name": "P", "accounts": [{"id": "a", "name": "A", "initialBalance": 1}]}
        snapshot = json.dumps(raw, sort_keys=True)
        parse_profile(raw)
        load_profile(raw)
        assert json.dumps(raw, sort_keys=True) == snapshot

    def test_dict_round_trip(self, tmp_path):
        profile = load_profile(_write_profile_yaml(tmp_path))
        again = load_profile(profile_to_dict(profile))
        assert again == profile


class TestProfileErrors:
    def test_unknown_keys(self):
        with pytest.raises(ProfileError, match="unknown keys"):
            parse_profile({"accounts": [{"id": "a", "name": "A", "overdraft": 10}]})

    def test_invalid_entity_values_are_wrapped(self):
        raw = {
            "accounts": [{"id": "a", "name": "A"}],
            "recurring_items": [
                {"id": "r", "name": "R", "amount": -1, "type": "expense",
                 "frequency": "monthly", "account_id": "a", "start_date": "2026-01-01"}
            ],
        }
        with pytest.raises(ProfileError, match=r"recurring_items\[0\]"):
            parse_profile(raw)

    def test_missing_required_field(self):
        with pytest.raises(ProfileError, match=r"accounts\[0\]"):
            parse_profile({"accounts": [{"id": "a"}]})

    def test_bad_frequency_loads_fine(self):
        profile = parse_profile(
            {"recurring_items": [{"id": "r", "name": "R", "amount": 1, "type": "income",
                                  "frequency": "daily", "account_id": "a",
                                  "start_date": "2026-01-01"}]}
        )
        assert profile.recurring_items[0].frequency == "daily"

    def test_wrong_shapes(self):
        with pytest.raises(ProfileError, match="must be a list"):
            parse_profile({"accounts": {"id": "a"}})
        with pytest.raises(ProfileError, match="must be a mapping"):
            load_profiles(["not-a-profile"])
        with pytest.raises(ProfileError, match="Expected exactly one profile"):
            load_profile([{"name": "A"}, {"name": "B"}])

    def test_file_errors(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_profile(tmp_path / "missing.yaml")

        empty = tmp_path / "empty.yaml"
        empty.write_text("", encoding="utf-8")
        with pytest.raises(ProfileError, match="empty"):
            load_profile(empty)

        broken = tmp_path / "broken.json"
        broken.write_text("{not json", encoding="utf-8")
        with pytest.raises(ProfileError, match="Failed to parse"):
            load_profile(broken)

        toml = tmp_path / "profile.toml"
        toml.write_text("name = 'x'", encoding="utf-8")
        with pytest.raises(ProfileError, match="Unsupported profile format"):
            load_profile(toml)


class TestDefaults:
    def test_defaults_never_supply_ids(self):
        next_id = sequential_id_factory("gen-")
        raw = {
            "id": "p",
            "defaults": {"id": "shared", "account_id": "chk"},
            "accounts": [{"id": "chk", "name": "Checking"}],
            "one_time_transactions": [
                {"name": "A", "amount": 1, "type": "income", "date": "2026-01-02"},
                {"name": "B", "amount": 2, "type": "income", "date": "2026-01-03"},
            ],
        }
        profile = parse_profile(raw, id_factory=next_id)
        assert [t.id for t in profile.one_time_transactions] == ["gen-1", "gen-2"]
        assert {t.account_id for t in profile.one_time_transactions} == {"chk"}
