import logging
from datetime import date

import pytest
from finsimlab import (
    AdvisoryClient,
    SimulationConfig,
    build_plan_summary,
    create_default_profile,
    render_advisory_prompt,
    request_advice,
    run_simulation,
)
from finsimlab.advisory import EMPTY_ADVICE, FALLBACK_ADVICE
from finsimlab.core.ledger import Ledger
from finsimlab.core.series import SeriesAggregator


class EchoClient:
    def __init__(self, reply="Looks healthy."):
        self.reply = reply
        self.prompts = []

    def generate(self, prompt):
        self.prompts.append(prompt)
        return self.reply


class BrokenClient:
    def generate(self, prompt):
        raise ConnectionError("service unavailable")


@pytest.fixture
def summary():
    profile = create_default_profile(today="2026-01-10")
    result = profile.run("2026-01-10")
    return build_plan_summary(profile.accounts, profile.recurring_items, result)


def test_summary_numbers(summary):
    assert summary.initial_net_worth == 73500.0
    assert summary.final_net_worth == 277500.0
    assert summary.change == 204000.0
    assert summary.alert_count == 0
    assert summary.accounts[0] == "Checking (Chase) (Start: $15,000.00)"
    assert summary.recurring_items[1] == "Rent: 3,500.00 (expense, monthly)"


def test_prompt_is_deterministic(summary):
    prompt = render_advisory_prompt(summary)
    assert prompt == render_advisory_prompt(summary)
    assert "Next 24 Months" in prompt
    assert "- Change: +204,000.00" in prompt
    assert "- Lowest Net Worth Point: 73,500.00" in prompt


def test_client_receives_prompt(summary):
    client = EchoClient()
    assert isinstance(client, AdvisoryClient)
    assert request_advice(client, summary) == "Looks healthy."
    assert client.prompts == [render_advisory_prompt(summary)]


def test_empty_reply(summary):
    assert request_advice(EchoClient(reply=""), summary) == EMPTY_ADVICE


def test_client_failure_is_isolated(summary, caplog):
    with caplog.at_level(logging.ERROR, logger="finsimlab.advisory"):
        assert request_advice(BrokenClient(), summary) == FALLBACK_ADVICE
    assert "Advisory client failed" in caplog.text


def test_horizon_follows_the_result():
    profile = create_default_profile(today="2026-01-01")
    result = run_simulation(
        profile.accounts,
        profile.recurring_items,
        today="2026-01-01",
        config=SimulationConfig(horizon_months=6),
    )
    summary = build_plan_summary(profile.accounts, profile.recurring_items, result)
    assert summary.horizon_months == 6
    prompt = render_advisory_prompt(summary)
    assert "Next 6 Months" in prompt
    assert "Next 24 Months" not in prompt


def test_horizon_derived_from_dates_when_not_recorded():
    start, end = date(2026, 1, 15), date(2026, 4, 15)
    aggregator = SeriesAggregator(start, end)
    aggregator.record(start, Ledger([]))
    summary = build_plan_summary([], [], aggregator.build())
    assert summary.horizon_months == 3


def test_explicit_horizon_wins():
    profile = create_default_profile(today="2026-01-10")
    result = profile.run("2026-01-10")
    assert build_plan_summary([], [], result, horizon_months=12).horizon_months == 12
