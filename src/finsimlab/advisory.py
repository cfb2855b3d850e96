"""
Inputs for the advisory-text collaborator.

The engine's results can be handed to a text-generation service for a plain
language review. This module builds the read-only summary and prompt that
service receives and isolates its failures: nothing here can change a
simulation result.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Protocol, runtime_checkable

from finsimlab.core.entities import Account, RecurringItem
from finsimlab.core.results import SimulationResult

logger = logging.getLogger(__name__)

FALLBACK_ADVICE = "An error occurred during analysis. Please try again later."
EMPTY_ADVICE = "Unable to generate analysis."


@dataclass(frozen=True)
class PlanSummary:
    """Headline numbers and descriptions of one simulated plan."""

    horizon_months: int
    initial_net_worth: float
    final_net_worth: float
    min_net_worth: float
    max_net_worth: float
    accounts: tuple[str, ...] = field(default_factory=tuple)
    recurring_items: tuple[str, ...] = field(default_factory=tuple)
    alert_count: int = 0

    @property
    def change(self) -> float:
        return round(self.final_net_worth - self.initial_net_worth, 2)


@runtime_checkable
class AdvisoryClient(Protocol):
    """Anything that turns a prompt into free text (e.g. an LLM API wrapper)."""

    def generate(self, prompt: str) -> str:
        ...


def build_plan_summary(
    accounts: Iterable[Account],
    recurring_items: Iterable[RecurringItem],
    result: SimulationResult,
    horizon_months: int | None = None,
) -> PlanSummary:
    """
    Summarise a plan and its simulation for the advisory collaborator.

    The horizon defaults to the one the result was produced with.
    """
    if horizon_months is None:
        horizon_months = _result_horizon(result)
    return PlanSummary(
        horizon_months=horizon_months,
        initial_net_worth=result.daily[0].total if result.daily else 0.0,
        final_net_worth=result.final_net_worth,
        min_net_worth=result.min_net_worth,
        max_net_worth=result.max_net_worth,
        accounts=tuple(f"{a.name} (Start: ${a.initial_balance:,.2f})" for a in accounts),
        recurring_items=tuple(
            f"{i.name}: {i.amount:,.2f} ({i.type}, {i.frequency})"
            for i in recurring_items
        ),
        alert_count=len(result.alerts),
    )


def _result_horizon(result: SimulationResult) -> int:
    if result.horizon_months is not None:
        return result.horizon_months
    if result.start is None or result.end is None:
        return 0
    return (result.end.year - result.start.year) * 12 + result.end.month - result.start.month


def render_advisory_prompt(summary: PlanSummary) -> str:
    """Deterministic prompt text for ``summary``."""
    sign = "+" if summary.change >= 0 else ""
    lines = [
        "You are a professional personal finance advisor. Please analyze the "
        "following financial simulation data and provide advice in English:",
        "",
        "**User Profile:**",
        f"- Accounts: {', '.join(summary.accounts) or 'none'}",
        f"- Recurring Items: {'; '.join(summary.recurring_items) or 'none'}",
        "",
        f"**Simulation Results (Next {summary.horizon_months} Months):**",
        f"- Initial Net Worth: {summary.initial_net_worth:,.2f}",
        f"- Final Net Worth: {summary.final_net_worth:,.2f}",
        f"- Change: {sign}{summary.change:,.2f}",
        f"- Lowest Net Worth Point: {summary.min_net_worth:,.2f}",
        f"- Low-balance alerts: {summary.alert_count}",
        "",
        "**Task:**",
        "1. Evaluate the health of this financial plan (e.g., cash flow health, savings rate).",
        "2. Identify potential risks (e.g., low balance at certain times, over-dependence on single income).",
        "3. Provide 3 specific, actionable suggestions for improvement.",
        "",
        "Please keep the tone professional, encouraging, and concise. Use Markdown formatting.",
    ]
    return "\n".join(lines)


def request_advice(client: AdvisoryClient, summary: PlanSummary) -> str:
    """
    Ask ``client`` for a narrative about ``summary``.

    Client failures are logged and replaced by a fixed fallback message; the
    caller always gets text back.
    """
    prompt = render_advisory_prompt(summary)
    try:
        text = client.generate(prompt)
    except Exception:
        logger.exception("Advisory client failed")
        return FALLBACK_ADVICE
    return text or EMPTY_ADVICE
