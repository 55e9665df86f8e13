"""
Budget use cases — set the budget, show it, and plan donations.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from decimal import Decimal
from pathlib import Path

from syld.core.config.loader import (
    ConfigError,
    config_path as resolve_config_path,
    data_dir as default_data_dir,
    load_settings,
    save_settings,
)
from syld.core.models.budget import AllocationPlan, AllocationStrategy, Budget, Cadence
from syld.core.models.settings import BudgetSettings
from syld.core.persistence.history import PlanHistory
from syld.core.persistence.scan_file import default_scan_path, load_scan
from syld.core.services.allocator import EmptyProjectSet, allocate, package_count_weights
from syld.core.services.money import format_amount, parse_amount, to_minor
from syld.core.use_cases.scan import build_resolver

logger = logging.getLogger(__name__)


def budget_from_settings(settings: BudgetSettings) -> Budget | None:
    """Minor-unit Budget from the config section, or None if unset."""
    if settings.amount is None:
        return None
    return Budget(
        amount=to_minor(settings.amount, settings.currency),
        currency=settings.currency,
        cadence=settings.cadence,
    )


# ── Set / show ──────────────────────────────────────────────────


@dataclass
class BudgetResult:
    """The configured budget."""

    settings: BudgetSettings | None = None
    config_path: Path | None = None
    saved: bool = False
    error: str | None = None

    def to_dict(self) -> dict:
        if self.error:
            return {"error": self.error}
        assert self.settings is not None
        budget = budget_from_settings(self.settings)
        return {
            "amount": str(self.settings.amount) if self.settings.amount is not None else None,
            "amount_minor": budget.amount if budget else None,
            "currency": self.settings.currency,
            "cadence": self.settings.cadence.value,
            "strategy": self.settings.strategy.value,
            "min_amount": str(self.settings.min_amount),
            "config_path": str(self.config_path) if self.config_path else None,
            "saved": self.saved,
        }


def set_budget(
    amount: str,
    config_path: Path | None = None,
    currency: str | None = None,
    cadence: Cadence | None = None,
    strategy: AllocationStrategy | None = None,
    min_amount: str | None = None,
) -> BudgetResult:
    """Update the budget section of the config file.

    Only the given fields change; the rest of the file is preserved.
    """
    result = BudgetResult()

    try:
        settings = load_settings(config_path)
        updates: dict = {"amount": parse_amount(amount)}
        if currency is not None:
            updates["currency"] = currency.upper()
        if cadence is not None:
            updates["cadence"] = cadence
        if strategy is not None:
            updates["strategy"] = strategy
        if min_amount is not None:
            updates["min_amount"] = parse_amount(min_amount)
        budget = BudgetSettings.model_validate({**settings.budget.model_dump(), **updates})
    except ConfigError as e:
        result.error = str(e)
        return result
    except ValueError as e:  # includes pydantic.ValidationError
        result.error = f"Invalid budget: {e}"
        return result

    settings.budget = budget
    try:
        result.config_path = save_settings(settings, config_path)
    except OSError as e:
        result.error = f"Could not write config: {e}"
        return result

    result.settings = budget
    result.saved = True
    logger.info("Budget set to %s %s (%s)", budget.amount, budget.currency, budget.cadence.value)
    return result


def show_budget(config_path: Path | None = None) -> BudgetResult:
    """Read the configured budget."""
    result = BudgetResult(config_path=resolve_config_path(config_path))
    try:
        result.settings = load_settings(config_path).budget
    except ConfigError as e:
        result.error = str(e)
    return result


# ── Plan ────────────────────────────────────────────────────────


@dataclass
class PlanResult:
    """Result of the plan use case."""

    plan: AllocationPlan | None = None
    candidates: int = 0
    recorded: bool = False
    history_path: Path | None = None
    error: str | None = None
    hint: str | None = None
    warnings: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        result: dict = {}
        if self.error:
            result["error"] = self.error
            if self.hint:
                result["hint"] = self.hint
            return result

        assert self.plan is not None
        currency = self.plan.budget.currency
        result["budget"] = {
            "amount": self.plan.budget.amount,
            "formatted": format_amount(self.plan.budget.amount, currency),
            "currency": currency,
            "cadence": self.plan.budget.cadence.value,
        }
        result["strategy"] = self.plan.strategy.value
        result["min_amount"] = self.plan.min_amount
        result["candidates"] = self.candidates
        result["entries"] = [
            {
                "key": e.key,
                "display_name": e.display_name,
                "amount": e.amount,
                "formatted": format_amount(e.amount, currency),
            }
            for e in self.plan.entries
        ]
        result["excluded"] = self.plan.excluded
        result["total"] = self.plan.total
        result["recorded"] = self.recorded
        result["warnings"] = self.warnings
        return result


def run_plan(
    config_path: Path | None = None,
    data_dir: Path | None = None,
    strategy: AllocationStrategy | None = None,
    min_amount: str | None = None,
    record: bool = True,
) -> PlanResult:
    """Allocate the configured budget across the last scan's projects.

    Args:
        config_path: Optional explicit config file.
        data_dir: Data directory (default: XDG data dir).
        strategy: Override the configured strategy.
        min_amount: Override the minimum amount (major units).
        record: Append the plan to the history ledger.
    """
    result = PlanResult()

    try:
        settings = load_settings(config_path)
        resolver = build_resolver(settings)
    except ConfigError as e:
        result.error = str(e)
        return result

    budget = budget_from_settings(settings.budget)
    if budget is None:
        result.error = "No budget set."
        result.hint = "Run 'syld budget set AMOUNT' first."
        return result

    try:
        minimum = Decimal(settings.budget.min_amount) if min_amount is None else parse_amount(min_amount)
    except ValueError as e:
        result.error = str(e)
        return result

    data_dir = data_dir or default_data_dir()
    snapshot = load_scan(default_scan_path(data_dir))
    if snapshot is None:
        result.error = "No scan found."
        result.hint = "Run 'syld scan' first."
        return result

    if snapshot.failures:
        result.warnings = [f"{name}: {msg}" for name, msg in sorted(snapshot.failures.items())]

    projects = resolver.resolve(snapshot.records)
    result.candidates = len(projects)
    strategy = strategy or settings.budget.strategy

    try:
        plan = allocate(
            projects,
            budget,
            strategy=strategy,
            min_amount=to_minor(minimum, budget.currency),
            weights=package_count_weights(projects),
        )
    except EmptyProjectSet as e:
        result.error = str(e)
        result.hint = e.hint
        return result

    result.plan = plan

    if record and not plan.is_empty:
        history = PlanHistory(data_dir=data_dir)
        try:
            history.append(plan)
            result.recorded = True
            result.history_path = history.path
        except OSError as e:
            result.warnings.append(f"Plan not recorded: {e}")

    return result


def plan_history(data_dir: Path | None = None, n: int = 10) -> list[AllocationPlan]:
    """The most recent recorded plans, oldest first."""
    return PlanHistory(data_dir=data_dir or default_data_dir()).read_recent(n)
