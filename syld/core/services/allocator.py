"""
Allocator — split a budget across projects as a donation plan.

Pure logic — no side effects, no persistence.

All arithmetic is on integer minor units. Leftover units from integer
division are handed out with the largest-remainder method, ties broken
by the resolver's sort order, so every plan sums exactly to its budget.

Minimum viable amount: shares below ``min_amount`` are dropped and the
whole allocation is recomputed over the survivors, repeatedly, until
every share clears the threshold.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping

from syld.core.models.budget import (
    AllocationPlan,
    AllocationStrategy,
    Budget,
    PlanEntry,
)
from syld.core.models.project import Project, ProjectKey

logger = logging.getLogger(__name__)


class AllocationError(Exception):
    """Raised when no plan can be produced."""


class EmptyProjectSet(AllocationError):
    """No eligible projects to allocate to."""

    def __init__(self, message: str, hint: str = ""):
        super().__init__(message)
        self.hint = hint


# ── Strategies ──────────────────────────────────────────────────


def split_equal(amount: int, count: int) -> list[int]:
    """Split ``amount`` into ``count`` near-equal integer shares.

    The first ``amount % count`` shares get one extra unit.
    """
    if count <= 0:
        return []
    base, extra = divmod(amount, count)
    return [base + 1 if i < extra else base for i in range(count)]


def split_weighted(amount: int, weights: list[int]) -> list[int]:
    """Split ``amount`` proportionally to ``weights``.

    Each share is ``floor(amount * w / total)``; the leftover units go
    to the largest fractional remainders, earlier positions first on
    ties. Falls back to :func:`split_equal` when all weights are zero.
    """
    if any(w < 0 for w in weights):
        raise ValueError("weights must be non-negative")

    total = sum(weights)
    if total == 0:
        return split_equal(amount, len(weights))

    shares: list[int] = []
    remainders: list[int] = []
    for weight in weights:
        share, rem = divmod(amount * weight, total)
        shares.append(share)
        remainders.append(rem)

    leftover = amount - sum(shares)
    order = sorted(range(len(weights)), key=lambda i: (-remainders[i], i))
    for i in order[:leftover]:
        shares[i] += 1
    return shares


def package_count_weights(projects: Iterable[Project]) -> dict[ProjectKey, int]:
    """Default weight policy: one unit per installed member package."""
    return {p.key: p.package_count for p in projects}


# ── Allocate ────────────────────────────────────────────────────


def _shares(
    projects: list[Project],
    amount: int,
    strategy: AllocationStrategy,
    weights: Mapping[ProjectKey, int],
) -> list[int]:
    if strategy == AllocationStrategy.WEIGHTED:
        return split_weighted(amount, [weights.get(p.key, 0) for p in projects])
    return split_equal(amount, len(projects))


def allocate(
    projects: Iterable[Project],
    budget: Budget,
    strategy: AllocationStrategy = AllocationStrategy.EQUAL,
    min_amount: int = 0,
    weights: Mapping[ProjectKey, int] | None = None,
) -> AllocationPlan:
    """Distribute ``budget`` across ``projects``.

    Args:
        projects: Projects to fund, in any order; the plan follows the
            resolver sort order (display name, then key).
        budget: Amount in minor units plus currency/cadence.
        strategy: ``equal`` or ``weighted``.
        min_amount: Smallest share worth giving, in minor units.
        weights: Per-project weights for ``weighted``; missing keys
            weigh zero.

    Returns:
        AllocationPlan summing exactly to ``budget.amount``. A zero
        budget gives an empty plan.

    Raises:
        EmptyProjectSet: No projects, or none survive ``min_amount``.
        ValueError: Negative ``min_amount`` or weights.
    """
    if min_amount < 0:
        raise ValueError(f"min_amount must be non-negative, got {min_amount}")

    plan = AllocationPlan(budget=budget, strategy=strategy, min_amount=min_amount)

    if budget.amount == 0:
        logger.info("Zero budget — returning an empty plan")
        return plan

    candidates = sorted({p.key: p for p in projects}.values(), key=lambda p: p.sort_key)
    if not candidates:
        raise EmptyProjectSet(
            "No projects to allocate to.",
            hint="Run a scan first so there are projects to support.",
        )

    weights = weights or {}
    rank = {p.key: p.sort_key for p in candidates}
    excluded: list[ProjectKey] = []

    while True:
        shares = _shares(candidates, budget.amount, strategy, weights)
        below = {p.key for p, share in zip(candidates, shares) if share < min_amount}
        if not below:
            break

        logger.debug("Dropping %d project(s) below the minimum of %d", len(below), min_amount)
        excluded.extend(p.key for p in candidates if p.key in below)
        candidates = [p for p in candidates if p.key not in below]
        if not candidates:
            raise EmptyProjectSet(
                f"No project would receive at least the minimum amount ({min_amount}).",
                hint="Increase the budget or lower the minimum amount.",
            )

    plan.entries = [
        PlanEntry(key=p.key, display_name=p.display_name, amount=share)
        for p, share in zip(candidates, shares)
    ]
    plan.excluded = sorted(excluded, key=rank.__getitem__)
    logger.info(
        "Allocated %d across %d project(s) (%s, %d excluded)",
        budget.amount,
        len(plan.entries),
        strategy.value,
        len(excluded),
    )
    return plan
