"""
Budget and allocation plan models.

All amounts are integers in minor currency units (cents for USD/EUR)
so that plans always sum exactly to their budget.
"""

from __future__ import annotations

from datetime import UTC, datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from syld.core.models.project import ProjectKey


def _now_iso() -> str:
    """Current UTC time as ISO string."""
    return datetime.now(UTC).isoformat()


class Cadence(str, Enum):
    """How often the budget is given. Informational only."""

    MONTHLY = "monthly"
    YEARLY = "yearly"


class AllocationStrategy(str, Enum):
    """How a budget is split across projects."""

    EQUAL = "equal"
    WEIGHTED = "weighted"


class Budget(BaseModel):
    """The user's recurring giving budget."""

    model_config = ConfigDict(frozen=True)

    amount: int = Field(ge=0)  # minor units
    currency: str = Field(default="USD", pattern=r"^[A-Z]{3}$")
    cadence: Cadence = Cadence.MONTHLY


class PlanEntry(BaseModel):
    """One project's share of a plan."""

    model_config = ConfigDict(frozen=True)

    key: ProjectKey
    display_name: str
    amount: int = Field(ge=0)


class AllocationPlan(BaseModel):
    """A budget distributed across projects.

    For every non-empty plan ``total == budget.amount``. Projects that
    fell below the minimum viable amount are listed in ``excluded``.
    """

    budget: Budget
    strategy: AllocationStrategy = AllocationStrategy.EQUAL
    min_amount: int = Field(default=0, ge=0)
    entries: list[PlanEntry] = Field(default_factory=list)
    excluded: list[ProjectKey] = Field(default_factory=list)
    created_at: str = Field(default_factory=_now_iso)

    @property
    def total(self) -> int:
        return sum(e.amount for e in self.entries)

    @property
    def is_empty(self) -> bool:
        return not self.entries

    def amounts(self) -> dict[ProjectKey, int]:
        """Map of project key to amount, in plan order."""
        return {e.key: e.amount for e in self.entries}
