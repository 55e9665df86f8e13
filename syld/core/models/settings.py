"""
Settings model — the user's configuration file.

Loaded from ``config.yml`` by the config loader. Amounts here are in
major units (``"12.50"``); the allocator only ever sees minor units.
"""

from __future__ import annotations

from decimal import Decimal

from pydantic import BaseModel, Field, field_validator

from syld.core.models.budget import AllocationStrategy, Cadence
from syld.core.models.package import PackageManager


class BudgetSettings(BaseModel):
    """The ``budget:`` section."""

    amount: Decimal | None = Field(default=None, ge=0)
    currency: str = Field(default="USD", pattern=r"^[A-Z]{3}$")
    cadence: Cadence = Cadence.MONTHLY
    strategy: AllocationStrategy = AllocationStrategy.EQUAL
    min_amount: Decimal = Field(default=Decimal("0"), ge=0)

    @field_validator("currency", mode="before")
    @classmethod
    def _upper_currency(cls, value: object) -> object:
        return value.upper() if isinstance(value, str) else value


class ReportSettings(BaseModel):
    """The ``report:`` section."""

    limit: int = Field(default=25, ge=0)  # 0 = show everything


class Settings(BaseModel):
    """Root configuration."""

    budget: BudgetSettings = Field(default_factory=BudgetSettings)
    report: ReportSettings = Field(default_factory=ReportSettings)

    # Default for `report --enrich`; the report stays offline either way.
    enrich: bool = False

    # Restrict scanning to these backends (None = all available).
    backends: list[PackageManager] | None = None

    # Extra resolution table (YAML) layered over the built-in catalog.
    resolution_table: str | None = None

    @property
    def backend_names(self) -> list[str] | None:
        if self.backends is None:
            return None
        return [b.value for b in self.backends]
