"""
Domain models — Pydantic types for syld.

All models are re-exported here for convenient access:

    from syld.core.models import PackageRecord, Project, Budget, AllocationPlan
"""

from syld.core.models.budget import (
    AllocationPlan,
    AllocationStrategy,
    Budget,
    Cadence,
    PlanEntry,
)
from syld.core.models.package import PackageManager, PackageRecord
from syld.core.models.project import Project, ProjectKey
from syld.core.models.settings import BudgetSettings, ReportSettings, Settings

__all__ = [
    # budget.py
    "AllocationPlan",
    "AllocationStrategy",
    "Budget",
    "Cadence",
    "PlanEntry",
    # package.py
    "PackageManager",
    "PackageRecord",
    # project.py
    "Project",
    "ProjectKey",
    # settings.py
    "BudgetSettings",
    "ReportSettings",
    "Settings",
]
