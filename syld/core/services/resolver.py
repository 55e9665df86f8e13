"""
Resolver — turn raw package records into upstream projects.

Pure logic — no side effects, no network, no disk.

    1. Deduplicate on ``(manager, name)``, keeping the first occurrence.
    2. Resolve each record through the resolution table (total: unknown
       packages become a project keyed by their own name).
    3. Group by project key.
    4. Sort by case-folded display name, then key.

The output depends only on the multiset of input records, never on
their order or on which backend produced them first.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from syld.core.models.package import PackageRecord
from syld.core.models.project import Project, ProjectKey
from syld.core.services.resolution_table import ResolutionTable

logger = logging.getLogger(__name__)


def dedupe(records: Iterable[PackageRecord]) -> list[PackageRecord]:
    """Drop later duplicates of the same ``(manager, name)``."""
    seen: set[tuple[str, str]] = set()
    unique: list[PackageRecord] = []
    dropped = 0
    for record in records:
        if record.identity in seen:
            dropped += 1
            continue
        seen.add(record.identity)
        unique.append(record)
    if dropped:
        logger.debug("Dropped %d duplicate package record(s)", dropped)
    return unique


def _member_order(record: PackageRecord) -> tuple[str, str, str]:
    return (record.manager.value, record.name, record.version)


class Resolver:
    """Groups package records into projects using a resolution table.

    The table is injected at construction and never modified.
    """

    def __init__(self, table: ResolutionTable | None = None):
        self._table = table if table is not None else ResolutionTable()

    @property
    def table(self) -> ResolutionTable:
        return self._table

    def resolve(self, records: Iterable[PackageRecord]) -> list[Project]:
        """Resolve records into a sorted list of projects."""
        groups: dict[ProjectKey, list[PackageRecord]] = {}

        for record in dedupe(records):
            resolution = self._table.lookup(record.manager, record.name)
            groups.setdefault(resolution.key, []).append(record)

        projects = [self._build(key, members) for key, members in groups.items()]
        projects.sort(key=lambda p: p.sort_key)

        logger.info(
            "Resolved %d package(s) into %d project(s)",
            sum(p.package_count for p in projects),
            len(projects),
        )
        return projects

    def _build(
        self,
        key: ProjectKey,
        members: list[PackageRecord],
    ) -> Project:
        members = sorted(members, key=_member_order)

        # Naming is looked up by key so fallback keys that match a table key
        # share it too.
        mapped = self._table.project(key)

        if mapped is not None:
            display_name = mapped.display_name
            homepage = mapped.homepage
        else:
            display_name = key
            homepage = None

        if homepage is None:
            homepage = next((m.url for m in members if m.url), None)

        return Project(
            key=key,
            display_name=display_name,
            members=tuple(members),
            homepage=homepage,
        )


def resolve(
    records: Iterable[PackageRecord],
    table: ResolutionTable | None = None,
) -> list[Project]:
    """Convenience wrapper: ``Resolver(table).resolve(records)``."""
    return Resolver(table).resolve(records)
