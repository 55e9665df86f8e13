"""
Resolution table — maps installed packages to upstream projects.

The table is data, not logic: it is built from catalog entries of the
form ``{key, display_name, homepage, packages: {manager: [names]}}``
and is read-only once constructed. Lookups are total: a package that
is not in the table resolves to ``Unmapped`` instead of raising.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any

from syld.core.models.package import PackageManager
from syld.core.models.project import ProjectKey

logger = logging.getLogger(__name__)


class ResolutionTableError(ValueError):
    """Raised when catalog entries are malformed or contradictory."""


@dataclass(frozen=True)
class Mapped:
    """The package belongs to a known upstream project."""

    key: ProjectKey
    display_name: str
    homepage: str | None = None


@dataclass(frozen=True)
class Unmapped:
    """No table entry; the package stands for its own project."""

    package_name: str

    @property
    def key(self) -> ProjectKey:
        return self.package_name

    @property
    def display_name(self) -> str:
        return self.package_name

    @property
    def homepage(self) -> None:
        return None


Resolution = Mapped | Unmapped


class ResolutionTable:
    """Read-only ``(manager, name) -> Mapped`` lookup.

    Every package of a project resolves to the same ``Mapped`` value; a
    project declared again (or overridden) renames all of its packages.
    """

    def __init__(self, entries: Iterable[Mapping[str, Any]] = ()):
        # Packages point at project keys; naming lives only in _projects.
        self._by_package: dict[tuple[str, str], ProjectKey] = {}
        self._projects: dict[ProjectKey, Mapped] = {}
        for entry in entries:
            self._add(entry)

    def _add(self, entry: Mapping[str, Any]) -> None:
        key = entry.get("key")
        if not key or not isinstance(key, str):
            raise ResolutionTableError(f"Catalog entry without a key: {entry!r}")

        display_name = entry.get("display_name") or key
        existing = self._projects.get(key)
        if existing is not None and existing.display_name != display_name:
            raise ResolutionTableError(
                f"Project '{key}' declared twice with different names: "
                f"'{existing.display_name}' and '{display_name}'"
            )
        homepage = entry.get("homepage") or (existing.homepage if existing else None)
        self._projects[key] = Mapped(key=key, display_name=display_name, homepage=homepage)

        packages = entry.get("packages") or {}
        if not isinstance(packages, Mapping):
            raise ResolutionTableError(f"'packages' of '{key}' must be a mapping")

        for manager, names in packages.items():
            try:
                manager_id = PackageManager(manager).value
            except ValueError as e:
                raise ResolutionTableError(
                    f"Unknown package manager '{manager}' in project '{key}'"
                ) from e
            for name in names or []:
                self._by_package[(manager_id, name)] = key

    def lookup(self, manager: PackageManager | str, name: str) -> Resolution:
        """Resolve one package. Never fails."""
        manager_id = manager.value if isinstance(manager, PackageManager) else manager
        key = self._by_package.get((manager_id, name))
        if key is None:
            return Unmapped(package_name=name)
        return self._projects[key]

    def project(self, key: ProjectKey) -> Mapped | None:
        """Look up a project declared in the table by key."""
        return self._projects.get(key)

    def merged(self, override: ResolutionTable) -> ResolutionTable:
        """New table with ``override`` entries winning on conflicts."""
        table = ResolutionTable()
        table._projects = {**self._projects, **override._projects}
        table._by_package = {**self._by_package, **override._by_package}
        return table

    @property
    def project_count(self) -> int:
        return len(self._projects)

    def __len__(self) -> int:
        return len(self._by_package)

    def __contains__(self, item: object) -> bool:
        return item in self._by_package
