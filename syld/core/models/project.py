"""
Project model — the upstream open-source project behind installed packages.

Projects are built once per scan by the resolver and are immutable.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator

from syld.core.models.package import PackageRecord

# Canonical, manager-independent project slug (e.g. "curl", "gnome").
ProjectKey = str


class Project(BaseModel):
    """A group of installed packages that share one upstream project."""

    model_config = ConfigDict(frozen=True)

    key: ProjectKey = Field(min_length=1)
    display_name: str = Field(min_length=1)
    members: tuple[PackageRecord, ...]
    homepage: str | None = None

    @field_validator("members")
    @classmethod
    def _non_empty(cls, members: tuple[PackageRecord, ...]) -> tuple[PackageRecord, ...]:
        if not members:
            raise ValueError("a project needs at least one member package")
        return members

    @property
    def sort_key(self) -> tuple[str, str]:
        """Case-insensitive display name, ties broken by key."""
        return (self.display_name.casefold(), self.key)

    @property
    def package_count(self) -> int:
        return len(self.members)

    @property
    def managers(self) -> list[str]:
        """Sorted names of the package managers that contributed members."""
        return sorted({m.manager.value for m in self.members})

    @property
    def licenses(self) -> list[str]:
        """Sorted union of member licenses."""
        return sorted({lic for m in self.members for lic in m.licenses})

    def to_dict(self) -> dict:
        return {
            "key": self.key,
            "display_name": self.display_name,
            "homepage": self.homepage,
            "package_count": self.package_count,
            "managers": self.managers,
            "licenses": self.licenses,
            "packages": [
                {"manager": m.manager.value, "name": m.name, "version": m.version}
                for m in self.members
            ],
        }
