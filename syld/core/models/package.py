"""
Package model — one installed package as observed by a backend.

Records are created fresh on every scan and are never mutated.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class PackageManager(str, Enum):
    """The package manager that installed a package."""

    PACMAN = "pacman"
    APT = "apt"
    DNF = "dnf"
    FLATPAK = "flatpak"
    SNAP = "snap"
    MISE = "mise"
    NIX = "nix"

    def __str__(self) -> str:
        return self.value


class PackageRecord(BaseModel):
    """A single installed package.

    ``(manager, name)`` is unique within one scan. Everything besides
    those two fields is informational and never affects resolution.
    """

    model_config = ConfigDict(frozen=True)

    manager: PackageManager
    name: str = Field(min_length=1)
    version: str = "unknown"
    description: str | None = None
    url: str | None = None
    licenses: tuple[str, ...] = ()

    @property
    def identity(self) -> tuple[str, str]:
        """The ``(manager, name)`` pair used for deduplication."""
        return (self.manager.value, self.name)
