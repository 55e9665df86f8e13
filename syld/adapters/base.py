"""
Backend base — the contract between discovery and package managers.

Every backend reads one package manager's installed-package database
and returns ``PackageRecord`` values. Backends are read-only, need no
elevated privileges, and share no state with each other.

Read semantics:
    - database absent          → empty list
    - database present but unreadable or corrupt → ``BackendUnavailable``
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from syld.core.models.package import PackageRecord


class BackendUnavailable(Exception):
    """A package database exists but cannot be read."""

    def __init__(self, backend: str, reason: str):
        super().__init__(f"{backend}: {reason}")
        self.backend = backend
        self.reason = reason


class Backend(ABC):
    """Capability interface for package-manager backends.

    To add a new backend:
        1. Subclass Backend
        2. Implement name, is_available, list_installed
        3. Register it in ``default_registry()``
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Stable identifier, equal to the ``PackageManager`` value."""

    @abstractmethod
    def is_available(self) -> bool:
        """Whether the package manager is present on this system.

        Must be cheap (a path or PATH check) and never raise.
        """

    @abstractmethod
    def list_installed(self) -> list[PackageRecord]:
        """Enumerate installed packages.

        Raises:
            BackendUnavailable: The database exists but cannot be read.
        """

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} name={self.name!r}>"
