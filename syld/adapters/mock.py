"""
Mock backend — test double for discovery and registry tests.

Returns a fixed list of records, or raises ``BackendUnavailable`` when
configured to fail.
"""

from __future__ import annotations

from collections.abc import Iterable

from syld.adapters.base import Backend, BackendUnavailable
from syld.core.models.package import PackageManager, PackageRecord


class MockBackend(Backend):
    """In-memory backend for tests."""

    def __init__(
        self,
        backend_name: str = "mock",
        packages: Iterable[PackageRecord | str] = (),
        available: bool = True,
        error: str | None = None,
        manager: PackageManager = PackageManager.PACMAN,
    ):
        self._name = backend_name
        self._available = available
        self._error = error
        self._records = [
            p if isinstance(p, PackageRecord) else PackageRecord(manager=manager, name=p)
            for p in packages
        ]
        self._calls = 0

    @property
    def name(self) -> str:
        return self._name

    @property
    def call_count(self) -> int:
        """Number of times list_installed has been called."""
        return self._calls

    def is_available(self) -> bool:
        return self._available

    def set_failure(self, error: str = "Mock failure") -> None:
        """Make the next scans fail with BackendUnavailable."""
        self._error = error

    def list_installed(self) -> list[PackageRecord]:
        self._calls += 1
        if self._error is not None:
            raise BackendUnavailable(self._name, self._error)
        return list(self._records)
