"""
Backend registry — central lookup for package-manager backends.

Discovery never instantiates backends itself; it asks the registry
which ones exist and which of those are available on this machine.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Any

from syld.adapters.base import Backend

logger = logging.getLogger(__name__)


class BackendRegistry:
    """Registry of backends by name, in registration order."""

    def __init__(self, backends: Iterable[Backend] = ()):
        self._backends: dict[str, Backend] = {}
        for backend in backends:
            self.register(backend)

    def register(self, backend: Backend) -> None:
        """Register a backend, replacing any with the same name."""
        name = backend.name
        if name in self._backends:
            logger.warning("Overwriting existing backend: %s", name)
        self._backends[name] = backend
        logger.debug("Registered backend: %s", name)

    def unregister(self, name: str) -> None:
        """Remove a backend from the registry."""
        self._backends.pop(name, None)

    def get(self, name: str) -> Backend | None:
        """Look up a backend by name."""
        return self._backends.get(name)

    def list_backends(self) -> list[str]:
        """All registered backend names."""
        return list(self._backends.keys())

    def select(self, names: Iterable[str] | None = None) -> list[Backend]:
        """Registered backends, optionally restricted to ``names``.

        Unknown names are logged and ignored.
        """
        if names is None:
            return list(self._backends.values())
        wanted = list(dict.fromkeys(names))
        for name in wanted:
            if name not in self._backends:
                logger.warning("Unknown backend requested: %s", name)
        return [b for n, b in self._backends.items() if n in wanted]

    def backend_status(self) -> dict[str, dict[str, Any]]:
        """Availability of every registered backend."""
        status = {}
        for name, backend in self._backends.items():
            try:
                available = backend.is_available()
            except Exception:
                logger.debug("is_available() raised for %s", name, exc_info=True)
                available = False
            status[name] = {
                "name": name,
                "available": available,
                "type": backend.__class__.__name__,
            }
        return status


def default_registry() -> BackendRegistry:
    """Registry with every built-in package-manager backend."""
    from syld.adapters.packages.apt import AptBackend
    from syld.adapters.packages.dnf import DnfBackend
    from syld.adapters.packages.flatpak import FlatpakBackend
    from syld.adapters.packages.mise import MiseBackend
    from syld.adapters.packages.nix import NixBackend
    from syld.adapters.packages.pacman import PacmanBackend
    from syld.adapters.packages.snap import SnapBackend

    return BackendRegistry([
        AptBackend(),
        DnfBackend(),
        PacmanBackend(),
        FlatpakBackend(),
        SnapBackend(),
        MiseBackend(),
        NixBackend(),
    ])
