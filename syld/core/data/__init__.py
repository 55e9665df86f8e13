"""
Central data registry for static catalogs.

Loads the built-in resolution catalog from ``syld/core/data/catalogs/``
once at first access and caches it for the process lifetime.

Usage::

    from syld.core.data import DataRegistry

    registry = DataRegistry()
    table = registry.resolution_table   # ResolutionTable
"""

from __future__ import annotations

import json
import logging
from functools import cached_property
from pathlib import Path

from syld.core.services.resolution_table import ResolutionTable

logger = logging.getLogger(__name__)

_DATA_DIR = Path(__file__).parent


def _load_json(relative_path: str) -> list | dict:
    """Load a JSON file relative to the data directory."""
    path = _DATA_DIR / relative_path
    if not path.exists():
        logger.warning("Data file not found: %s", path)
        return [] if relative_path.endswith("s.json") else {}
    with open(path, encoding="utf-8") as f:
        return json.load(f)


class DataRegistry:
    """Central registry for all static data catalogs.

    Each property lazily loads its JSON file on first access and caches
    the result for the lifetime of the instance.
    """

    @cached_property
    def project_catalog(self) -> list[dict]:
        """Upstream project definitions with their per-manager package names."""
        data = _load_json("catalogs/projects.json")
        logger.debug("Loaded %d upstream project definitions", len(data))
        return data

    @cached_property
    def resolution_table(self) -> ResolutionTable:
        """The built-in ``(manager, name) -> project`` table."""
        return ResolutionTable(self.project_catalog)


_registry: DataRegistry | None = None


def get_registry() -> DataRegistry:
    """Process-wide registry instance."""
    global _registry
    if _registry is None:
        _registry = DataRegistry()
    return _registry
