"""
Scan use case — discover installed packages and resolve them.

Ties together settings, the backend registry, the discovery service,
the resolver, and the scan snapshot.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

from syld.adapters.registry import BackendRegistry, default_registry
from syld.core.config.loader import (
    ConfigError,
    data_dir as default_data_dir,
    load_resolution_table,
    load_settings,
)
from syld.core.data import get_registry
from syld.core.models.project import Project
from syld.core.models.settings import Settings
from syld.core.persistence.scan_file import ScanSnapshot, default_scan_path, save_scan
from syld.core.services.discovery import ScanOutcome, scan_backends
from syld.core.services.resolver import Resolver

logger = logging.getLogger(__name__)


def build_resolver(settings: Settings) -> Resolver:
    """Resolver over the built-in catalog plus the user's table, if any.

    Raises:
        ConfigError: The user's resolution table is missing or invalid.
    """
    table = get_registry().resolution_table
    if settings.resolution_table:
        user_table = load_resolution_table(Path(settings.resolution_table).expanduser())
        table = table.merged(user_table)
    return Resolver(table)


@dataclass
class ScanResult:
    """Result of the scan use case."""

    outcome: ScanOutcome = field(default_factory=ScanOutcome)
    projects: list[Project] = field(default_factory=list)
    snapshot_path: Path | None = None
    saved: bool = False
    error: str | None = None

    def to_dict(self) -> dict:
        result: dict = {}
        if self.error:
            result["error"] = self.error
            return result

        result.update(self.outcome.to_dict())
        result["total_projects"] = len(self.projects)
        result["saved"] = self.saved
        if self.snapshot_path:
            result["snapshot"] = str(self.snapshot_path)
        return result


def run_scan(
    config_path: Path | None = None,
    backends: list[str] | None = None,
    registry: BackendRegistry | None = None,
    data_dir: Path | None = None,
    save: bool = True,
) -> ScanResult:
    """Scan package managers and resolve the records into projects.

    Args:
        config_path: Optional explicit config file.
        backends: Backend names to scan (default: from settings, else all).
        registry: Backend registry (default: all built-in backends).
        data_dir: Where to store the snapshot (default: XDG data dir).
        save: Whether to write the scan snapshot.

    Returns:
        ScanResult; backend failures are reported in ``outcome.failures``
        alongside whatever the other backends found.
    """
    result = ScanResult()

    try:
        settings = load_settings(config_path)
        resolver = build_resolver(settings)
    except ConfigError as e:
        result.error = str(e)
        return result

    registry = registry or default_registry()
    names = backends or settings.backend_names
    result.outcome = scan_backends(registry.select(names))
    result.projects = resolver.resolve(result.outcome.records)

    if save:
        path = default_scan_path(data_dir or default_data_dir())
        snapshot = ScanSnapshot(
            records=result.outcome.records,
            failures=result.outcome.failures,
        )
        try:
            save_scan(snapshot, path)
        except OSError as e:
            result.error = f"Could not save scan to {path}: {e}"
            return result
        result.snapshot_path = path
        result.saved = True

    return result
