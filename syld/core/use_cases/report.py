"""
Report use case — a paginated project listing from the last scan.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

from syld.core.config.loader import ConfigError, data_dir as default_data_dir, load_settings
from syld.core.models.project import Project
from syld.core.persistence.scan_file import default_scan_path, load_scan
from syld.core.services.license_classify import classify
from syld.core.services.paginator import page, remaining
from syld.core.use_cases.scan import build_resolver

logger = logging.getLogger(__name__)


@dataclass
class ReportResult:
    """One page of resolved projects."""

    projects: list[Project] = field(default_factory=list)
    scanned_at: str = ""
    total_projects: int = 0
    total_packages: int = 0
    limit: int = 0
    offset: int = 0
    remaining: int = 0
    failures: dict[str, str] = field(default_factory=dict)
    enrich: bool = False
    error: str | None = None

    def to_dict(self) -> dict:
        result: dict = {}
        if self.error:
            result["error"] = self.error
            return result

        result["scanned_at"] = self.scanned_at
        result["total_projects"] = self.total_projects
        result["total_packages"] = self.total_packages
        result["limit"] = self.limit
        result["offset"] = self.offset
        result["remaining"] = self.remaining
        result["failures"] = self.failures
        result["enrich"] = self.enrich
        result["projects"] = [
            {**p.to_dict(), "osi_approved": classify(p.licenses)} for p in self.projects
        ]
        return result


def build_report(
    config_path: Path | None = None,
    data_dir: Path | None = None,
    limit: int | None = None,
    offset: int = 0,
    enrich: bool | None = None,
) -> ReportResult:
    """Resolve the last scan and return the requested page.

    Args:
        config_path: Optional explicit config file.
        data_dir: Where the snapshot lives (default: XDG data dir).
        limit: Page size, 0 for everything (default: from settings).
        offset: Number of projects to skip.
        enrich: Ask for online metadata enrichment (default: from settings).
            Reports are built offline, so a request is only acknowledged.
    """
    result = ReportResult(offset=offset)

    try:
        settings = load_settings(config_path)
        resolver = build_resolver(settings)
    except ConfigError as e:
        result.error = str(e)
        return result

    snapshot = load_scan(default_scan_path(data_dir or default_data_dir()))
    if snapshot is None:
        result.error = "No scan found. Run 'syld scan' first."
        return result

    result.enrich = settings.enrich if enrich is None else enrich
    if result.enrich:
        logger.warning("Metadata enrichment is not performed; using scanned metadata only")

    result.limit = settings.report.limit if limit is None else limit
    if result.limit < 0 or offset < 0:
        result.error = "limit and offset must be non-negative"
        return result

    projects = resolver.resolve(snapshot.records)
    result.scanned_at = snapshot.scanned_at
    result.failures = snapshot.failures
    result.total_projects = len(projects)
    result.total_packages = sum(p.package_count for p in projects)
    result.projects = page(projects, result.limit, offset)
    result.remaining = remaining(projects, result.limit, offset)
    return result
