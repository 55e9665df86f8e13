"""
snap backend — parses ``snap list``.

The first line is a header (``Name  Version  Rev  Tracking ...``);
columns are whitespace separated. Descriptions come from each snap's
``meta/snap.yaml`` when readable.
"""

from __future__ import annotations

import logging
import shutil
from pathlib import Path

import yaml

from syld.adapters.base import Backend
from syld.adapters.packages._common import run_listing, unique
from syld.core.models.package import PackageManager, PackageRecord

logger = logging.getLogger(__name__)

SNAP_ROOT = Path("/snap")


def parse_output(output: str) -> list[PackageRecord]:
    """Parse ``snap list`` output, skipping the header row."""
    lines = [line for line in output.splitlines() if line.strip()]
    records: list[PackageRecord] = []
    for line in lines[1:]:
        fields = line.split()
        records.append(
            PackageRecord(
                manager=PackageManager.SNAP,
                name=fields[0],
                version=fields[1] if len(fields) > 1 else "unknown",
            )
        )
    return unique(records)


def read_description(snap_root: Path, name: str) -> str | None:
    """Summary or description from ``<root>/<name>/current/meta/snap.yaml``."""
    path = snap_root / name / "current" / "meta" / "snap.yaml"
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except (OSError, yaml.YAMLError):
        return None
    if not isinstance(data, dict):
        return None
    for key in ("summary", "description"):
        value = data.get(key)
        if isinstance(value, str) and value.strip():
            return value.strip()
    return None


class SnapBackend(Backend):
    """Installed snaps."""

    def __init__(self, snap_root: Path = SNAP_ROOT):
        self._snap_root = snap_root

    @property
    def name(self) -> str:
        return PackageManager.SNAP.value

    def is_available(self) -> bool:
        return shutil.which("snap") is not None

    def list_installed(self) -> list[PackageRecord]:
        if not self.is_available():
            return []
        records = [
            r.model_copy(update={"description": read_description(self._snap_root, r.name)})
            for r in parse_output(run_listing(self.name, ["snap", "list"]))
        ]
        logger.info("snap: %d snap(s)", len(records))
        return records
