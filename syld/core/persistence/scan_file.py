"""
Scan snapshot persistence — atomic read/write of the last scan.

``syld scan`` stores its raw package records in ``last_scan.json`` under
the data directory so that ``report`` and ``budget plan`` can work
without rescanning. Writes are atomic (temp file, then rename).
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from datetime import UTC, datetime
from pathlib import Path

from pydantic import BaseModel, Field, ValidationError

from syld.core.models.package import PackageRecord

logger = logging.getLogger(__name__)

SCAN_FILE = "last_scan.json"
SCHEMA_VERSION = 1


def _now_iso() -> str:
    """Current UTC time as ISO string."""
    return datetime.now(UTC).isoformat()


class ScanSnapshot(BaseModel):
    """Raw result of one scan, as stored on disk."""

    schema_version: int = SCHEMA_VERSION
    scanned_at: str = Field(default_factory=_now_iso)
    records: list[PackageRecord] = Field(default_factory=list)
    failures: dict[str, str] = Field(default_factory=dict)


def default_scan_path(data_dir: Path) -> Path:
    """Snapshot path inside the data directory."""
    return data_dir / SCAN_FILE


def load_scan(path: Path) -> ScanSnapshot | None:
    """Load the last scan.

    Returns:
        The snapshot, or None if there is none or it is unreadable.
    """
    if not path.is_file():
        logger.info("No scan snapshot at %s", path)
        return None

    try:
        data = json.loads(path.read_text(encoding="utf-8"))
        snapshot = ScanSnapshot.model_validate(data)
    except (OSError, json.JSONDecodeError, ValidationError) as e:
        logger.warning("Cannot load scan snapshot %s: %s — ignoring it", path, e)
        return None

    logger.debug("Loaded %d record(s) scanned at %s", len(snapshot.records), snapshot.scanned_at)
    return snapshot


def save_scan(snapshot: ScanSnapshot, path: Path) -> None:
    """Save a scan snapshot (atomic write).

    Raises:
        OSError: The data directory is not writable.
    """
    path.parent.mkdir(parents=True, exist_ok=True)

    data = snapshot.model_dump(mode="json")
    content = json.dumps(data, indent=2, ensure_ascii=False) + "\n"

    fd, tmp_path = tempfile.mkstemp(dir=path.parent, prefix=".scan_", suffix=".tmp")
    os.close(fd)
    tmp = Path(tmp_path)
    try:
        tmp.write_text(content, encoding="utf-8")
        tmp.replace(path)
    except Exception as e:
        tmp.unlink(missing_ok=True)
        logger.error("Failed to save scan snapshot to %s: %s", path, e)
        raise

    logger.debug("Scan snapshot saved to %s", path)
