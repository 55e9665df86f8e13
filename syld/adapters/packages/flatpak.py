"""
flatpak backend — lists installed applications.

``flatpak list --app --columns=application,version,description,origin``
prints one tab-separated line per app. Runtimes are not listed.
"""

from __future__ import annotations

import logging
import shutil

from syld.adapters.base import Backend
from syld.adapters.packages._common import optional, run_listing, unique
from syld.core.models.package import PackageManager, PackageRecord

logger = logging.getLogger(__name__)

LIST_COMMAND = ["flatpak", "list", "--app", "--columns=application,version,description,origin"]


def parse_line(line: str) -> PackageRecord:
    """Parse one ``flatpak list`` line.

    Raises:
        ValueError: The application ID column is empty.
    """
    fields = line.split("\t")
    app_id = fields[0].strip() if fields else ""
    if not app_id:
        raise ValueError("Missing application ID")
    return PackageRecord(
        manager=PackageManager.FLATPAK,
        name=app_id,
        version=(optional(fields[1]) if len(fields) > 1 else None) or "unknown",
        description=optional(fields[2]) if len(fields) > 2 else None,
    )


def parse_output(output: str) -> list[PackageRecord]:
    records: list[PackageRecord] = []
    for line in output.splitlines():
        if not line.strip():
            continue
        try:
            records.append(parse_line(line))
        except ValueError as e:
            logger.warning("flatpak: skipping entry: %s", e)
    # The same app can be installed system-wide and per-user.
    return unique(records)


class FlatpakBackend(Backend):
    """Installed flatpak applications."""

    @property
    def name(self) -> str:
        return PackageManager.FLATPAK.value

    def is_available(self) -> bool:
        return shutil.which("flatpak") is not None

    def list_installed(self) -> list[PackageRecord]:
        if not self.is_available():
            return []
        records = parse_output(run_listing(self.name, LIST_COMMAND))
        logger.info("flatpak: %d application(s)", len(records))
        return records
