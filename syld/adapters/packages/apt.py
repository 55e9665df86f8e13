"""
apt backend — reads the dpkg status database.

``/var/lib/dpkg/status`` is a single file of RFC 822-style ``Key: Value``
paragraphs separated by blank lines. Continuation lines start with a
space; a lone ``.`` stands for an empty line.
"""

from __future__ import annotations

import logging
from pathlib import Path

from syld.adapters.base import Backend, BackendUnavailable
from syld.adapters.packages._common import unique
from syld.core.models.package import PackageManager, PackageRecord

logger = logging.getLogger(__name__)

DPKG_STATUS_PATH = Path("/var/lib/dpkg/status")


def parse_entry(paragraph: str) -> PackageRecord | None:
    """Parse one dpkg status paragraph.

    Returns None for packages that are not installed (removed but not
    purged). A paragraph without ``Status`` is kept.

    Raises:
        ValueError: ``Package`` or ``Version`` is missing.
    """
    values: dict[str, str] = {}
    description: list[str] = []
    current: str | None = None

    for line in paragraph.splitlines():
        if line.startswith((" ", "\t")):
            if current == "Description":
                rest = line[1:]
                description.append("" if rest == "." else rest)
            continue

        key, sep, value = line.partition(":")
        if not sep:
            continue
        current = key
        value = value.strip()
        if key == "Description":
            description = [value]
        else:
            values[key] = value

    status = values.get("Status")
    if status is not None:
        state = status.split()[-1] if status.split() else ""
        if not state.endswith("installed") or state == "not-installed":
            return None

    if not values.get("Package"):
        raise ValueError("Missing Package field in dpkg entry")
    if not values.get("Version"):
        raise ValueError("Missing Version field in dpkg entry")

    return PackageRecord(
        manager=PackageManager.APT,
        name=values["Package"],
        version=values["Version"],
        description="\n".join(description) if description else None,
        url=values.get("Homepage") or None,
    )


def parse_status(content: str) -> list[PackageRecord]:
    """Parse a whole dpkg status file.

    Raises:
        ValueError: The file has entries but none of them parse.
    """
    records: list[PackageRecord] = []
    entries = skipped = 0
    for paragraph in content.split("\n\n"):
        paragraph = paragraph.strip("\n")
        if not paragraph.strip():
            continue
        entries += 1
        try:
            record = parse_entry(paragraph)
        except ValueError as e:
            logger.warning("apt: skipping dpkg entry: %s", e)
            skipped += 1
            continue
        if record is not None:
            records.append(record)

    if entries and skipped == entries:
        raise ValueError(f"no readable entries ({entries} found)")
    return unique(records)


class AptBackend(Backend):
    """Installed packages from the dpkg status file."""

    def __init__(self, status_path: Path = DPKG_STATUS_PATH):
        self._status_path = status_path

    @property
    def name(self) -> str:
        return PackageManager.APT.value

    def is_available(self) -> bool:
        return self._status_path.is_file()

    def list_installed(self) -> list[PackageRecord]:
        if not self._status_path.exists():
            return []
        try:
            content = self._status_path.read_text(encoding="utf-8", errors="replace")
        except OSError as e:
            raise BackendUnavailable(self.name, f"cannot read {self._status_path}: {e}") from e

        try:
            records = parse_status(content)
        except ValueError as e:
            raise BackendUnavailable(self.name, f"{self._status_path}: {e}") from e
        logger.info("apt: %d package(s)", len(records))
        return records
