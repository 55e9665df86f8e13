"""
pacman backend — reads the local database directly.

The database lives at ``/var/lib/pacman/local/`` with one directory per
installed package. Each directory holds a ``desc`` file made of
``%FIELD%`` headers followed by value lines, separated by blank lines.
"""

from __future__ import annotations

import logging
from pathlib import Path

from syld.adapters.base import Backend, BackendUnavailable
from syld.adapters.packages._common import unique
from syld.core.models.package import PackageManager, PackageRecord

logger = logging.getLogger(__name__)

PACMAN_DB_PATH = Path("/var/lib/pacman/local")


def parse_desc(content: str) -> PackageRecord:
    """Parse the content of a pacman ``desc`` file.

    Raises:
        ValueError: ``%NAME%`` or ``%VERSION%`` is missing.
    """
    fields: dict[str, list[str]] = {}
    current: str | None = None

    for raw in content.splitlines():
        line = raw.strip()
        if line.startswith("%") and line.endswith("%") and len(line) > 1:
            current = line
            fields.setdefault(current, [])
            continue
        if not line:
            current = None
            continue
        if current is not None:
            fields[current].append(line)

    name = next(iter(fields.get("%NAME%", [])), None)
    version = next(iter(fields.get("%VERSION%", [])), None)
    if not name:
        raise ValueError("Missing %NAME% in desc file")
    if not version:
        raise ValueError("Missing %VERSION% in desc file")

    return PackageRecord(
        manager=PackageManager.PACMAN,
        name=name,
        version=version,
        description=next(iter(fields.get("%DESC%", [])), None),
        url=next(iter(fields.get("%URL%", [])), None),
        licenses=tuple(fields.get("%LICENSE%", [])),
    )


class PacmanBackend(Backend):
    """Installed packages from the pacman local database."""

    def __init__(self, db_path: Path = PACMAN_DB_PATH):
        self._db_path = db_path

    @property
    def name(self) -> str:
        return PackageManager.PACMAN.value

    def is_available(self) -> bool:
        return self._db_path.is_dir()

    def list_installed(self) -> list[PackageRecord]:
        if not self._db_path.exists():
            return []

        try:
            entries = sorted(self._db_path.iterdir())
        except OSError as e:
            raise BackendUnavailable(self.name, f"cannot read {self._db_path}: {e}") from e

        records: list[PackageRecord] = []
        desc_files = 0
        for entry in entries:
            desc = entry / "desc"
            if not desc.is_file():
                continue
            desc_files += 1
            try:
                records.append(parse_desc(desc.read_text(encoding="utf-8", errors="replace")))
            except (OSError, ValueError) as e:
                logger.warning("pacman: skipping %s: %s", desc, e)

        if desc_files and not records:
            raise BackendUnavailable(
                self.name, f"no readable entries in {self._db_path} ({desc_files} found)"
            )

        logger.info("pacman: %d package(s)", len(records))
        return unique(records)
