"""
dnf backend — queries the rpm database through ``rpm -qa``.

One tab-separated line per package:
``NAME  VERSION-RELEASE  SUMMARY  URL  LICENSE``. rpm prints ``(none)``
for empty tags.
"""

from __future__ import annotations

import logging
import shutil
from pathlib import Path

from syld.adapters.base import Backend
from syld.adapters.packages._common import optional, run_listing, unique
from syld.core.models.package import PackageManager, PackageRecord

logger = logging.getLogger(__name__)

RPM_DB_PATH = Path("/var/lib/rpm")
QUERY_FORMAT = "%{NAME}\\t%{VERSION}-%{RELEASE}\\t%{SUMMARY}\\t%{URL}\\t%{LICENSE}\\n"


def parse_line(line: str) -> PackageRecord:
    """Parse one ``rpm -qa --queryformat`` line.

    Raises:
        ValueError: The name column is empty.
    """
    fields = line.split("\t")
    name = fields[0].strip() if fields else ""
    if not name:
        raise ValueError("Missing package name")

    def col(i: int) -> str | None:
        return optional(fields[i], "(none)") if len(fields) > i else None

    license_ = col(4)
    return PackageRecord(
        manager=PackageManager.DNF,
        name=name,
        version=col(1) or "unknown",
        description=col(2),
        url=col(3),
        licenses=(license_,) if license_ else (),
    )


def parse_output(output: str) -> list[PackageRecord]:
    records: list[PackageRecord] = []
    for line in output.splitlines():
        if not line.strip():
            continue
        try:
            records.append(parse_line(line))
        except ValueError as e:
            logger.warning("dnf: skipping rpm entry: %s", e)
    return unique(records)


class DnfBackend(Backend):
    """Installed packages from the rpm database."""

    @property
    def name(self) -> str:
        return PackageManager.DNF.value

    def is_available(self) -> bool:
        return shutil.which("rpm") is not None or RPM_DB_PATH.is_dir()

    def list_installed(self) -> list[PackageRecord]:
        if shutil.which("rpm") is None:
            return []
        output = run_listing(self.name, ["rpm", "-qa", "--queryformat", QUERY_FORMAT])
        records = parse_output(output)
        logger.info("dnf: %d package(s)", len(records))
        return records
