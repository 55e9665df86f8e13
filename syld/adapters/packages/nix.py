"""
nix backend — user profile and NixOS system packages.

Both sources are read as store paths, ``/nix/store/<hash>-<name>-<version>``
with a 32-character hash:

- ``nix profile list`` for the user's default profile. Nix 2.20+ prints
  ``Name:`` / ``Store paths:`` blocks; older releases print one line per
  entry, ``<index> <flake-ref> <resolved-ref> <store-path>``.
- ``nix-store --query --references /run/current-system/sw`` on NixOS,
  one store path per line.

A package present in both keeps the system entry.
"""

from __future__ import annotations

import logging
import shutil
from collections.abc import Callable, Iterable
from pathlib import Path

from syld.adapters.base import Backend, BackendUnavailable
from syld.adapters.packages._common import run_listing
from syld.core.models.package import PackageManager, PackageRecord

logger = logging.getLogger(__name__)

NIX_STORE = Path("/nix/store")
SYSTEM_PROFILE = Path("/run/current-system/sw")

STORE_PREFIX = "/nix/store/"
HASH_LENGTH = 32


def split_name_version(name_version: str) -> tuple[str, str]:
    """Split ``<name>-<version>`` at the last dash followed by a digit.

    >>> split_name_version("python3-3.12.0")
    ('python3', '3.12.0')
    >>> split_name_version("coreutils")
    ('coreutils', 'unknown')
    """
    split = None
    for i, char in enumerate(name_version):
        if char == "-" and name_version[i + 1 : i + 2].isdigit():
            split = i
    if split is None:
        return name_version, "unknown"
    return name_version[:split], name_version[split + 1 :]


def parse_store_path(path: str) -> PackageRecord | None:
    """Turn a store path into a record, or None if it is not one."""
    if not path.startswith(STORE_PREFIX):
        return None
    rest = path[len(STORE_PREFIX) :]
    if len(rest) < HASH_LENGTH + 2 or rest[HASH_LENGTH] != "-":
        return None

    name, version = split_name_version(rest[HASH_LENGTH + 1 :])
    return PackageRecord(manager=PackageManager.NIX, name=name, version=version)


def _first_store_path(fields: Iterable[str]) -> PackageRecord | None:
    for field in fields:
        if field.startswith(STORE_PREFIX):
            return parse_store_path(field)
    return None


def parse_profile_output(output: str) -> list[PackageRecord]:
    """Parse ``nix profile list`` in either output format."""
    records: list[PackageRecord] = []
    block_format = "Store paths:" in output or "Store path:" in output

    for line in output.splitlines():
        line = line.strip()
        if not line:
            continue
        if block_format:
            label, sep, value = line.partition(":")
            if not sep or label not in ("Store paths", "Store path"):
                continue
            # Multi-output entries list several paths; the first names the package.
            fields = value.split()[:1]
        else:
            fields = line.split()
        record = _first_store_path(fields)
        if record is not None:
            records.append(record)
    return records


def parse_references(output: str) -> list[PackageRecord]:
    """Parse ``nix-store --query --references``."""
    records: list[PackageRecord] = []
    for line in output.splitlines():
        record = parse_store_path(line.strip())
        if record is not None:
            records.append(record)
    return records


def keep_last(records: Iterable[PackageRecord]) -> list[PackageRecord]:
    """Drop duplicate names, keeping the last record for each."""
    by_name: dict[str, PackageRecord] = {}
    for record in records:
        by_name.pop(record.name, None)
        by_name[record.name] = record
    return list(by_name.values())


class NixBackend(Backend):
    """Packages from the Nix user profile and the NixOS system profile."""

    def __init__(self, store: Path = NIX_STORE, system_profile: Path = SYSTEM_PROFILE):
        self._store = store
        self._system_profile = system_profile

    @property
    def name(self) -> str:
        return PackageManager.NIX.value

    def is_available(self) -> bool:
        return self._store.is_dir()

    def list_installed(self) -> list[PackageRecord]:
        if not self._store.is_dir():
            return []

        sources: list[tuple[list[str], Callable[[str], list[PackageRecord]]]] = []
        if shutil.which("nix") is not None:
            sources.append((["nix", "profile", "list"], parse_profile_output))
        if self._system_profile.is_dir() and shutil.which("nix-store") is not None:
            sources.append((
                ["nix-store", "--query", "--references", str(self._system_profile)],
                parse_references,
            ))

        records: list[PackageRecord] = []
        errors: list[str] = []
        for args, parse in sources:
            try:
                records.extend(parse(run_listing(self.name, args)))
            except BackendUnavailable as e:
                logger.warning("nix: %s", e.reason)
                errors.append(e.reason)

        if sources and len(errors) == len(sources):
            raise BackendUnavailable(self.name, "; ".join(errors))

        records = keep_last(records)
        logger.info("nix: %d package(s)", len(records))
        return records
