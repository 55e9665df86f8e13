"""
mise backend — developer tools installed with mise.

``mise ls --json`` returns ``{tool: [{version, install_path, source}]}``.
A tool with several installed versions yields one record (the first
version listed), since records are unique per ``(manager, name)``.
"""

from __future__ import annotations

import json
import logging
import shutil
from pathlib import Path

from syld.adapters.base import Backend, BackendUnavailable
from syld.adapters.packages._common import run_listing
from syld.core.models.package import PackageManager, PackageRecord

logger = logging.getLogger(__name__)


def _describe(tool: str, source: dict | None) -> str:
    if not isinstance(source, dict):
        return f"{tool} (installed via mise)"
    kind, path = source.get("type"), source.get("path")
    if kind and path:
        return f"{tool} (from {kind}: {path})"
    if kind:
        return f"{tool} (from {kind})"
    return f"{tool} (installed via mise)"


def parse_output(output: str) -> list[PackageRecord]:
    """Parse ``mise ls --json``.

    Raises:
        ValueError: The output is not the expected JSON shape.
    """
    if not output.strip():
        return []
    data = json.loads(output)
    if not isinstance(data, dict):
        raise ValueError(f"expected a JSON object, got {type(data).__name__}")

    records: list[PackageRecord] = []
    for tool in sorted(data):
        versions = data[tool]
        if not isinstance(versions, list) or not versions:
            continue
        entry = versions[0]
        if not isinstance(entry, dict):
            continue
        records.append(
            PackageRecord(
                manager=PackageManager.MISE,
                name=tool,
                version=str(entry.get("version") or "unknown"),
                description=_describe(tool, entry.get("source")),
            )
        )
    return records


def _find_mise() -> str | None:
    found = shutil.which("mise")
    if found:
        return found
    user_bin = Path.home() / ".local" / "bin" / "mise"
    return str(user_bin) if user_bin.is_file() else None


class MiseBackend(Backend):
    """Tools installed with mise."""

    @property
    def name(self) -> str:
        return PackageManager.MISE.value

    def is_available(self) -> bool:
        return _find_mise() is not None

    def list_installed(self) -> list[PackageRecord]:
        binary = _find_mise()
        if binary is None:
            return []
        output = run_listing(self.name, [binary, "ls", "--json"])
        try:
            records = parse_output(output)
        except ValueError as e:  # json.JSONDecodeError included
            raise BackendUnavailable(self.name, f"unreadable 'mise ls --json' output: {e}") from e
        logger.info("mise: %d tool(s)", len(records))
        return records
