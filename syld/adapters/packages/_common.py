"""
Shared helpers for package-manager backends.
"""

from __future__ import annotations

import logging
import subprocess
from collections.abc import Iterable

from syld.adapters.base import BackendUnavailable
from syld.core.models.package import PackageRecord

logger = logging.getLogger(__name__)

# Seconds before a listing command is considered hung.
COMMAND_TIMEOUT = 60


def _run(args: list[str], timeout: int = COMMAND_TIMEOUT) -> subprocess.CompletedProcess[str]:
    """Run a command and return the result."""
    return subprocess.run(
        args,
        capture_output=True,
        text=True,
        errors="replace",
        timeout=timeout,
    )


def run_listing(backend: str, args: list[str], timeout: int = COMMAND_TIMEOUT) -> str:
    """Run a package-manager listing command and return its stdout.

    Raises:
        BackendUnavailable: The command could not run or exited non-zero.
    """
    logger.debug("%s: running %s", backend, " ".join(args))
    try:
        result = _run(args, timeout=timeout)
    except subprocess.TimeoutExpired as e:
        raise BackendUnavailable(backend, f"'{args[0]}' timed out after {timeout}s") from e
    except OSError as e:
        raise BackendUnavailable(backend, f"cannot run '{args[0]}': {e}") from e

    if result.returncode != 0:
        stderr = (result.stderr or "").strip()
        raise BackendUnavailable(
            backend,
            f"'{' '.join(args)}' failed (exit {result.returncode}): {stderr[:200]}",
        )
    return result.stdout


def unique(records: Iterable[PackageRecord]) -> list[PackageRecord]:
    """Keep the first record per ``(manager, name)``."""
    seen: set[tuple[str, str]] = set()
    out: list[PackageRecord] = []
    for record in records:
        if record.identity not in seen:
            seen.add(record.identity)
            out.append(record)
    return out


def optional(value: str | None, *absent: str) -> str | None:
    """Empty strings and the given placeholders become None."""
    if value is None:
        return None
    value = value.strip()
    if not value or value in absent:
        return None
    return value
