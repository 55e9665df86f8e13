"""
Discovery service — scan package-manager backends concurrently.

Backends are independent and read-only, so each runs on its own worker
thread. Results are concatenated in backend order; the resolver
re-sorts anyway, so merge order never shows in the final output.

One failing backend never aborts the scan: its error is recorded in
``ScanOutcome.failures`` and the other backends' records are kept.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field

from syld.adapters.base import Backend, BackendUnavailable
from syld.core.models.package import PackageRecord

logger = logging.getLogger(__name__)


@dataclass
class ScanOutcome:
    """What a scan over several backends produced."""

    records: list[PackageRecord] = field(default_factory=list)
    scanned: dict[str, int] = field(default_factory=dict)    # name → record count
    failures: dict[str, str] = field(default_factory=dict)   # name → error message
    skipped: list[str] = field(default_factory=list)         # not available here

    @property
    def ok(self) -> bool:
        return not self.failures

    @property
    def total(self) -> int:
        return len(self.records)

    def to_dict(self) -> dict:
        return {
            "total_packages": self.total,
            "scanned": self.scanned,
            "failures": self.failures,
            "skipped": self.skipped,
        }


def _list_one(backend: Backend) -> list[PackageRecord]:
    logger.info("Scanning %s packages...", backend.name)
    return backend.list_installed()


def _is_available(backend: Backend) -> bool:
    try:
        return backend.is_available()
    except Exception:
        logger.debug("is_available() raised for %s", backend.name, exc_info=True)
        return False


def scan_backends(
    backends: Sequence[Backend],
    max_workers: int | None = None,
) -> ScanOutcome:
    """Run ``list_installed()`` on every available backend in parallel.

    Args:
        backends: Backends to consider, in merge order.
        max_workers: Thread pool size (default: one per backend).

    Returns:
        ScanOutcome with the merged records and per-backend status.
    """
    outcome = ScanOutcome()
    active = []
    for backend in backends:
        if _is_available(backend):
            active.append(backend)
        else:
            outcome.skipped.append(backend.name)

    if not active:
        logger.warning("No supported package managers detected on this system")
        return outcome

    with ThreadPoolExecutor(max_workers=max_workers or len(active)) as pool:
        futures = [(backend, pool.submit(_list_one, backend)) for backend in active]

        for backend, future in futures:
            try:
                records = future.result()
            except BackendUnavailable as e:
                logger.warning("Error scanning %s: %s", backend.name, e.reason)
                outcome.failures[backend.name] = e.reason
                continue
            except Exception as e:
                logger.error("Backend %s raised during scan: %s", backend.name, e)
                outcome.failures[backend.name] = f"Unexpected error: {e}"
                continue

            outcome.scanned[backend.name] = len(records)
            outcome.records.extend(records)
            logger.info("  %s: found %d packages", backend.name, len(records))

    logger.info("Total: %d packages discovered", outcome.total)
    return outcome
