"""
Plan history — append-only ledger of allocation plans.

Every recorded plan is written as one JSON line (NDJSON) to
``history.ndjson`` in the data directory. Entries are never modified;
corrupt lines are skipped on read.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

from pydantic import ValidationError

from syld.core.models.budget import AllocationPlan

logger = logging.getLogger(__name__)

HISTORY_FILE = "history.ndjson"


class PlanHistory:
    """Append-only store of past allocation plans."""

    def __init__(self, path: Path | None = None, data_dir: Path | None = None):
        if path is not None:
            self._path = path
        elif data_dir is not None:
            self._path = data_dir / HISTORY_FILE
        else:
            self._path = Path(HISTORY_FILE)

    @property
    def path(self) -> Path:
        return self._path

    def append(self, plan: AllocationPlan) -> None:
        """Append a plan to the ledger.

        Raises:
            OSError: The ledger cannot be written.
        """
        self._path.parent.mkdir(parents=True, exist_ok=True)
        line = json.dumps(plan.model_dump(mode="json"), ensure_ascii=False) + "\n"
        with self._path.open("a", encoding="utf-8") as f:
            f.write(line)
        logger.debug("Plan recorded in %s (%d entries)", self._path, len(plan.entries))

    def read_all(self) -> list[AllocationPlan]:
        """All recorded plans, oldest first."""
        if not self._path.is_file():
            return []

        plans = []
        with self._path.open("r", encoding="utf-8") as f:
            for line_num, line in enumerate(f, start=1):
                line = line.strip()
                if not line:
                    continue
                try:
                    plans.append(AllocationPlan.model_validate(json.loads(line)))
                except (json.JSONDecodeError, ValidationError) as e:
                    logger.warning("Skipping corrupt history entry at line %d: %s", line_num, e)
        return plans

    def read_recent(self, n: int = 10) -> list[AllocationPlan]:
        """The most recent ``n`` plans, oldest first."""
        if n <= 0:
            return []
        return self.read_all()[-n:]

    def __len__(self) -> int:
        if not self._path.is_file():
            return 0
        with self._path.open("r", encoding="utf-8") as f:
            return sum(1 for line in f if line.strip())
