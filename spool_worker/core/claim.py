"""Rename-based claim protocol for work order files.

Workers watching the same directory never talk to each other. A worker owns
a work order once it has renamed ``<name>.txt`` to ``<name>.txt.inProgress``:
rename is atomic, so when several workers race on one path exactly one
rename succeeds and everyone else sees the source vanish.

    claim(path)
        │
        ├── stat fails ──────────────► FAILED   (a sibling got there first)
        ├── size == 0 ───────────────► DEFERRED (writer still flushing)
        └── rename(path, path+suffix)
                ├── ok ──────────────► CLAIMED
                └── OSError ─────────► FAILED
"""

from __future__ import annotations

import logging
import os
from enum import Enum

from spool_worker.core.constants import CLAIM_SUFFIX

logger = logging.getLogger(__name__)


class ClaimResult(Enum):
    """Outcome of a single claim attempt."""

    CLAIMED = "claimed"
    DEFERRED = "deferred"
    FAILED = "failed"


def claimed_path(path: str) -> str:
    """Return the on-disk name of a work order once it has been claimed."""
    return path + CLAIM_SUFFIX


class FileSystemClaimer:
    """Claims work orders by renaming them in place.

    Never retries and never raises for OS errors; retry policy belongs to
    the caller.
    """

    def claim(self, path: str) -> ClaimResult:
        """Try to take exclusive ownership of a work order.

        Args:
            path: Path of the unclaimed work order.

        Returns:
            CLAIMED if this worker now owns ``path + CLAIM_SUFFIX``,
            DEFERRED if the file is still empty, FAILED otherwise.
        """
        try:
            size = os.stat(path).st_size
        except OSError as e:
            # Expected when a sibling worker claimed the file first
            logger.debug("Failed getting stats for %s: %s", path, e)
            return ClaimResult.FAILED

        if size == 0:
            logger.debug("Work order %s is still empty, deferring", path)
            return ClaimResult.DEFERRED

        try:
            os.rename(path, claimed_path(path))
        except OSError as e:
            logger.debug("Unable to rename %s: %s", path, e)
            return ClaimResult.FAILED

        logger.debug("Successfully claimed %s", path)
        return ClaimResult.CLAIMED
