"""Fire-and-forget deletion of processed work orders.

The driver loop schedules a deletion and moves on. Failures never reach the
loop; they are logged at warning level and kept in ``recent_failures`` so
they stay observable.
"""

from __future__ import annotations

import asyncio
import logging
import os
from collections import deque
from typing import Any

from spool_worker.core.claim import claimed_path

logger = logging.getLogger(__name__)

MAX_TRACKED_FAILURES = 100


class CleanupScheduler:
    """Deletes claimed files in background tasks on the running loop."""

    def __init__(self) -> None:
        self._pending: set[asyncio.Task[bool]] = set()
        self._files_deleted = 0
        self._delete_failures = 0
        self.recent_failures: deque[tuple[str, str]] = deque(maxlen=MAX_TRACKED_FAILURES)

    @property
    def pending(self) -> int:
        """Number of deletions still in flight."""
        return len(self._pending)

    def schedule(self, path: str) -> asyncio.Task[bool]:
        """Schedule deletion of a claimed work order without waiting for it.

        Must be called from a coroutine running on the event loop.

        Args:
            path: Original (unsuffixed) path; ``path + CLAIM_SUFFIX`` is removed.

        Returns:
            The task, resolving to True if the file was deleted.
        """
        target = claimed_path(path)
        task = asyncio.get_running_loop().create_task(
            self._delete(target), name=f"cleanup:{os.path.basename(target)}"
        )
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)
        return task

    async def _delete(self, target: str) -> bool:
        try:
            await asyncio.to_thread(os.unlink, target)
        except OSError as e:
            self._delete_failures += 1
            self.recent_failures.append((target, str(e)))
            logger.warning("Unable to delete %s: %s", target, e)
            return False

        self._files_deleted += 1
        logger.debug("Successfully deleted %s", target)
        return True

    async def drain(self) -> None:
        """Wait for every scheduled deletion to finish."""
        if self._pending:
            await asyncio.gather(*list(self._pending))

    def get_stats(self) -> dict[str, Any]:
        """Get cleanup statistics.

        Returns:
            Dictionary with deletion counters.
        """
        return {
            "files_deleted": self._files_deleted,
            "delete_failures": self._delete_failures,
            "pending_deletes": self.pending,
        }
