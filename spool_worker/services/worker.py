"""Driver loop: jitter, dequeue, claim, process, record, clean up, report.

One coroutine runs the loop; iterations never overlap. Watch events are
appended to the queue between (and during) iterations by the watch source.

    Idle ─► Waiting(jitter) ─► Dequeuing ─┬─ no item ─────────────► Idle
                                          └─ item ─► Claiming
    Claiming ─┬─ DEFERRED ─► re-enqueue at tail ──────────────────► Idle
              ├─ FAILED ───► drop ────────────────────────────────► Idle
              └─ CLAIMED ──► Processing ─► Recording ─► CleaningUp
                             ─► MaybeLogging ─────────────────────► Idle

The jitter only makes collisions between sibling workers less likely; the
rename in the claim protocol is what keeps a work order from being
processed twice.
"""

from __future__ import annotations

import asyncio
import logging
import random
from enum import Enum
from typing import TYPE_CHECKING, Any

from spool_worker.core.claim import ClaimResult

if TYPE_CHECKING:
    from spool_worker.core.stats import ProcessingStats
    from spool_worker.core.work_queue import WorkQueue
    from spool_worker.ports.claiming import ClaimerPort
    from spool_worker.ports.timing import DelayPort
    from spool_worker.services.cleanup import CleanupScheduler
    from spool_worker.services.processor import WorkOrderProcessor

logger = logging.getLogger(__name__)


class IterationOutcome(Enum):
    """What a single pass through the driver loop did."""

    IDLE = "idle"
    DEFERRED = "deferred"
    CLAIM_FAILED = "claim_failed"
    PROCESSED = "processed"


class Worker:
    """Claims and processes work orders from its own queue, forever."""

    def __init__(
        self,
        queue: WorkQueue,
        claimer: ClaimerPort,
        processor: WorkOrderProcessor,
        stats: ProcessingStats,
        cleanup: CleanupScheduler,
        delay: DelayPort,
        max_jitter_seconds: float = 1.0,
        rng: random.Random | None = None,
    ) -> None:
        """Initialize the worker.

        Args:
            queue: This worker's work queue.
            claimer: Claim protocol implementation.
            processor: Simulated work order processor.
            stats: Statistics owned by this worker.
            cleanup: Scheduler for deleting processed files.
            delay: Suspension used for the pre-dequeue jitter.
            max_jitter_seconds: Upper bound of the jitter (0 disables it).
            rng: Random source for the jitter.
        """
        if max_jitter_seconds < 0:
            raise ValueError(
                f"max_jitter_seconds must be non-negative, got {max_jitter_seconds}"
            )
        self._queue = queue
        self._claimer = claimer
        self._processor = processor
        self._stats = stats
        self._cleanup = cleanup
        self._delay = delay
        self._max_jitter_seconds = max_jitter_seconds
        self._rng = rng or random.Random()

        self._stop_event = asyncio.Event()
        self._running = False

        # Statistics
        self._files_claimed = 0
        self._claims_deferred = 0
        self._claims_failed = 0
        self._read_errors = 0
        self._loop_errors = 0

    @property
    def stats(self) -> ProcessingStats:
        return self._stats

    @property
    def running(self) -> bool:
        return self._running

    async def run_once(self) -> IterationOutcome:
        """Run a single iteration of the driver loop.

        Returns:
            What the iteration did.
        """
        if self._max_jitter_seconds > 0:
            await self._delay.sleep(self._rng.random() * self._max_jitter_seconds)

        # A stop requested during the jitter must not pick up new work
        if self._stop_event.is_set():
            return IterationOutcome.IDLE

        path = self._queue.dequeue()
        if path is None:
            return IterationOutcome.IDLE
        logger.debug("Dequeued %s Queue size: %d", path, len(self._queue))

        claim = self._claimer.claim(path)
        if claim is ClaimResult.DEFERRED:
            self._claims_deferred += 1
            self._queue.enqueue(path)
            return IterationOutcome.DEFERRED
        if claim is ClaimResult.FAILED:
            self._claims_failed += 1
            return IterationOutcome.CLAIM_FAILED

        self._files_claimed += 1
        result = await self._processor.process(path)
        if not result.succeeded:
            self._read_errors += 1
        self._stats.record(result.processing_time)
        self._cleanup.schedule(path)

        if result.succeeded and self._stats.should_report():
            logger.info(self._stats.summary())
        return IterationOutcome.PROCESSED

    async def run(self) -> None:
        """Run the driver loop until stop() is called.

        Errors inside an iteration are logged and the loop carries on.
        Pending deletions are drained before returning.
        """
        self._stop_event.clear()
        self._running = True
        logger.debug("Worker loop started")
        try:
            while not self._stop_event.is_set():
                try:
                    await self.run_once()
                except Exception:
                    self._loop_errors += 1
                    logger.error("Error in worker loop", exc_info=True)
                # Let watch callbacks run even when jitter is disabled
                await asyncio.sleep(0)
        finally:
            self._running = False
            await self._cleanup.drain()

        logger.info("Worker stopped. %s", self._stats.summary())

    def stop(self) -> None:
        """Ask the loop to exit after the current iteration.

        An in-flight work order is always waited out; an iteration still in
        its jitter returns without dequeuing.
        """
        self._stop_event.set()

    def get_stats(self) -> dict[str, Any]:
        """Get worker statistics.

        Returns:
            Dictionary with claim, processing and cleanup counters.
        """
        stats: dict[str, Any] = {
            "running": self._running,
            "queue_depth": len(self._queue),
            "files_claimed": self._files_claimed,
            "claims_deferred": self._claims_deferred,
            "claims_failed": self._claims_failed,
            "read_errors": self._read_errors,
            "loop_errors": self._loop_errors,
        }
        stats.update(self._stats.as_dict())
        stats.update(self._cleanup.get_stats())
        return stats
