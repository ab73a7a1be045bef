"""Service factory for dependency injection and initialization.

Centralizes the wiring of one worker: its queue, statistics, claim
protocol, processor, cleanup scheduler, driver loop and watch source.

Usage:
    from spool_worker.factory import ServiceFactory

    factory = ServiceFactory(settings)
    services = factory.create_all(Path("./spool"))
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

from spool_worker.config import Settings
from spool_worker.core.claim import FileSystemClaimer
from spool_worker.core.delay import AsyncioDelay
from spool_worker.core.stats import ProcessingStats
from spool_worker.core.work_queue import WorkQueue
from spool_worker.services.cleanup import CleanupScheduler
from spool_worker.services.processor import WorkOrderProcessor
from spool_worker.services.watch_source import DirectoryWatcher
from spool_worker.services.worker import Worker

if TYPE_CHECKING:
    from spool_worker.ports.claiming import ClaimerPort
    from spool_worker.ports.timing import DelayPort

logger = logging.getLogger(__name__)


@dataclass
class ServiceContainer:
    """Container for all services of one worker.

    Attributes:
        queue: In-process FIFO of admitted work orders.
        stats: Processing statistics owned by this worker.
        claimer: Claim protocol implementation.
        processor: Simulated work order processor.
        cleanup: Scheduler for deleting processed files.
        worker: The driver loop.
        watcher: Watch source feeding the queue.
    """

    queue: WorkQueue
    stats: ProcessingStats
    claimer: ClaimerPort
    processor: WorkOrderProcessor
    cleanup: CleanupScheduler
    worker: Worker
    watcher: DirectoryWatcher


class ServiceFactory:
    """Factory for creating and wiring the services of a worker.

    Example:
        factory = ServiceFactory(settings)
        services = factory.create_all(directory)
        # Use services.worker, services.watcher, etc.
    """

    def __init__(
        self,
        settings: Settings,
        claimer: ClaimerPort | None = None,
        delay: DelayPort | None = None,
        rng: random.Random | None = None,
    ) -> None:
        """Initialize the factory.

        Args:
            settings: Application settings.
            claimer: Optional claim protocol override for testing.
            delay: Optional delay override for testing.
            rng: Optional jitter random source for testing.
        """
        self._settings = settings
        self._injected_claimer = claimer
        self._injected_delay = delay
        self._rng = rng

    def create_stats(self) -> ProcessingStats:
        return ProcessingStats(keep=self._settings.keep)

    def create_claimer(self) -> ClaimerPort:
        if self._injected_claimer is not None:
            return self._injected_claimer
        return FileSystemClaimer()

    def create_delay(self) -> DelayPort:
        if self._injected_delay is not None:
            return self._injected_delay
        return AsyncioDelay()

    def create_processor(self, stats: ProcessingStats, delay: DelayPort) -> WorkOrderProcessor:
        """Create the work order processor.

        Args:
            stats: Statistics the processor reports successes to.
            delay: Suspension used for the simulated work.

        Returns:
            Configured WorkOrderProcessor instance.
        """
        return WorkOrderProcessor(
            stats=stats,
            delay=delay,
            seconds_per_unit=self._settings.seconds_per_unit,
        )

    def create_worker(
        self,
        queue: WorkQueue,
        claimer: ClaimerPort,
        processor: WorkOrderProcessor,
        stats: ProcessingStats,
        cleanup: CleanupScheduler,
        delay: DelayPort,
    ) -> Worker:
        """Create the driver loop.

        Returns:
            Configured Worker instance.
        """
        return Worker(
            queue=queue,
            claimer=claimer,
            processor=processor,
            stats=stats,
            cleanup=cleanup,
            delay=delay,
            max_jitter_seconds=self._settings.max_jitter_seconds,
            rng=self._rng,
        )

    def create_watcher(self, directory: Path, queue: WorkQueue) -> DirectoryWatcher:
        """Create the watch source feeding ``queue``.

        Args:
            directory: Directory to watch.
            queue: Queue receiving admitted work orders.

        Returns:
            Configured DirectoryWatcher instance.
        """
        return DirectoryWatcher(
            directory=directory,
            on_work_order=queue.enqueue,
            recursive=self._settings.recursive,
        )

    def create_all(self, directory: Path) -> ServiceContainer:
        """Create and wire all services for one worker.

        Args:
            directory: Directory to watch.

        Returns:
            ServiceContainer with every service initialized.
        """
        queue = WorkQueue()
        stats = self.create_stats()
        claimer = self.create_claimer()
        delay = self.create_delay()
        processor = self.create_processor(stats, delay)
        cleanup = CleanupScheduler()
        worker = self.create_worker(queue, claimer, processor, stats, cleanup, delay)
        watcher = self.create_watcher(directory, queue)

        logger.debug(
            "Worker wired (seconds_per_unit=%s, keep=%d, max_jitter_seconds=%s)",
            self._settings.seconds_per_unit,
            self._settings.keep,
            self._settings.max_jitter_seconds,
        )
        return ServiceContainer(
            queue=queue,
            stats=stats,
            claimer=claimer,
            processor=processor,
            cleanup=cleanup,
            worker=worker,
            watcher=watcher,
        )
