"""Services for the spool worker."""

from spool_worker.services.cleanup import CleanupScheduler
from spool_worker.services.processor import WorkOrderProcessor
from spool_worker.services.watch_source import DirectoryWatcher, WorkOrderEventHandler
from spool_worker.services.worker import IterationOutcome, Worker

__all__ = [
    "CleanupScheduler",
    "DirectoryWatcher",
    "IterationOutcome",
    "WorkOrderEventHandler",
    "WorkOrderProcessor",
    "Worker",
]
