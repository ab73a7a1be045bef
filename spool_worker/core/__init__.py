"""Core components for the spool worker."""

from spool_worker.core.admission import is_work_order
from spool_worker.core.claim import ClaimResult, FileSystemClaimer, claimed_path
from spool_worker.core.constants import CLAIM_SUFFIX, WORK_ORDER_PATTERN
from spool_worker.core.errors import (
    ConfigurationError,
    DirectoryNotFoundError,
    MissingDirectoryArgumentError,
    NotADirectoryPathError,
    SpoolWorkerError,
    StartupError,
    WorkOrderParseError,
)
from spool_worker.core.stats import ProcessingStats, round_half_up
from spool_worker.core.work_order import ProcessedResult, parse_processing_time
from spool_worker.core.work_queue import WorkQueue

__all__ = [
    # Admission and queue
    "is_work_order",
    "WorkQueue",
    "WORK_ORDER_PATTERN",
    # Claim protocol
    "CLAIM_SUFFIX",
    "ClaimResult",
    "FileSystemClaimer",
    "claimed_path",
    # Work orders
    "ProcessedResult",
    "parse_processing_time",
    # Statistics
    "ProcessingStats",
    "round_half_up",
    # Errors
    "SpoolWorkerError",
    "StartupError",
    "MissingDirectoryArgumentError",
    "NotADirectoryPathError",
    "DirectoryNotFoundError",
    "ConfigurationError",
    "WorkOrderParseError",
]
