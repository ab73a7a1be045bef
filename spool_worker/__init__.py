"""Spool Worker - one of many workers sharing a directory-based job queue."""

__version__ = "0.1.0"

from spool_worker.config import Settings, get_settings
from spool_worker.core import (
    CLAIM_SUFFIX,
    ClaimResult,
    ConfigurationError,
    DirectoryNotFoundError,
    FileSystemClaimer,
    MissingDirectoryArgumentError,
    NotADirectoryPathError,
    ProcessedResult,
    ProcessingStats,
    SpoolWorkerError,
    StartupError,
    WorkOrderParseError,
    WorkQueue,
    is_work_order,
)

__all__ = [
    # Version info
    "__version__",
    # Configuration
    "Settings",
    "get_settings",
    # Errors
    "SpoolWorkerError",
    "StartupError",
    "MissingDirectoryArgumentError",
    "NotADirectoryPathError",
    "DirectoryNotFoundError",
    "ConfigurationError",
    "WorkOrderParseError",
    # Claim protocol
    "CLAIM_SUFFIX",
    "ClaimResult",
    "FileSystemClaimer",
    # Queue and statistics
    "is_work_order",
    "WorkQueue",
    "ProcessingStats",
    "ProcessedResult",
]
