"""Port interfaces for the spool worker."""

from spool_worker.ports.claiming import ClaimerPort
from spool_worker.ports.timing import DelayPort

__all__ = [
    "ClaimerPort",
    "DelayPort",
]
