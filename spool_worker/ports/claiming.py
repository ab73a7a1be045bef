"""Protocol interface for claiming work orders.

The driver loop depends on this protocol, not on the file system, so the
cross-worker race can be replayed deterministically in tests.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from spool_worker.core.claim import ClaimResult


class ClaimerPort(Protocol):
    """Takes exclusive ownership of a work order path.

    Consumer: Worker.run_once()
    """

    def claim(self, path: str) -> ClaimResult:
        """Attempt to claim a path.

        Args:
            path: Path of the unclaimed work order.

        Returns:
            CLAIMED, DEFERRED or FAILED. Must not raise for expected races.
        """
        ...
