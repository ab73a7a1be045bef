"""Protocol interface for suspending the driver loop."""

from __future__ import annotations

from typing import Protocol


class DelayPort(Protocol):
    """Suspends the calling coroutine.

    Consumers: WorkOrderProcessor.process() (simulated work) and
    Worker.run_once() (jitter).
    """

    async def sleep(self, seconds: float) -> None:
        """Suspend for the given number of seconds.

        Args:
            seconds: Non-negative delay.
        """
        ...

