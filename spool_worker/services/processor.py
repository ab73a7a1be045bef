"""Simulated processing of claimed work orders.

A work order's body is a number of minutes. "Processing" it means waiting
that long, scaled by ``seconds_per_unit`` so tests and demos can compress
wall-clock time.
"""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import TYPE_CHECKING

from spool_worker.core.claim import claimed_path
from spool_worker.core.errors import WorkOrderParseError
from spool_worker.core.work_order import ProcessedResult, parse_processing_time

if TYPE_CHECKING:
    from spool_worker.core.stats import ProcessingStats
    from spool_worker.ports.timing import DelayPort

logger = logging.getLogger(__name__)


class WorkOrderProcessor:
    """Reads a claimed work order and waits out its duration."""

    def __init__(
        self,
        stats: ProcessingStats,
        delay: DelayPort,
        seconds_per_unit: float = 60.0,
    ) -> None:
        """Initialize the processor.

        Args:
            stats: Statistics whose processed counter is bumped on success.
            delay: Suspension used for the simulated work.
            seconds_per_unit: Seconds of delay per minute of work.
        """
        if seconds_per_unit < 0:
            raise ValueError(f"seconds_per_unit must be non-negative, got {seconds_per_unit}")
        self._stats = stats
        self._delay = delay
        self._seconds_per_unit = seconds_per_unit

    @property
    def seconds_per_unit(self) -> float:
        return self._seconds_per_unit

    async def process(self, path: str) -> ProcessedResult:
        """Process a work order this worker has already claimed.

        Reads ``path + CLAIM_SUFFIX``. An unreadable or unparsable file is
        logged at error level and counts as zero minutes; the processed
        counter is left alone and the claim is not given back.

        Args:
            path: Original (unsuffixed) path of the claimed work order.

        Returns:
            ProcessedResult with the processing time in minutes.
        """
        target = claimed_path(path)
        try:
            raw = await asyncio.to_thread(Path(target).read_text, encoding="utf-8")
            minutes = parse_processing_time(raw, Path(target).name)
        except (OSError, UnicodeDecodeError, WorkOrderParseError) as e:
            logger.error("Unable to read %s: %s", target, e)
            return ProcessedResult(
                path=path,
                processing_time=0.0,
                succeeded=False,
                error=str(e),
            )

        logger.debug("Processing %s. Waiting for %s minutes.", target, minutes)
        await self._delay.sleep(minutes * self._seconds_per_unit)
        self._stats.count_processed()

        return ProcessedResult(path=path, processing_time=minutes, succeeded=True)
