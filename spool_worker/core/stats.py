"""Processing time statistics for a single worker.

Each worker keeps its own numbers; siblings on the same directory diverge
by design. Nothing here is shared across processes or persisted.
"""

from __future__ import annotations

import math
import sys
from collections import deque
from typing import Any

import numpy as np

from spool_worker.core.constants import SUMMARY_DECIMALS


def round_half_up(value: float, decimals: int = SUMMARY_DECIMALS) -> float:
    """Round half-up after nudging by machine epsilon.

    The nudge makes values such as 1.005, whose binary form sits just below
    the midpoint, round up as a reader expects.

    Args:
        value: Number to round.
        decimals: Number of decimal places to keep.

    Returns:
        The rounded value.

    Example:
        >>> round_half_up(1.005)
        1.01
    """
    factor = 10**decimals
    return math.floor((value + sys.float_info.epsilon) * factor + 0.5) / factor


def format_number(value: float) -> str:
    """Render a rounded number without trailing zeros (30, 0.01, 1.5)."""
    text = f"{value:.{SUMMARY_DECIMALS}f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


class ProcessingStats:
    """Running totals and a rolling window of recent processing times.

    Attributes:
        keep: Capacity of the rolling window.
        processed_count: Work orders that were read and waited out successfully.
        total_processing_time: Sum of every recorded processing time, in minutes.
    """

    def __init__(self, keep: int = 5) -> None:
        if keep < 1:
            raise ValueError(f"keep must be at least 1, got {keep}")
        self.keep = keep
        self.processed_count = 0
        self.total_processing_time = 0.0
        self._window: deque[float] = deque(maxlen=keep)

    @property
    def window(self) -> list[float]:
        """Rolling window contents, oldest first."""
        return list(self._window)

    def count_processed(self) -> int:
        """Increment the processed counter and return its new value."""
        self.processed_count += 1
        return self.processed_count

    def record(self, processing_time: float) -> None:
        """Add a processing time to the totals and the rolling window.

        The oldest window entry is evicted once the window holds ``keep``
        values.

        Args:
            processing_time: Minutes spent on one work order (0 for unreadable ones).
        """
        self.total_processing_time += processing_time
        self._window.append(processing_time)

    def rolling_sum_of_squared_deviations(self) -> float:
        """Sum of squared deviations of the window from its latest value.

        For a window ``v0..vn`` this is ``sum((vi - vn) ** 2)``. It measures
        how far recent times sit from the newest one; it is not a variance.

        Returns:
            The sum, or 0.0 when the window holds fewer than two values.
        """
        if len(self._window) < 2:
            return 0.0
        values = np.fromiter(self._window, dtype=np.float64, count=len(self._window))
        return float(np.sum((values - values[-1]) ** 2))

    def should_report(self) -> bool:
        """True when the processed counter has just reached a multiple of ``keep``."""
        return self.processed_count > 0 and self.processed_count % self.keep == 0

    def summary(self) -> str:
        """Format the periodic summary line."""
        total = format_number(round_half_up(self.total_processing_time))
        squares = format_number(round_half_up(self.rolling_sum_of_squared_deviations()))
        return (
            f"Files processed: {self.processed_count}, "
            f"Total processing time: {total} "
            f"Sum of Squares: {squares}"
        )

    def as_dict(self) -> dict[str, Any]:
        """Snapshot of the statistics for reporting."""
        return {
            "processed_count": self.processed_count,
            "total_processing_time": self.total_processing_time,
            "window": self.window,
            "rolling_sum_of_squared_deviations": self.rolling_sum_of_squared_deviations(),
        }
