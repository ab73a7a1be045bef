"""Data model and parsing for work order files. Pure data, no I/O."""

from __future__ import annotations

import math
from dataclasses import dataclass

from spool_worker.core.errors import WorkOrderParseError


def parse_processing_time(raw: str, filename: str = "") -> float:
    """Parse the body of a work order as a duration in minutes.

    Surrounding whitespace (including a trailing newline) is ignored.

    Args:
        raw: Text content of the claimed file.
        filename: Name used in error messages.

    Returns:
        A finite, non-negative number of minutes.

    Raises:
        WorkOrderParseError: If the text is empty, not a decimal number,
            negative, or not finite.
    """
    text = raw.strip()
    if not text:
        raise WorkOrderParseError(filename, raw, "empty")
    try:
        minutes = float(text)
    except ValueError:
        raise WorkOrderParseError(filename, raw, "not a number") from None
    if not math.isfinite(minutes):
        raise WorkOrderParseError(filename, raw, "not finite")
    if minutes < 0:
        raise WorkOrderParseError(filename, raw, "negative")
    return minutes


@dataclass
class ProcessedResult:
    """Result of processing a single claimed work order."""

    path: str
    processing_time: float
    succeeded: bool
    error: str | None = None
