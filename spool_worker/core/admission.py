"""Admission filter for work order paths. Pure, no I/O."""

from __future__ import annotations

from pathlib import PurePath

from spool_worker.core.constants import WORK_ORDER_PATTERN


def is_work_order(path: str | PurePath) -> bool:
    """Check whether a path names a work order file.

    Only the final path segment is inspected: four digits followed by
    exactly four ``_NN`` groups and a ``.txt`` extension
    (e.g. ``2024_01_01_00_00.txt``). Claimed files
    (``... .txt.inProgress``) never match.

    Args:
        path: Any path string or path object.

    Returns:
        True if the final segment matches the work order pattern.
    """
    name = PurePath(path).name
    return WORK_ORDER_PATTERN.fullmatch(name) is not None
