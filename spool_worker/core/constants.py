"""Spool protocol constants (hardcoded, not configurable)."""

from __future__ import annotations

import re

# Appended to a work order's filename once a worker owns it. Sibling workers
# never admit a path carrying this suffix.
CLAIM_SUFFIX = ".inProgress"

WORK_ORDER_PATTERN = re.compile(r"\d{4}(_\d{2}){4}\.txt")

# Rounding used in summary lines (matches the half-up, epsilon-adjusted convention)
SUMMARY_DECIMALS = 2
