"""Unit tests for the rename-based claim protocol.

Tests cover:
1. FileSystemClaimer against a real temporary directory
2. The same race replayed deterministically with in-memory claimers
"""

from __future__ import annotations

import logging
import os
from collections.abc import Callable
from pathlib import Path
from unittest.mock import patch

import pytest

from spool_worker.core.claim import ClaimResult, FileSystemClaimer, claimed_path
from spool_worker.core.constants import CLAIM_SUFFIX


@pytest.fixture
def claimer() -> FileSystemClaimer:
    return FileSystemClaimer()


# =============================================================================
# 1. File system claimer
# =============================================================================


@pytest.mark.unit
class TestFileSystemClaimer:
    def test_claimed_path_appends_suffix(self) -> None:
        assert claimed_path("/spool/2024_01_01_00_00.txt") == (
            "/spool/2024_01_01_00_00.txt" + CLAIM_SUFFIX
        )
        assert CLAIM_SUFFIX == ".inProgress"

    def test_nonexistent_path_fails(self, claimer: FileSystemClaimer, temp_storage: Path) -> None:
        result = claimer.claim(str(temp_storage / "2024_01_01_00_00.txt"))
        assert result is ClaimResult.FAILED

    def test_nonexistent_path_logged_at_debug_only(
        self,
        claimer: FileSystemClaimer,
        temp_storage: Path,
        caplog: pytest.LogCaptureFixture,
    ) -> None:
        with caplog.at_level(logging.DEBUG, logger="spool_worker.core.claim"):
            claimer.claim(str(temp_storage / "missing.txt"))
        assert caplog.records
        assert all(r.levelno == logging.DEBUG for r in caplog.records)

    def test_empty_file_deferred_and_untouched(
        self,
        claimer: FileSystemClaimer,
        write_work_order: Callable[..., Path],
    ) -> None:
        path = write_work_order(content="")
        assert claimer.claim(str(path)) is ClaimResult.DEFERRED
        assert path.exists()
        assert not Path(claimed_path(str(path))).exists()

    def test_nonempty_file_renamed(
        self,
        claimer: FileSystemClaimer,
        write_work_order: Callable[..., Path],
    ) -> None:
        path = write_work_order(content="0.5")
        assert claimer.claim(str(path)) is ClaimResult.CLAIMED
        assert not path.exists()
        claimed = Path(claimed_path(str(path)))
        assert claimed.exists()
        assert claimed.read_text(encoding="utf-8") == "0.5"

    def test_second_claim_fails(
        self,
        write_work_order: Callable[..., Path],
    ) -> None:
        """Two workers on one path: only the first rename wins."""
        path = str(write_work_order(content="1"))
        first, second = FileSystemClaimer(), FileSystemClaimer()
        assert first.claim(path) is ClaimResult.CLAIMED
        assert second.claim(path) is ClaimResult.FAILED

    def test_rename_error_fails_without_raising(
        self,
        claimer: FileSystemClaimer,
        write_work_order: Callable[..., Path],
    ) -> None:
        """A rename lost between stat and rename reports FAILED."""
        path = write_work_order(content="1")
        with patch("spool_worker.core.claim.os.rename", side_effect=FileNotFoundError(2, "gone")):
            assert claimer.claim(str(path)) is ClaimResult.FAILED
        assert path.exists()

    def test_permission_error_on_stat_fails(
        self,
        claimer: FileSystemClaimer,
        write_work_order: Callable[..., Path],
    ) -> None:
        path = write_work_order(content="1")
        with patch("spool_worker.core.claim.os.stat", side_effect=PermissionError(13, "denied")):
            assert claimer.claim(str(path)) is ClaimResult.FAILED

    def test_deferred_file_claimable_once_written(
        self,
        claimer: FileSystemClaimer,
        write_work_order: Callable[..., Path],
    ) -> None:
        path = write_work_order(content="")
        assert claimer.claim(str(path)) is ClaimResult.DEFERRED
        path.write_text("2", encoding="utf-8")
        assert claimer.claim(str(path)) is ClaimResult.CLAIMED
        assert os.path.exists(claimed_path(str(path)))


# =============================================================================
# 2. Deterministic race with in-memory claimers
# =============================================================================


@pytest.mark.unit
class TestInMemoryRace:
    def test_exactly_one_sibling_wins(self, spool, make_claimer) -> None:
        spool.add("2024_01_01_00_00.txt", "1")
        workers = [make_claimer() for _ in range(4)]
        results = [w.claim("2024_01_01_00_00.txt") for w in workers]
        assert results.count(ClaimResult.CLAIMED) == 1
        assert results.count(ClaimResult.FAILED) == 3
        assert claimed_path("2024_01_01_00_00.txt") in spool.files

    def test_empty_file_deferred_for_everyone(self, spool, make_claimer) -> None:
        spool.add("2024_01_01_00_00.txt", "")
        a, b = make_claimer(), make_claimer()
        assert a.claim("2024_01_01_00_00.txt") is ClaimResult.DEFERRED
        assert b.claim("2024_01_01_00_00.txt") is ClaimResult.DEFERRED
        assert "2024_01_01_00_00.txt" in spool.files
