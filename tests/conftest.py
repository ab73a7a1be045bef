"""Pytest fixtures for spool worker tests."""

from __future__ import annotations

import tempfile
from collections.abc import Callable, Generator
from pathlib import Path

import pytest

from spool_worker.config import Settings, override_settings, reset_settings
from spool_worker.core.claim import ClaimResult, claimed_path

# ---------------------------------------------------------------------------
# Fakes
# ---------------------------------------------------------------------------


class RecordingDelay:
    """DelayPort that returns immediately and remembers what it was asked."""

    def __init__(self) -> None:
        self.calls: list[float] = []

    async def sleep(self, seconds: float) -> None:
        self.calls.append(seconds)

    @property
    def total(self) -> float:
        return sum(self.calls)


class InMemorySpool:
    """A shared, in-memory stand-in for the watched directory.

    Several InMemoryClaimer instances over one spool model sibling workers
    racing on the same files, without real file-system timing.
    """

    def __init__(self) -> None:
        self.files: dict[str, str] = {}

    def add(self, path: str, content: str = "1") -> str:
        self.files[path] = content
        return path


class InMemoryClaimer:
    """ClaimerPort over an InMemorySpool with the same rules as the real one."""

    def __init__(self, spool: InMemorySpool) -> None:
        self.spool = spool
        self.attempts: list[tuple[str, ClaimResult]] = []

    def claim(self, path: str) -> ClaimResult:
        result = self._claim(path)
        self.attempts.append((path, result))
        return result

    def _claim(self, path: str) -> ClaimResult:
        if path not in self.spool.files:
            return ClaimResult.FAILED
        if self.spool.files[path] == "":
            return ClaimResult.DEFERRED
        self.spool.files[claimed_path(path)] = self.spool.files.pop(path)
        return ClaimResult.CLAIMED


# ---------------------------------------------------------------------------
# Basic fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def temp_storage() -> Generator[Path, None, None]:
    """Provide a temporary directory to use as the watched spool."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def test_settings() -> Generator[Settings, None, None]:
    """Provide fast test settings: no jitter, no real waiting."""
    settings = Settings(
        seconds_per_unit=0.0,
        keep=5,
        max_jitter_seconds=0.0,
        log_level="DEBUG",
        worker_name="test-worker",
    )
    override_settings(settings)
    yield settings
    reset_settings()


@pytest.fixture
def recording_delay() -> RecordingDelay:
    return RecordingDelay()


@pytest.fixture
def spool() -> InMemorySpool:
    return InMemorySpool()


@pytest.fixture
def make_claimer(spool: InMemorySpool) -> Callable[[], InMemoryClaimer]:
    """Build claimers sharing one in-memory spool (one per simulated worker)."""

    def _make() -> InMemoryClaimer:
        return InMemoryClaimer(spool)

    return _make


@pytest.fixture
def write_work_order(temp_storage: Path) -> Callable[..., Path]:
    """Write a work order file into the temporary spool."""

    def _write(name: str = "2024_01_01_00_00.txt", content: str = "0.01") -> Path:
        path = temp_storage / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        return path

    return _write
