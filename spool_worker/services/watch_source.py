"""Directory watch source feeding the work queue.

Built on watchdog. The observer runs in its own thread, so events are handed
to the event loop with ``call_soon_threadsafe`` and the admission filter and
the queue only ever run on the loop thread.

Files already in the directory at startup are delivered too: the observer is
started first and the directory is scanned afterwards, so a file landing in
between may be delivered twice (the second claim simply fails).
"""

from __future__ import annotations

import asyncio
import logging
import os
from collections.abc import Callable
from pathlib import Path
from typing import Any

from watchdog.events import FileSystemEvent, FileSystemEventHandler
from watchdog.observers import Observer

from spool_worker.core.admission import is_work_order

logger = logging.getLogger(__name__)


class WorkOrderEventHandler(FileSystemEventHandler):
    """Forwards the path of every file that appears in the watched tree.

    Files appear either by being created in place or by being moved in
    (producers that write to a temp name and rename).
    """

    def __init__(self, deliver: Callable[[str], Any]) -> None:
        super().__init__()
        self._deliver = deliver

    def on_created(self, event: FileSystemEvent) -> None:
        if event.is_directory:
            return
        self._deliver(os.fsdecode(event.src_path))

    def on_moved(self, event: FileSystemEvent) -> None:
        if event.is_directory:
            return
        self._deliver(os.fsdecode(event.dest_path))


class DirectoryWatcher:
    """Watches a directory and passes admitted work orders to a callback."""

    def __init__(
        self,
        directory: Path,
        on_work_order: Callable[[str], None],
        recursive: bool = True,
        observer_factory: Callable[[], Any] = Observer,
    ) -> None:
        """Initialize the watcher.

        Args:
            directory: Directory to watch.
            on_work_order: Called on the loop thread with each admitted path.
            recursive: Also watch subdirectories.
            observer_factory: Builds the watchdog observer (overridable in tests).
        """
        self._directory = directory
        self._on_work_order = on_work_order
        self._recursive = recursive
        self._observer_factory = observer_factory
        self._observer: Any = None
        self._files_seen = 0
        self._files_admitted = 0

    @property
    def directory(self) -> Path:
        return self._directory

    def admit(self, path: str) -> bool:
        """Run the admission filter and enqueue matching paths.

        Args:
            path: Path of a file that appeared.

        Returns:
            True if the path was handed to the callback.
        """
        self._files_seen += 1
        logger.debug("Found a new file %s", path)
        if not is_work_order(path):
            return False
        logger.debug("Found matched file %s. Adding to queue.", path)
        self._files_admitted += 1
        self._on_work_order(path)
        return True

    def scan(self) -> int:
        """Deliver every file already present in the directory.

        Returns:
            Number of files admitted.
        """
        entries = self._directory.rglob("*") if self._recursive else self._directory.iterdir()
        admitted = 0
        for entry in sorted(entries):
            try:
                if not entry.is_file():
                    continue
            except OSError:
                continue
            if self.admit(str(entry)):
                admitted += 1
        return admitted

    def start(self, loop: asyncio.AbstractEventLoop) -> None:
        """Start the observer thread, then scan existing files.

        Must be called on the loop thread.

        Args:
            loop: Event loop that owns the work queue.
        """
        if self._observer is not None:
            logger.debug("Directory watcher already running")
            return

        def deliver(path: str) -> None:
            loop.call_soon_threadsafe(self.admit, path)

        handler = WorkOrderEventHandler(deliver)
        observer = self._observer_factory()
        observer.schedule(handler, str(self._directory), recursive=self._recursive)
        observer.start()
        self._observer = observer
        logger.info("Watching %s (recursive=%s)", self._directory, self._recursive)

        existing = self.scan()
        if existing:
            logger.info("Found %d existing work order(s)", existing)

    def stop(self, timeout: float = 5.0) -> None:
        """Stop the observer thread.

        Args:
            timeout: Maximum seconds to wait for the observer to exit.
        """
        if self._observer is None:
            return
        self._observer.stop()
        self._observer.join(timeout=timeout)
        if self._observer.is_alive():
            logger.warning("Directory watcher did not stop within timeout")
        self._observer = None

    def get_stats(self) -> dict[str, Any]:
        """Get watcher statistics.

        Returns:
            Dictionary with seen/admitted counters.
        """
        return {
            "files_seen": self._files_seen,
            "files_admitted": self._files_admitted,
            "watching": self._observer is not None,
        }
