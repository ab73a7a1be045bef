"""In-process FIFO of admitted work order paths."""

from __future__ import annotations

from collections import deque


class WorkQueue:
    """Unbounded, non-blocking FIFO of work order paths.

    Mutated only from the event-loop thread: the watch source hands its
    events over with ``loop.call_soon_threadsafe``. No deduplication is
    done; a path enqueued twice is dequeued twice.
    """

    def __init__(self) -> None:
        self._items: deque[str] = deque()

    def enqueue(self, path: str) -> None:
        """Append a path to the tail of the queue."""
        self._items.append(path)

    def dequeue(self) -> str | None:
        """Remove and return the head of the queue, or None if it is empty."""
        if not self._items:
            return None
        return self._items.popleft()

    def __len__(self) -> int:
        return len(self._items)

    def __bool__(self) -> bool:
        return bool(self._items)
