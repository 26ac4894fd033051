"""In-memory FIFO queue of events awaiting delivery."""

from __future__ import annotations

import threading
from dataclasses import dataclass, field

from .events import QueuedEvent


@dataclass
class EventQueue:
    """
    Ordered buffer of pending events.

    Producers append at the tail from any thread; the flusher reads and
    removes from the head. The queue is unbounded: nothing is ever dropped
    on append.
    """
    _items: list[QueuedEvent] = field(default_factory=list, init=False)
    _lock: threading.Lock = field(default_factory=threading.Lock, init=False)

    def append(self, item: QueuedEvent) -> None:
        """Add an event at the tail."""
        with self._lock:
            self._items.append(item)

    def peek(self, max_count: int) -> list[QueuedEvent]:
        """Return up to max_count events from the head, leaving them queued."""
        with self._lock:
            return self._items[:max(max_count, 0)]

    def remove(self, count: int) -> None:
        """Remove the first count events (all of them if fewer are queued)."""
        with self._lock:
            del self._items[:max(count, 0)]

    def snapshot_and_remove(self, max_count: int) -> list[QueuedEvent]:
        """Atomically take up to max_count events from the head."""
        with self._lock:
            n = max(max_count, 0)
            taken = self._items[:n]
            del self._items[:n]
            return taken

    def clear(self) -> int:
        """Drop every queued event; returns how many were dropped."""
        with self._lock:
            count = len(self._items)
            self._items.clear()
            return count

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)
