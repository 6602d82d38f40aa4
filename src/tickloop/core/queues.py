# src/tickloop/core/queues.py

"""
The two FIFO containers behind the event loop.

PendingQueue holds submitted events and is only touched by the driver.
CompletedQueue is appended to by async tasks on the engine thread and drained
by the driver, so every operation goes through queue.Queue's internal lock.
Neither queue is bounded and neither dequeue blocks.
"""

from __future__ import annotations

import queue
import threading
from collections import deque

from .models import Event, EventResult


class PendingQueue:
    def __init__(self) -> None:
        self._items: deque[Event] = deque()
        self._lock = threading.Lock()

    def enqueue(self, event: Event) -> None:
        with self._lock:
            self._items.append(event)

    def dequeue(self) -> Event | None:
        """Oldest submitted event, or None when empty."""
        with self._lock:
            if not self._items:
                return None
            return self._items.popleft()

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)

    def __bool__(self) -> bool:
        return len(self) > 0


class CompletedQueue:
    def __init__(self) -> None:
        self._queue: "queue.Queue[EventResult]" = queue.Queue()

    def enqueue(self, result: EventResult) -> None:
        self._queue.put_nowait(result)

    def dequeue(self) -> EventResult | None:
        """Earliest completed result, or None when nothing has finished yet."""
        try:
            return self._queue.get_nowait()
        except queue.Empty:
            return None

    def __len__(self) -> int:
        return self._queue.qsize()

    def __bool__(self) -> bool:
        return len(self) > 0
