"""A fixed-capacity FIFO queue shared between producer and consumer threads."""

from __future__ import annotations

import threading
from collections import deque
from typing import Any


class BoundedQueue:
    """A first-in first-out queue holding at most ``size`` items.

    ``insert`` blocks while the queue is full and ``remove`` blocks while it
    is empty, so producers and consumers running in different threads pace
    each other.
    """

    def __init__(self, size: int) -> None:
        if size <= 0:
            raise ValueError(f"queue size must be a positive integer, got {size}")
        self.size = size
        self._items: deque[Any] = deque()
        self._lock = threading.Lock()
        self._not_empty = threading.Condition(self._lock)
        self._not_full = threading.Condition(self._lock)

    def __len__(self) -> int:
        return len(self._items)

    def insert(self, item: Any) -> None:
        """Append ``item``, waiting for free space if the queue is full."""
        with self._not_full:
            while len(self._items) == self.size:
                self._not_full.wait()
            self._items.append(item)
            if len(self._items) == 1:
                self._not_empty.notify_all()

    def remove(self) -> Any:
        """Take the oldest item, waiting for one if the queue is empty."""
        with self._not_empty:
            while not self._items:
                self._not_empty.wait()
            item = self._items.popleft()
            if len(self._items) == self.size - 1:
                self._not_full.notify_all()
            return item