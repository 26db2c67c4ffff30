"""
RecognitionHistory: bounded FIFO of GestureEvents.

Written by the aggregator on the loop thread, read by the overlay and the
transcript builder from anywhere; readers always get an immutable tuple.
"""
from __future__ import annotations
import threading
from collections import deque
from typing import Deque, Iterator, Tuple

from domain.models import GestureEvent


class RecognitionHistory:
    """
    Parameters
    ----------
    capacity : int
        Maximum number of events kept; the oldest is evicted first.
    """

    def __init__(self, capacity: int = 150) -> None:
        self._capacity = capacity
        self._events: Deque[GestureEvent] = deque(maxlen=capacity)
        self._lock = threading.Lock()

    # ------------------------------------------------------------------
    def append(self, event: GestureEvent) -> None:
        with self._lock:
            self._events.append(event)

    def snapshot(self) -> Tuple[GestureEvent, ...]:
        with self._lock:
            return tuple(self._events)

    def clear(self) -> None:
        with self._lock:
            self._events.clear()

    @property
    def capacity(self) -> int:
        return self._capacity

    def __len__(self) -> int:
        with self._lock:
            return len(self._events)

    def __iter__(self) -> Iterator[GestureEvent]:
        return iter(self.snapshot())
