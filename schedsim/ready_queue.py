"""
Ready queue for the non-preemptive shortest-job policies.

An array-backed binary min-heap over ``(key, sequence, process)`` entries.
The sequence number is a monotonic insertion counter, so two processes with
the same key come out in the order they were pushed. Both SJF variants push
in arrival order, which makes ties resolve to the earliest arrival.
"""

from __future__ import annotations

from typing import List, Tuple

from .errors import EmptyQueueError
from .models import Process

_Entry = Tuple[int, int, Process]


class ReadyQueue:

    def __init__(self) -> None:
        self._heap: List[_Entry] = []
        self._counter = 0

    def __len__(self) -> int:
        return len(self._heap)

    def __bool__(self) -> bool:
        return bool(self._heap)

    def push(self, process: Process, key: int) -> None:
        self._heap.append((key, self._counter, process))
        self._counter += 1
        self._sift_up(len(self._heap) - 1)

    def pop(self) -> Process:
        """Remove and return the process with the smallest key."""
        if not self._heap:
            raise EmptyQueueError("pop from an empty ready queue")

        last = self._heap.pop()
        if not self._heap:
            return last[2]

        top = self._heap[0]
        self._heap[0] = last
        self._sift_down(0)
        return top[2]

    def peek(self) -> Process:
        if not self._heap:
            raise EmptyQueueError("peek at an empty ready queue")
        return self._heap[0][2]

    def _less(self, i: int, j: int) -> bool:
        a, b = self._heap[i], self._heap[j]
        return (a[0], a[1]) < (b[0], b[1])

    def _sift_up(self, idx: int) -> None:
        while idx > 0:
            parent = (idx - 1) // 2
            if not self._less(idx, parent):
                break
            self._heap[idx], self._heap[parent] = self._heap[parent], self._heap[idx]
            idx = parent

    def _sift_down(self, idx: int) -> None:
        size = len(self._heap)
        while True:
            smallest = idx
            left = 2 * idx + 1
            right = left + 1
            if left < size and self._less(left, smallest):
                smallest = left
            if right < size and self._less(right, smallest):
                smallest = right
            if smallest == idx:
                return
            self._heap[idx], self._heap[smallest] = self._heap[smallest], self._heap[idx]
            idx = smallest
