"""
First In First Out (FIFO) ready queue.

The simplest scheduling policy: jobs run in the order they were launched,
each one to completion before the next is resumed.

Data structure: collections.deque
- insert:       append to right  → O(1)
- remove_front: pop from left    → O(1)
- peek_front:   index 0          → O(1)

Round Robin and every MLFQ tier reuse this exact structure.
"""

from collections import deque
from typing import Iterator, Optional

from models.job import JobHandle
from scheduler.base import AbstractReadyQueue, EmptyQueueError


class FIFOQueue(AbstractReadyQueue):

    def __init__(self):
        self._queue: deque[JobHandle] = deque()

    def insert(self, job: JobHandle) -> None:
        self._queue.append(job)

    def peek_front(self) -> Optional[JobHandle]:
        return self._queue[0] if self._queue else None

    def remove_front(self) -> JobHandle:
        if not self._queue:
            raise EmptyQueueError(f"remove_front() on empty {self.policy_name} queue")
        return self._queue.popleft()

    def size(self) -> int:
        return len(self._queue)

    def __iter__(self) -> Iterator[JobHandle]:
        return iter(self._queue)

    @property
    def policy_name(self) -> str:
        return "fifo"
