"""
Shortest Job First (SJF) ready queue.

Jobs with the smallest burst length run first, each to completion.
Minimizes average waiting time when the burst estimates are accurate.

Data structure: min-heap (via Python's heapq module)
- insert:       heappush → O(log n)
- remove_front: heappop  → O(log n)
- peek_front:   heap[0]  → O(1)

The heap stores tuples: (burst_length, counter, job)
- burst_length: the sorting key (shortest first)
- counter: tiebreaker. Equal bursts come out in arrival order, so a new
  arrival goes AFTER existing entries of the same length. Without it,
  Python would also try to compare JobHandle objects, which would crash.

No preemption: once a job starts it runs to completion, so the sort order
alone decides execution order.
"""

import heapq
from typing import Optional

from models.job import JobHandle
from scheduler.base import AbstractReadyQueue, EmptyQueueError


class SJFQueue(AbstractReadyQueue):

    def __init__(self):
        self._heap: list[tuple[int, int, JobHandle]] = []
        self._counter: int = 0  # monotonic tiebreaker for heap stability

    def insert(self, job: JobHandle, burst_length: Optional[int] = None) -> None:
        """
        Insert `job` sorted by burst length.

        `burst_length` overrides job.burst_length; one of the two must be set.
        """
        if burst_length is None:
            burst_length = job.burst_length
        if burst_length is None:
            raise ValueError(f"{job!r} has no burst length, SJF cannot order it")
        job.burst_length = burst_length
        heapq.heappush(self._heap, (burst_length, self._counter, job))
        self._counter += 1

    def peek_front(self) -> Optional[JobHandle]:
        return self._heap[0][2] if self._heap else None

    def remove_front(self) -> JobHandle:
        if not self._heap:
            raise EmptyQueueError(f"remove_front() on empty {self.policy_name} queue")
        _, _, job = heapq.heappop(self._heap)
        return job

    def size(self) -> int:
        return len(self._heap)

    @property
    def policy_name(self) -> str:
        return "sjf"
