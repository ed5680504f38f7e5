"""
Multi-Level Feedback Queue (MLFQ) structure.

An ordered list of FIFO tiers, tier 0 = highest priority:

    tier 0  [ new jobs .............. ]   ← every job starts here
    tier 1  [ preempted once ........ ]
    ...
    tier N  [ preempted N+ times .... ]   ← lowest tier cycles Round Robin style

Rules:
- The dispatcher always takes the head of the highest non-empty tier.
- A job whose quantum expires is demoted exactly one tier.
- A job already in the lowest tier goes to the back of that same tier.
- Jobs are never promoted (no aging).

Two tiers is the classic setup, but add_tier() extends the structure to
any depth without touching the dispatcher.
"""

from typing import Optional

from models.job import JobHandle
from scheduler.base import AbstractReadyQueue, EmptyQueueError, SchedulerError
from scheduler.fifo import FIFOQueue


class MultiLevelQueue(AbstractReadyQueue):

    preemptive = True

    def __init__(self, tiers: int = 2):
        if tiers < 1:
            raise ValueError(f"MLFQ needs at least one tier, got {tiers}")
        self._tiers: list[FIFOQueue] = []
        for _ in range(tiers):
            self.add_tier()

    def add_tier(self) -> int:
        """Append a new, empty tier at the lowest priority. Returns its index."""
        self._tiers.append(FIFOQueue())
        return len(self._tiers) - 1

    @property
    def tier_count(self) -> int:
        return len(self._tiers)

    def tier(self, index: int) -> FIFOQueue:
        return self._tiers[index]

    def select_tier(self) -> Optional[int]:
        """Index of the highest-priority non-empty tier, or None if every tier is empty."""
        for index, tier in enumerate(self._tiers):
            if not tier.is_empty():
                return index
        return None

    def insert(self, job: JobHandle) -> None:
        """New jobs always enter at the top tier."""
        job.tier = 0
        self._tiers[0].insert(job)

    def peek_front(self) -> Optional[JobHandle]:
        index = self.select_tier()
        return None if index is None else self._tiers[index].peek_front()

    def remove_front(self) -> JobHandle:
        index = self.select_tier()
        if index is None:
            raise EmptyQueueError("remove_front() on empty mlfq structure")
        return self._tiers[index].remove_front()

    def demote(self, job: JobHandle) -> None:
        """
        Move `job` from the front of its tier to the tail of the next lower tier.

        In the lowest tier there is nowhere to go, so the job is re-inserted
        at the tail of the same tier.
        """
        current = self._tiers[job.tier]
        if current.peek_front() is not job:
            raise SchedulerError(f"demote() expects {job!r} at the head of tier {job.tier}")
        current.remove_front()
        job.tier = min(job.tier + 1, len(self._tiers) - 1)
        self._tiers[job.tier].insert(job)

    def preempt(self, job: JobHandle) -> None:
        self.demote(job)

    def size(self) -> int:
        return sum(tier.size() for tier in self._tiers)

    @property
    def policy_name(self) -> str:
        return "mlfq"
