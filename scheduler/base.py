"""
Abstract base class for all ready queues (Strategy pattern).

The SchedulerEngine only knows about AbstractReadyQueue. It calls
peek_front(), remove_front() and preempt() without caring whether the
queue underneath is FIFO, Round Robin, SJF or a multi-level structure.
The policy IS the queue: insertion order, selection order and what
happens on preemption all live here, the engine just drives the loop.

To add a new scheduling policy:
1. Create a new class that inherits AbstractReadyQueue
2. Implement the abstract methods (and preempt() if it is preemptive)
3. Register it in scheduler/registry.py

Errors raised here are contract violations, not runtime conditions:
the engine always checks peek_front() before removing, so an
EmptyQueueError means a programming bug and is fatal.
"""

from abc import ABC, abstractmethod
from typing import Optional

from models.job import JobHandle


class SchedulerError(Exception):
    """Base class for fatal scheduling errors."""


class EmptyQueueError(SchedulerError):
    """Raised when removing from an empty queue (caller should have checked)."""


class AbstractReadyQueue(ABC):
    """
    Interface that all ready queues implement.

    - insert: add a job
    - peek_front: look at the job that would run next, None if empty
    - remove_front: remove and return that job (raises if empty)
    - preempt: put a job whose quantum expired back where the policy wants it
    - size: how many jobs are queued
    """

    #: True if the engine should run jobs for a quantum instead of to completion
    preemptive: bool = False

    @abstractmethod
    def insert(self, job: JobHandle) -> None:
        """Add a job to this queue."""
        ...

    @abstractmethod
    def peek_front(self) -> Optional[JobHandle]:
        """View the next job without removing it. Returns None if empty."""
        ...

    @abstractmethod
    def remove_front(self) -> JobHandle:
        """Remove and return the next job. Raises EmptyQueueError if empty."""
        ...

    @abstractmethod
    def size(self) -> int:
        """Return the number of jobs currently queued."""
        ...

    def is_empty(self) -> bool:
        return self.size() == 0

    def preempt(self, job: JobHandle) -> None:
        """Re-queue `job` after its quantum expired. Only preemptive queues allow this."""
        raise SchedulerError(
            f"{self.policy_name} queue is not preemptive, cannot preempt {job!r}"
        )

    @property
    @abstractmethod
    def policy_name(self) -> str:
        """Unique name for this policy (e.g., 'fifo', 'sjf')."""
        ...
