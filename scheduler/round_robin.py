"""
Round Robin ready queue.

Each job gets a fixed time quantum. If the job exits within the quantum,
it is removed. If not, the dispatcher pauses it and it goes to the back
of the queue so the next job can run.

Data structure: deque (this class IS a FIFOQueue)
- insert:  append to right → O(1)
- requeue: pop left + append right → O(1)  ← the only difference from FIFO

Tradeoff: the quantum size controls fairness vs. switching overhead:
- Small quantum: every job makes progress often, lots of SIGSTOP/SIGCONT
- Large quantum: fewer switches, approaches FIFO behavior
"""

from models.job import JobHandle
from scheduler.base import SchedulerError
from scheduler.fifo import FIFOQueue


class RoundRobinQueue(FIFOQueue):

    preemptive = True

    def requeue(self, job: JobHandle) -> None:
        """
        Send the head job to the back of the line after its quantum expires.

        Preemption is remove-front-then-insert-at-tail of the SAME job,
        so `job` must be the current head.
        """
        if self.peek_front() is not job:
            raise SchedulerError(f"requeue() expects {job!r} at the head of the queue")
        self.insert(self.remove_front())

    def preempt(self, job: JobHandle) -> None:
        self.requeue(job)

    @property
    def policy_name(self) -> str:
        return "rr"
