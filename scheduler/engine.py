"""
Scheduler Engine — the dispatcher.

One engine drives every policy. The policy lives in the ready queue
(see scheduler/base.py); the engine only runs this loop:

    while the ready queue is not empty:
        1. Look at the head job (peek_front)
        2. Resume it (SIGCONT)
        3. Wait:
           - non-preemptive queue (FIFO, SJF): until the process exits
           - preemptive queue (RR, MLFQ): until it exits OR the quantum elapses
        4. Exited   → remove it for good
           Quantum  → pause it, hand it back to the queue's preempt() hook
                      (RR: back of the line, MLFQ: one tier down)

         Ready queue              Engine                   OS
    ┌──────────────────┐   ┌───────────────────┐   ┌──────────────┐
    │ FIFO/SJF/RR/MLFQ │──>│ resume → wait →   │──>│ SIGCONT      │
    │                  │<──│ remove / preempt  │<──│ exit / timer │
    └──────────────────┘   └───────────────────┘   └──────────────┘

Per-job state machine:
    QUEUED → RUNNING → COMPLETED
                     → PREEMPTED → QUEUED      (RR and MLFQ only)

Only one job is ever resumed at a time: the engine pauses (or sees the
exit of) the running job before it looks at the queue again.

The engine never touches processes directly. It talks to a controller
(resume/pause) and a monitor (wait_for_exit/has_exited/exit_code), so the
tests can drive it with a virtual clock instead of real children.
"""

import logging
from typing import Optional, Protocol

from config.settings import settings
from models.enums import JobState, SchedulingPolicy, SliceOutcome
from models.job import JobHandle
from models.report import DispatchRecord, ScheduleReport
from scheduler.base import AbstractReadyQueue, SchedulerError

logger = logging.getLogger(__name__)


class JobController(Protocol):
    def resume(self, job: JobHandle) -> None: ...

    def pause(self, job: JobHandle) -> None: ...


class ExitMonitor(Protocol):
    def wait_for_exit(self, job: JobHandle, timeout: Optional[float]) -> bool: ...

    def has_exited(self, job: JobHandle) -> bool: ...

    def exit_code(self, job: JobHandle) -> Optional[int]: ...


class SchedulerEngine:
    """
    Runs the dispatch loop to natural completion of every job.

    There is no stop(): the loop ends exactly when the ready queue
    (every tier, for MLFQ) is empty.
    """

    def __init__(
        self,
        ready_queue: AbstractReadyQueue,
        controller: JobController,
        monitor: ExitMonitor,
        quantum: Optional[float] = None,
        settle_delay: Optional[float] = None,
    ):
        self._queue = ready_queue
        self._controller = controller
        self._monitor = monitor
        self._policy = SchedulingPolicy(ready_queue.policy_name)
        self._quantum = quantum if quantum is not None else settings.default_quantum
        self._settle_delay = (
            settle_delay if settle_delay is not None else settings.settle_delay
        )
        if ready_queue.preemptive and self._quantum <= 0:
            raise ValueError(f"Time quantum must be positive, got {self._quantum}")

    @property
    def quantum(self) -> Optional[float]:
        """The time slice in seconds, or None for run-to-completion policies."""
        return self._quantum if self._queue.preemptive else None

    def run(self) -> ScheduleReport:
        report = ScheduleReport(policy=self._policy)
        logger.info(
            f"Program scheduling beginning: policy={self._policy.value}, "
            f"jobs={self._queue.size()}"
        )

        while (job := self._queue.peek_front()) is not None:
            if self._monitor.has_exited(job):
                # Exit notice arrived after the job was paused and re-queued
                logger.debug(f"{job!r} exited while queued, retiring without resuming")
                self._retire(job, report)
                continue

            tier = job.tier
            outcome = self._dispatch(job)
            report.records.append(DispatchRecord(
                cycle=report.cycles + 1,
                pid=job.pid,
                name=job.name,
                tier=tier,
                outcome=outcome,
            ))

            if outcome is SliceOutcome.COMPLETED:
                self._retire(job, report)
            else:
                job.state = JobState.PREEMPTED
                job.preempt_count += 1
                self._queue.preempt(job)
                job.state = JobState.QUEUED
                logger.debug(f"{job!r} preempted, re-queued at tier {job.tier}")

        logger.info(f"Scheduling complete after {report.cycles} dispatch cycles")
        return report

    def _dispatch(self, job: JobHandle) -> SliceOutcome:
        """Resume `job` and block until it exits or its quantum elapses."""
        job.state = JobState.RUNNING
        job.dispatch_count += 1
        self._controller.resume(job)

        if not self._queue.preemptive:
            self._monitor.wait_for_exit(job, None)
            return SliceOutcome.COMPLETED

        if self._monitor.wait_for_exit(job, self._quantum):
            return SliceOutcome.COMPLETED

        self._controller.pause(job)
        # An exit right on the quantum boundary shows up here and counts as completion
        if self._monitor.wait_for_exit(job, self._settle_delay):
            return SliceOutcome.COMPLETED
        return SliceOutcome.PREEMPTED

    def _retire(self, job: JobHandle, report: ScheduleReport) -> None:
        removed = self._queue.remove_front()
        if removed is not job:
            raise SchedulerError(f"Expected {job!r} at the head, found {removed!r}")
        job.state = JobState.COMPLETED
        report.completion_order.append(job.name)
        logger.info(
            f"A child has completed: {job.name} (pid {job.pid}, "
            f"exit code {self._monitor.exit_code(job)})"
        )
