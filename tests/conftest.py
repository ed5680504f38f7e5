"""
Shared test fixtures.

These replace real child processes with a lightweight in-memory alternative:
- OS processes + signals → FakeCPU, a virtual clock that plays both the
  ProcessController (resume/pause) and the CompletionMonitor
  (wait_for_exit/has_exited/exit_code) roles for the SchedulerEngine

This means dispatcher tests:
- Run without forking anything
- Run in microseconds (waiting just advances a counter)
- Are deterministic: a job needing 120 units with a quantum of 50 is
  preempted exactly twice, every time

Time units are whatever the test picks (milliseconds, by convention).
"""

import itertools
from typing import Optional

import pytest

from models.job import JobHandle


class FakeCPU:
    """
    One simulated CPU with a virtual clock.

    Each spawned job needs `run_time` units of CPU. Only the resumed job
    consumes time; everything else is suspended.
    """

    def __init__(self):
        self.clock = 0
        self.running: Optional[int] = None
        self.resumes: list[str] = []
        self._remaining: dict[int, int] = {}
        self._pids = itertools.count(1000)

    def spawn(self, name: str, run_time: int, burst_length: Optional[int] = None) -> JobHandle:
        job = JobHandle(pid=next(self._pids), name=name, burst_length=burst_length)
        self._remaining[job.pid] = run_time
        return job

    # ── controller role ─────────────────────────────────────────
    def resume(self, job: JobHandle) -> None:
        assert self.running is None, "two jobs resumed at once"
        assert self._remaining[job.pid] > 0, f"resumed exited job {job.name}"
        self.running = job.pid
        self.resumes.append(job.name)

    def pause(self, job: JobHandle) -> None:
        assert self.running == job.pid, f"paused {job.name} which is not running"
        self.running = None

    # ── monitor role ────────────────────────────────────────────
    def has_exited(self, job: JobHandle) -> bool:
        return self._remaining[job.pid] <= 0

    def exit_code(self, job: JobHandle) -> Optional[int]:
        return 0 if self.has_exited(job) else None

    def wait_for_exit(self, job: JobHandle, timeout: Optional[int]) -> bool:
        if self.has_exited(job):
            return True
        if self.running != job.pid:
            self.clock += timeout or 0
            return False

        remaining = self._remaining[job.pid]
        if timeout is None or remaining <= timeout:
            self.clock += remaining
            self._remaining[job.pid] = 0
            self.running = None
            return True

        self.clock += timeout
        self._remaining[job.pid] -= timeout
        return False


@pytest.fixture
def cpu() -> FakeCPU:
    return FakeCPU()
