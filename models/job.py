"""
Job handle — the scheduler's view of one managed OS process.

Key design decisions:
- The process is located by its pid, never by an owned Popen object:
  queues hold handles, the ProcessController and CompletionMonitor hold the
  processes. Removing a handle from a queue transfers nothing.
- burst_length is only meaningful to SJF, tier only to MLFQ. Every other
  policy leaves them at their defaults.
- The counters are bookkeeping for the final report, not scheduling inputs.
"""

from dataclasses import dataclass
from typing import Optional

from models.enums import JobState


@dataclass(eq=False)
class JobHandle:
    """
    One schedulable job.

    Identity semantics (eq=False): two handles are the same job only if they
    are the same object, so a handle can never be confused with another
    job that happens to share a name.
    """
    pid: int
    name: str
    burst_length: Optional[int] = None  # used by SJF only
    tier: int = 0                       # used by MLFQ only, 0 = highest
    state: JobState = JobState.QUEUED
    dispatch_count: int = 0
    preempt_count: int = 0

    def __repr__(self) -> str:
        return f"<JobHandle {self.pid} [{self.name}] {self.state.value}>"
