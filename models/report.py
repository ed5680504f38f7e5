"""
Dispatch report — what the engine hands back after a run.

Every dispatch cycle (one resume of one job) produces one DispatchRecord.
The report is a plain in-memory value: it is printed by the CLI and
asserted on by the tests, never persisted.
"""

from dataclasses import dataclass, field

from models.enums import SchedulingPolicy, SliceOutcome


@dataclass(frozen=True)
class DispatchRecord:
    cycle: int                # 1-based dispatch counter
    pid: int
    name: str
    tier: int                 # tier the job was dispatched from (0 outside MLFQ)
    outcome: SliceOutcome


@dataclass
class ScheduleReport:
    policy: SchedulingPolicy
    records: list[DispatchRecord] = field(default_factory=list)
    completion_order: list[str] = field(default_factory=list)

    @property
    def cycles(self) -> int:
        return len(self.records)

    def preemptions_for(self, pid: int) -> int:
        return sum(
            1 for r in self.records
            if r.pid == pid and r.outcome is SliceOutcome.PREEMPTED
        )

    def dispatch_order(self) -> list[str]:
        """Job names in the order they were resumed, one entry per cycle."""
        return [r.name for r in self.records]
