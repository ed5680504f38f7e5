"""
Shared enumerations used across the entire project.

Using Python enums (inheriting from str) means:
- They print and log as plain strings ("COMPLETED", not "SliceOutcome.COMPLETED")
- They double as argparse choices and settings values
- Typos become immediate errors instead of silent bugs
"""

import enum


class JobState(str, enum.Enum):
    QUEUED = "QUEUED"          # waiting in a ready queue, process suspended
    RUNNING = "RUNNING"        # resumed by the dispatcher, holding the CPU
    PREEMPTED = "PREEMPTED"    # quantum expired, paused, about to be re-queued
    COMPLETED = "COMPLETED"    # process exit observed, handle retired


class SliceOutcome(str, enum.Enum):
    COMPLETED = "COMPLETED"    # the job exited during its slice
    PREEMPTED = "PREEMPTED"    # the quantum elapsed first


class SchedulingPolicy(str, enum.Enum):
    FIFO = "fifo"              # First In First Out — run to completion in arrival order
    ROUND_ROBIN = "rr"         # Round Robin — fixed quantum, tail re-insert on preemption
    MLFQ = "mlfq"              # Multi-Level Feedback Queue — demote on preemption
    SJF = "sjf"                # Shortest Job First — sorted by burst length, run to completion
