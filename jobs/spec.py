"""
Pydantic model for a job to launch.

This is NOT the scheduler's handle (models/job.py). It is the validated
input the launcher consumes:
- JobSpec: a display name, the argv to exec, and the optional SJF burst

Validation happens before anything is spawned, so a bad burst length
never leaves half the jobs running.
"""

import os
import re
from typing import Optional

from pydantic import BaseModel, Field


class JobSpec(BaseModel):
    """One child program to launch and schedule."""

    name: str = Field(
        ...,  # ... means required, no default
        min_length=1,
        examples=["p5"],
    )
    command: list[str] = Field(
        ...,
        min_length=1,
        description="argv of the child; CLI jobs get only their own name",
    )
    burst_length: Optional[int] = Field(
        default=None,
        ge=0,
        description="Estimated run length (used by SJF scheduler)",
    )

    @classmethod
    def from_program(cls, program: str, burst_length: Optional[int] = None) -> "JobSpec":
        """
        Build the spec for a program named on the command line.

        A bare name that exists in the working directory runs from there
        (./p5), like exec with a relative path; anything else is left to PATH.
        """
        path = program
        if os.sep not in program and os.path.exists(program):
            path = os.path.join(os.curdir, program)
        return cls(name=program, command=[path], burst_length=burst_length)


_LEADING_DIGITS = re.compile(r"\d+")


def parse_burst_from_name(name: str) -> int:
    """
    Decode the burst length encoded in a program's own name.

    Convention: one leading letter, then the length: "p5" → 5, "./j12x" → 12.
    Raises ValueError if the name carries no length.
    """
    base = os.path.basename(name)
    match = _LEADING_DIGITS.match(base[1:])
    if match is None:
        raise ValueError(f"Cannot derive a burst length from program name '{name}'")
    return int(match.group())
