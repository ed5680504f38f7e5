#!/usr/bin/env python3
"""
Sample child program for demos — prints its own name N times.

This is the most useful job for trying the scheduler because:
- You control how long it runs (N iterations × interval)
- Its output interleaves visibly under RR / MLFQ and does not under FIFO / SJF

N comes from the COUNTER_ITERATIONS env var, or else from the burst length
encoded in the program's name, so symlinks named p2, p5, p8 to this file
make a ready-made SJF workload:

    ln -s jobs/counter.py p5
    procsched sjf p5 p2 p8

On SIGUSR1 it stops itself, so it also works with PAUSE_SIGNAL=SIGUSR1.
In that mode the launcher sets PROCSCHED_SELF_STOP and waits for the child
to stop on its own, which it does right after installing the handler.

Runs as a standalone script (often through a symlink, with jobs/ as
sys.path[0]), so it only imports the standard library.
"""

import os
import re
import signal
import sys
import time
from typing import Optional, TextIO

DEFAULT_ITERATIONS = 5
DEFAULT_INTERVAL = 0.1  # seconds between lines

# Must match worker.process.SELF_STOP_ENV
SELF_STOP_ENV = "PROCSCHED_SELF_STOP"

_LEADING_DIGITS = re.compile(r"\d+")


def _stop_self(signum, frame) -> None:
    os.kill(os.getpid(), signal.SIGSTOP)


def iterations_for(name: str, default: int = DEFAULT_ITERATIONS) -> int:
    """Burst length from a name like p5 or ./j12, else `default`."""
    match = _LEADING_DIGITS.match(os.path.basename(name)[1:])
    if match is None:
        return default
    return int(match.group()) or default


def run(name: str, iterations: int, interval: float, out: TextIO = sys.stdout) -> int:
    for i in range(1, iterations + 1):
        print(f"{name}: {i} of {iterations}", file=out, flush=True)
        time.sleep(interval)
    return iterations


def main(argv: Optional[list[str]] = None) -> int:
    signal.signal(signal.SIGUSR1, _stop_self)
    if os.environ.get(SELF_STOP_ENV) == "1":
        _stop_self(signal.SIGUSR1, None)

    argv = sys.argv if argv is None else argv
    name = os.path.basename(argv[0])
    iterations = int(os.environ.get("COUNTER_ITERATIONS", "0")) or iterations_for(name)
    interval = float(os.environ.get("COUNTER_INTERVAL", DEFAULT_INTERVAL))
    run(name, iterations, interval)
    return 0


if __name__ == "__main__":
    sys.exit(main())
