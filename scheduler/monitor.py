"""
Completion monitor — tells the dispatcher whether a running job exited.

Architecture:

    exit-watcher thread (one per job)          dispatcher thread
    ┌──────────────────────────────┐        ┌─────────────────────────┐
    │ process.wait()  ← blocks     │  put   │ wait_for_exit(job, q)   │
    │ until the child exits        │──────> │  channel.get(timeout=q) │
    └──────────────────────────────┘ (pid)  └─────────────────────────┘

The channel (queue.Queue) is the ONLY piece of state shared between
threads. Watchers only ever put, the dispatcher only ever gets, so no
extra locking is needed.

Why this instead of a SIGCHLD handler setting a global flag?
- A notice that arrives before the dispatcher starts waiting (the window
  between SIGCONT and the sleep) just sits in the channel. Nothing is lost.
- Notices carry the pid, so an unexpected exit of a suspended job (killed
  from outside) is remembered instead of being blamed on the running job.
- "Quantum elapsed OR job exited" becomes a single channel.get(timeout=...).

Precedence when both happen around the same instant: the dispatcher
re-checks for an exit notice after the timer fires, and an exit observed
there always wins. A completed job must never be re-queued and resumed.
"""

import logging
import queue
import subprocess
import threading
import time
from typing import Optional

from models.job import JobHandle

logger = logging.getLogger(__name__)


class CompletionMonitor:

    def __init__(self, capacity: int = 0):
        # Each job produces exactly one notice, so capacity = job count never blocks a watcher
        self._channel: queue.Queue[tuple[int, int]] = queue.Queue(maxsize=capacity)
        self._exit_codes: dict[int, int] = {}

    def watch(self, job: JobHandle, process: subprocess.Popen) -> None:
        """Start a daemon thread that reports `job`'s exit on the channel."""
        watcher = threading.Thread(
            target=self._watch,
            args=(job.pid, process),
            name=f"exit-watcher-{job.pid}",
            daemon=True,
        )
        watcher.start()

    def _watch(self, pid: int, process: subprocess.Popen) -> None:
        # wait() does not return for stopped children, only on real exit
        returncode = process.wait()
        logger.debug(f"Process {pid} exited with code {returncode}")
        self._channel.put((pid, returncode))

    def _record(self, notice: tuple[int, int]) -> int:
        pid, returncode = notice
        self._exit_codes[pid] = returncode
        return pid

    def _drain(self) -> None:
        while True:
            try:
                notice = self._channel.get_nowait()
            except queue.Empty:
                return
            self._record(notice)

    def has_exited(self, job: JobHandle) -> bool:
        """Non-blocking: has an exit notice for `job` been delivered?"""
        self._drain()
        return job.pid in self._exit_codes

    def exit_code(self, job: JobHandle) -> Optional[int]:
        return self._exit_codes.get(job.pid)

    def wait_for_exit(self, job: JobHandle, timeout: Optional[float]) -> bool:
        """
        Block until `job` exits or `timeout` seconds pass (None = forever).

        Returns True if the exit was observed. Notices for other jobs that
        arrive meanwhile are recorded and the wait continues.
        """
        if self.has_exited(job):
            return True

        deadline = None if timeout is None else time.monotonic() + timeout
        while True:
            remaining = None
            if deadline is not None:
                remaining = deadline - time.monotonic()
                if remaining <= 0:
                    # timer fired; a notice delivered in the same instant still wins
                    return self.has_exited(job)
            try:
                notice = self._channel.get(timeout=remaining)
            except queue.Empty:
                return self.has_exited(job)
            if self._record(notice) == job.pid:
                return True
