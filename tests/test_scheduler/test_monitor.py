"""
Tests for the CompletionMonitor.

Processes are replaced by _FakeProcess, whose wait() blocks on a
threading.Event, so each test decides exactly when a "child" exits.
The exit-watcher threads are real.
"""

import threading
import time

from models.job import JobHandle
from scheduler.monitor import CompletionMonitor


class _FakeProcess:
    def __init__(self, returncode: int = 0):
        self._exited = threading.Event()
        self._returncode = returncode

    def exit(self) -> None:
        self._exited.set()

    def wait(self) -> int:
        self._exited.wait()
        return self._returncode


def _watched(monitor: CompletionMonitor, pid: int, returncode: int = 0):
    job = JobHandle(pid=pid, name=f"job{pid}")
    process = _FakeProcess(returncode)
    monitor.watch(job, process)
    return job, process


def test_wait_times_out_when_job_keeps_running():
    monitor = CompletionMonitor()
    job, _ = _watched(monitor, 1)

    started = time.monotonic()
    assert monitor.wait_for_exit(job, 0.05) is False
    assert time.monotonic() - started >= 0.04
    assert monitor.has_exited(job) is False


def test_wait_returns_early_when_job_exits():
    monitor = CompletionMonitor()
    job, process = _watched(monitor, 1, returncode=3)

    threading.Timer(0.02, process.exit).start()

    started = time.monotonic()
    assert monitor.wait_for_exit(job, 5.0) is True
    assert time.monotonic() - started < 5.0
    assert monitor.exit_code(job) == 3


def test_exit_before_wait_starts_is_not_lost():
    """The notice sits in the channel until the dispatcher asks."""
    monitor = CompletionMonitor()
    job, process = _watched(monitor, 1)

    process.exit()
    time.sleep(0.05)  # let the watcher publish before anyone waits

    assert monitor.wait_for_exit(job, 0.0) is True


def test_exit_of_another_job_is_remembered_not_misattributed():
    monitor = CompletionMonitor()
    running, _ = _watched(monitor, 1)
    suspended, suspended_process = _watched(monitor, 2)

    suspended_process.exit()

    assert monitor.wait_for_exit(running, 0.2) is False
    assert monitor.has_exited(suspended) is True
    assert monitor.has_exited(running) is False


def test_wait_without_timeout_blocks_until_exit():
    monitor = CompletionMonitor(capacity=1)
    job, process = _watched(monitor, 1)

    threading.Timer(0.02, process.exit).start()

    assert monitor.wait_for_exit(job, None) is True


def test_exit_code_unknown_while_running():
    monitor = CompletionMonitor()
    job, _ = _watched(monitor, 1)
    assert monitor.exit_code(job) is None
