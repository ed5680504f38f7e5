"""
Process controller — the dispatcher's three signals.

    suspend  SIGSTOP                 right after launch, nothing runs yet
    resume   SIGCONT                 the job gets the (simulated) CPU
    pause    settings.PAUSE_SIGNAL   the job's quantum expired

SIGSTOP cannot be caught, so it works on any program. PAUSE_SIGNAL can be
set to SIGUSR1 for cooperative children that stop themselves when they
receive it (jobs/counter.py does). In that mode:
- the child is launched with SELF_STOP_ENV=1 and stops itself once its
  handler is installed; hold() waits for that instead of sending SIGSTOP
- pause() waits until the child has actually stopped, so a SIGCONT for the
  next slice can never overtake a SIGUSR1 that is still being handled

"Stopped" is read with waitid(WNOWAIT): the stop or exit is observed but
left in place, so the exit-watcher thread still reaps the child.

Signalling a child that already exited is harmless: Popen.send_signal()
checks the return code first and ignores a pid that is already gone.
"""

import logging
import os
import signal
import subprocess
import time
from typing import Optional

from config.settings import settings
from models.job import JobHandle

logger = logging.getLogger(__name__)

SELF_STOP_ENV = "PROCSCHED_SELF_STOP"

_STOP_POLL_INTERVAL = 0.001  # seconds


class ProcessController:

    def __init__(
        self,
        pause_signal: Optional[signal.Signals] = None,
        stop_timeout: Optional[float] = None,
        reap_timeout: Optional[float] = None,
    ):
        self._processes: dict[int, subprocess.Popen] = {}
        self._pause_signal = pause_signal or settings.pause_signal
        self._stop_timeout = (
            stop_timeout if stop_timeout is not None else settings.stop_timeout
        )
        self._reap_timeout = (
            reap_timeout if reap_timeout is not None else settings.reap_timeout
        )

    @property
    def cooperative(self) -> bool:
        """True when children pause themselves on a catchable signal."""
        return self._pause_signal != signal.SIGSTOP

    def child_env(self) -> Optional[dict[str, str]]:
        """Environment for a new child, or None to inherit ours unchanged."""
        if not self.cooperative:
            return None
        return {**os.environ, SELF_STOP_ENV: "1"}

    def register(self, job: JobHandle, process: subprocess.Popen) -> None:
        self._processes[job.pid] = process

    def hold(self, job: JobHandle) -> None:
        """Make sure a freshly launched job is stopped before scheduling starts."""
        if not self.cooperative:
            self.suspend(job)
            return
        if not self.wait_stopped(job, self._stop_timeout):
            logger.warning(
                f"{job.name} (pid {job.pid}) did not stop itself within "
                f"{self._stop_timeout}s, suspending it with SIGSTOP"
            )
            self.suspend(job)

    def suspend(self, job: JobHandle) -> None:
        self._send(job, signal.SIGSTOP)

    def resume(self, job: JobHandle) -> None:
        self._send(job, signal.SIGCONT)

    def pause(self, job: JobHandle) -> None:
        self._send(job, self._pause_signal)
        if self.cooperative and not self.wait_stopped(job, self._stop_timeout):
            logger.warning(
                f"{job.name} (pid {job.pid}) ignored {self._pause_signal.name}, "
                f"stopping it with SIGSTOP"
            )
            self.suspend(job)

    def wait_stopped(self, job: JobHandle, timeout: float) -> bool:
        """
        Block until `job` is stopped or has exited.

        Returns False if neither happened within `timeout` seconds.
        """
        deadline = time.monotonic() + timeout
        flags = os.WSTOPPED | os.WEXITED | os.WNOHANG | os.WNOWAIT
        while True:
            try:
                if os.waitid(os.P_PID, job.pid, flags) is not None:
                    return True
            except ChildProcessError:
                return True  # already reaped by its exit watcher
            if time.monotonic() >= deadline:
                return False
            time.sleep(_STOP_POLL_INTERVAL)

    def _send(self, job: JobHandle, sig: signal.Signals) -> None:
        logger.debug(f"Sending {sig.name} to {job.name} (pid {job.pid})")
        self._processes[job.pid].send_signal(sig)

    def terminate_all(self) -> None:
        """Kill and reap every child still alive. Used only when a run aborts."""
        for pid, process in self._processes.items():
            if process.returncode is not None:
                continue
            logger.warning(f"Killing unfinished child {pid}")
            process.kill()
            try:
                process.wait(timeout=self._reap_timeout)
            except subprocess.TimeoutExpired:
                logger.error(f"Child {pid} still not reaped {self._reap_timeout}s after SIGKILL")
