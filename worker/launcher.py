"""
Job launcher — spawns the children and fills the initial ready queue.

For each JobSpec, in arrival (command-line) order:

    1. subprocess.Popen(spec.command)     → the child starts running
    2. register with the controller       → so it can be resumed/paused
    3. hold                               → SIGSTOP, or in SIGUSR1 mode wait
                                            for the child to stop itself
    4. watch with the completion monitor  → exit-watcher thread starts
    5. insert into the ready queue

Launch failures (missing program, not executable) raise OSError from
Popen. By default the job is logged and left out of scheduling; with
LAUNCH_FAILURE_FATAL the run aborts, killing anything already started.
"""

import logging
import subprocess
import time
from typing import Iterable, Optional

from config.settings import settings
from jobs.spec import JobSpec
from models.job import JobHandle
from scheduler.base import AbstractReadyQueue, SchedulerError
from scheduler.monitor import CompletionMonitor
from worker.process import ProcessController

logger = logging.getLogger(__name__)


class LaunchError(SchedulerError):
    """A job could not be started and launch failures are fatal."""


class JobLauncher:

    def __init__(
        self,
        controller: ProcessController,
        monitor: CompletionMonitor,
        fail_fast: Optional[bool] = None,
        settle_seconds: Optional[float] = None,
    ):
        self._controller = controller
        self._monitor = monitor
        self._fail_fast = (
            fail_fast if fail_fast is not None else settings.LAUNCH_FAILURE_FATAL
        )
        self._settle_seconds = (
            settle_seconds if settle_seconds is not None
            else settings.LAUNCH_SETTLE_SECONDS
        )

    def launch(
        self, specs: Iterable[JobSpec], ready_queue: AbstractReadyQueue
    ) -> list[JobHandle]:
        """Spawn every spec suspended and insert its handle. Returns the launched handles."""
        launched: list[JobHandle] = []
        for spec in specs:
            logger.info(f"Creating program {spec.name}")
            try:
                process = subprocess.Popen(spec.command, env=self._controller.child_env())
            except OSError as e:
                if self._fail_fast:
                    self._controller.terminate_all()
                    raise LaunchError(f"Could not launch {spec.name}: {e}") from e
                logger.error(f"Could not launch {spec.name}, skipping it: {e}")
                continue

            job = JobHandle(
                pid=process.pid,
                name=spec.name,
                burst_length=spec.burst_length,
            )
            self._controller.register(job, process)
            self._controller.hold(job)
            self._monitor.watch(job, process)
            ready_queue.insert(job)
            launched.append(job)

        if launched and self._settle_seconds > 0:
            time.sleep(self._settle_seconds)
        return launched
