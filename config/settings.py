"""
Centralized configuration using pydantic-settings.

How it works:
- Reads environment variables automatically (e.g., DEFAULT_QUANTUM_MS env var → Settings.DEFAULT_QUANTUM_MS)
- Falls back to defaults defined here if env vars are not set
- Can also read from a .env file in the project root

Every module imports `settings` from here instead of hardcoding values.
Command-line arguments override these per run (the quantum, the tier count).
"""

import signal

from pydantic import field_validator
from pydantic_settings import BaseSettings

from models.enums import SchedulingPolicy


class Settings(BaseSettings):
    # ── Scheduler ───────────────────────────────────────────────
    DEFAULT_POLICY: SchedulingPolicy = SchedulingPolicy.FIFO  # create_ready_queue() with no policy
    DEFAULT_QUANTUM_MS: int = 50       # Round Robin / MLFQ time slice
    MLFQ_TIERS: int = 2                # number of priority tiers in MLFQ
    SETTLE_DELAY_MS: float = 1.0       # grace period after pausing a job

    # ── Process control ─────────────────────────────────────────
    PAUSE_SIGNAL: str = "SIGSTOP"      # SIGUSR1 for children that stop themselves
    LAUNCH_SETTLE_SECONDS: float = 0.0  # delay between launching and scheduling
    LAUNCH_FAILURE_FATAL: bool = False  # abort the run if any job fails to launch
    STOP_TIMEOUT_MS: int = 2000        # wait for a SIGUSR1-mode child to stop itself
    REAP_TIMEOUT_MS: int = 1000        # wait for a killed child to be reaped

    # ── App ─────────────────────────────────────────────────────
    LOG_LEVEL: str = "INFO"

    @field_validator("PAUSE_SIGNAL")
    @classmethod
    def _known_signal(cls, value: str) -> str:
        if not hasattr(signal, value):
            raise ValueError(f"Unknown signal name: {value}")
        return value

    @property
    def default_quantum(self) -> float:
        """Default time quantum in seconds."""
        return self.DEFAULT_QUANTUM_MS / 1000.0

    @property
    def settle_delay(self) -> float:
        return self.SETTLE_DELAY_MS / 1000.0

    @property
    def stop_timeout(self) -> float:
        return self.STOP_TIMEOUT_MS / 1000.0

    @property
    def reap_timeout(self) -> float:
        return self.REAP_TIMEOUT_MS / 1000.0

    @property
    def pause_signal(self) -> signal.Signals:
        return signal.Signals[self.PAUSE_SIGNAL]

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


# Singleton — import this everywhere
settings = Settings()
