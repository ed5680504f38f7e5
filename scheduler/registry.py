"""
Ready queue factory — maps policy names to queue classes.

This is the Factory pattern: instead of writing if/elif chains everywhere,
you have ONE place that knows how to create ready queues.
"""

from typing import Optional

from config.settings import settings
from models.enums import SchedulingPolicy
from scheduler.base import AbstractReadyQueue
from scheduler.fifo import FIFOQueue
from scheduler.sjf import SJFQueue
from scheduler.mlfq import MultiLevelQueue
from scheduler.round_robin import RoundRobinQueue


_REGISTRY: dict[SchedulingPolicy, type[AbstractReadyQueue]] = {
    SchedulingPolicy.FIFO: FIFOQueue,
    SchedulingPolicy.SJF: SJFQueue,
    SchedulingPolicy.ROUND_ROBIN: RoundRobinQueue,
    SchedulingPolicy.MLFQ: MultiLevelQueue,
}


def create_ready_queue(
    policy: Optional[SchedulingPolicy] = None, tiers: Optional[int] = None
) -> AbstractReadyQueue:
    """
    Create an empty ready queue for the given policy (settings.DEFAULT_POLICY if omitted).

    For MLFQ, `tiers` sets the number of priority levels
    (defaults to settings.MLFQ_TIERS). All other policies ignore it.
    """
    if policy is None:
        policy = settings.DEFAULT_POLICY
    cls = _REGISTRY.get(policy)
    if cls is None:
        raise ValueError(f"Unknown scheduling policy: {policy}")

    if policy == SchedulingPolicy.MLFQ:
        return cls(tiers=tiers if tiers is not None else settings.MLFQ_TIERS)
    return cls()
