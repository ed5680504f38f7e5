"""
Tests for the FIFO ready queue.

FIFO is a plain queue: jobs come out in the same order they went in.
These tests verify that guarantee and the empty-queue contract.
"""

import pytest

from models.job import JobHandle
from scheduler.base import EmptyQueueError, SchedulerError
from scheduler.fifo import FIFOQueue


def _make_job(name: str, **kwargs) -> JobHandle:
    """Helper to create a JobHandle with sensible defaults."""
    return JobHandle(
        pid=kwargs.get("pid", abs(hash(name)) % 30000 + 2),
        name=name,
        burst_length=kwargs.get("burst_length"),
    )


def test_remove_order_matches_insert_order():
    """Core FIFO guarantee: first in, first out."""
    queue = FIFOQueue()
    jobs = [_make_job(name) for name in ("first", "second", "third")]
    for job in jobs:
        queue.insert(job)

    assert [queue.remove_front() for _ in jobs] == jobs
    assert queue.is_empty()


def test_peek_on_empty_returns_none():
    assert FIFOQueue().peek_front() is None


def test_remove_from_empty_is_a_contract_violation():
    queue = FIFOQueue()
    with pytest.raises(EmptyQueueError):
        queue.remove_front()


def test_peek_is_idempotent():
    queue = FIFOQueue()
    queue.insert(_make_job("a"))
    queue.insert(_make_job("b"))

    first = queue.peek_front()
    assert queue.peek_front() is first
    assert queue.peek_front() is first  # still "a", not consumed
    assert queue.size() == 2


def test_size_tracks_insert_and_remove():
    queue = FIFOQueue()
    assert queue.size() == 0

    queue.insert(_make_job("a"))
    assert queue.size() == 1

    queue.insert(_make_job("b"))
    assert queue.size() == 2

    queue.remove_front()
    assert queue.size() == 1


def test_ignores_burst_length():
    """FIFO doesn't care about burst length, only arrival order."""
    queue = FIFOQueue()
    queue.insert(_make_job("long", burst_length=10))
    queue.insert(_make_job("short", burst_length=1))

    assert queue.remove_front().name == "long"
    assert queue.remove_front().name == "short"


def test_is_not_preemptive():
    queue = FIFOQueue()
    job = _make_job("a")
    queue.insert(job)

    assert queue.preemptive is False
    with pytest.raises(SchedulerError):
        queue.preempt(job)


def test_policy_name():
    assert FIFOQueue().policy_name == "fifo"
