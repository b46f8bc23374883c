from __future__ import annotations

import asyncio
import random

import pytest

from fx_series.utils import concurrency
from fx_series.utils.concurrency import BoundedScheduler, run_bounded


def _value(value):
    async def task():
        return value

    return task


def test_run_bounded_returns_results_in_order() -> None:
    tasks = [_value(1), _value(2), _value(3)]

    assert asyncio.run(run_bounded(tasks, 2)) == [1, 2, 3]


def test_limit_larger_than_task_count() -> None:
    assert asyncio.run(run_bounded([_value("a"), _value("b")], 10)) == ["a", "b"]


def test_single_task() -> None:
    assert asyncio.run(run_bounded([_value("single")], 1)) == ["single"]


def test_empty_task_list() -> None:
    assert asyncio.run(run_bounded([], 3)) == []


def test_limit_must_be_positive() -> None:
    with pytest.raises(ValueError):
        BoundedScheduler(0)


@pytest.mark.parametrize("limit, count", [(1, 5), (3, 10), (4, 2), (10, 10)])
def test_in_flight_tasks_never_exceed_limit(limit: int, count: int) -> None:
    in_flight = 0
    peak = 0

    def make(index: int):
        async def task() -> int:
            nonlocal in_flight, peak
            in_flight += 1
            peak = max(peak, in_flight)
            await asyncio.sleep(0.01)
            in_flight -= 1
            return index

        return task

    results = asyncio.run(run_bounded([make(i) for i in range(count)], limit))

    assert results == list(range(count))
    assert peak == min(limit, count)


def test_results_keep_submission_order_with_random_delays() -> None:
    rng = random.Random(42)
    delays = [rng.uniform(0, 0.02) for _ in range(20)]

    def make(index: int):
        async def task() -> int:
            await asyncio.sleep(delays[index])
            return index

        return task

    results = asyncio.run(run_bounded([make(i) for i in range(20)], 4))

    assert results == list(range(20))


def test_failure_surfaces_that_error() -> None:
    error = RuntimeError("Failed")

    async def failing():
        raise error

    with pytest.raises(RuntimeError, match="Failed") as exc_info:
        asyncio.run(run_bounded([_value(1), failing, _value(3)], 2))

    assert exc_info.value is error


def _failure_scenario(completed: list[int], *, cancel_pending: bool):
    def make(index: int, delay: float):
        async def task() -> int:
            await asyncio.sleep(delay)
            completed.append(index)
            return index

        return task

    async def failing():
        raise ValueError("boom")

    tasks = [make(0, 0.02), failing] + [make(i, 0.01) for i in range(2, 6)]

    async def _run() -> None:
        with pytest.raises(ValueError, match="boom"):
            await run_bounded(tasks, 2, cancel_pending=cancel_pending)
        # Give any background workers time to finish.
        await asyncio.sleep(0.3)

    asyncio.run(_run())


def test_sibling_workers_keep_running_after_failure() -> None:
    completed: list[int] = []

    _failure_scenario(completed, cancel_pending=False)

    assert completed == [0, 2, 3, 4, 5]


def test_cancel_pending_stops_sibling_workers() -> None:
    completed: list[int] = []

    _failure_scenario(completed, cancel_pending=True)

    assert completed == []


def test_secondary_failures_are_discarded() -> None:
    async def first():
        await asyncio.sleep(0.01)
        raise LookupError("first")

    async def second():
        await asyncio.sleep(0.05)
        raise TypeError("second")

    async def _run() -> None:
        with pytest.raises(LookupError, match="first") as exc_info:
            await run_bounded([first, second], 2)
        await asyncio.sleep(0.1)
        assert not isinstance(exc_info.value, TypeError)

    asyncio.run(_run())


def test_background_workers_are_held_until_they_finish() -> None:
    finished: list[str] = []

    async def fail():
        raise LookupError("boom")

    async def slow():
        await asyncio.sleep(0.05)
        finished.append("slow")

    async def _run() -> None:
        before = set(concurrency._RUNNING_WORKERS)
        with pytest.raises(LookupError):
            await run_bounded([fail, slow], 2)
        assert len(concurrency._RUNNING_WORKERS - before) == 1
        await asyncio.sleep(0.1)
        assert concurrency._RUNNING_WORKERS - before == set()

    asyncio.run(_run())

    assert finished == ["slow"]
