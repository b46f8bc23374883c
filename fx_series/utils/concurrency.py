"""Bounded-concurrency runner for independent async tasks."""

from __future__ import annotations

import asyncio
from typing import Any, Awaitable, Callable, Sequence

from fx_series.utils.logger import get_logger

LOGGER = get_logger(__name__)

Task = Callable[[], Awaitable[Any]]

# Strong references to workers until they finish; the loop only keeps weak ones.
_RUNNING_WORKERS: set[asyncio.Future] = set()


class BoundedScheduler:
    """Run zero-argument async tasks with at most ``limit`` of them in flight.

    Workers share a single cursor over the task list: each one claims the next
    index, awaits that task, stores the outcome at the same index and repeats
    until every index has been claimed. Results therefore keep submission
    order whatever the completion order.

    The first task failure becomes the outcome of :meth:`run`. By default the
    remaining workers are left running in the background: they keep claiming
    and executing tasks, and whatever they produce afterwards (results or
    further errors) is discarded. Pass ``cancel_pending=True`` to cancel them
    instead.
    """

    def __init__(self, limit: int, *, cancel_pending: bool = False) -> None:
        if limit < 1:
            raise ValueError("limit must be a positive integer")
        self.limit = limit
        self.cancel_pending = cancel_pending

    async def run(self, tasks: Sequence[Task]) -> list[Any]:
        tasks = list(tasks)
        results: list[Any] = [None] * len(tasks)
        if not tasks:
            return results

        cursor = 0
        failed = False

        async def worker() -> None:
            nonlocal cursor
            while cursor < len(tasks):
                # Claim and advance with no await in between.
                index = cursor
                cursor += 1
                try:
                    outcome = await tasks[index]()
                except Exception:
                    if failed:
                        LOGGER.debug("Discarding failure of task %s after the run failed", index)
                    raise
                if not failed:
                    results[index] = outcome

        workers = [
            asyncio.ensure_future(worker()) for _ in range(min(self.limit, len(tasks)))
        ]
        for future in workers:
            _RUNNING_WORKERS.add(future)
            future.add_done_callback(_consume_outcome)
        try:
            await asyncio.gather(*workers)
        except BaseException:
            failed = True
            if self.cancel_pending:
                for future in workers:
                    future.cancel()
            raise
        return results


def _consume_outcome(future: asyncio.Future) -> None:
    _RUNNING_WORKERS.discard(future)
    # Mark background failures as retrieved so asyncio does not report them.
    if not future.cancelled():
        future.exception()


async def run_bounded(
    tasks: Sequence[Task], limit: int, *, cancel_pending: bool = False
) -> list[Any]:
    """Run ``tasks`` with at most ``limit`` concurrently; see :class:`BoundedScheduler`."""

    return await BoundedScheduler(limit, cancel_pending=cancel_pending).run(tasks)


__all__ = ["BoundedScheduler", "Task", "run_bounded"]
