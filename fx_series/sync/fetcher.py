"""Fetch one endpoint and fan its lines out to per-currency files."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Iterable

from fx_series.ingestion.client import RatesClient
from fx_series.ingestion.transform import to_lines
from fx_series.settings import DEFAULT_BATCH_SIZE
from fx_series.storage.line_sink import LineSink
from fx_series.utils.concurrency import run_bounded
from fx_series.utils.logger import get_logger

LOGGER = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class WriteTask:
    """One pending write: ``sink(path, line)`` when called."""

    path: Path
    line: str
    sink: LineSink

    async def __call__(self) -> Any:
        return await self.sink(self.path, self.line)


class RatesFetcher:
    """Fetch a snapshot, keep the allowed quotes and write one line per currency."""

    def __init__(
        self,
        client: RatesClient,
        quotes: Iterable[str],
        *,
        batch_size: int = DEFAULT_BATCH_SIZE,
    ) -> None:
        if batch_size < 1:
            raise ValueError("batch_size must be a positive integer")
        self.client = client
        self.quotes = frozenset(quotes)
        self.batch_size = batch_size

    def build_tasks(
        self, lines: Iterable[tuple[str, str]], path_for: Callable[[str], Path], sink: LineSink
    ) -> list[WriteTask]:
        return [WriteTask(path=path_for(currency), line=line, sink=sink) for currency, line in lines]

    async def run(self, url: str, path_for: Callable[[str], Path], sink: LineSink) -> list[Any]:
        """Run the fetch → transform → write pipeline for ``url``.

        Returns the sink outcomes in currency order. Fetch failures and the
        first write failure propagate unchanged.
        """

        snapshot = await self.client.fetch(url)
        lines = to_lines(snapshot, self.quotes)
        tasks = self.build_tasks(lines, path_for, sink)
        results = await run_bounded(tasks, self.batch_size)
        LOGGER.info("Wrote %s currency lines for %s", len(tasks), snapshot.date)
        return results


__all__ = ["RatesFetcher", "WriteTask"]
