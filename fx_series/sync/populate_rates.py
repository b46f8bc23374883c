"""Sync yesterday's and the latest exchange rates into per-currency files."""

from __future__ import annotations

import argparse
import asyncio
from dataclasses import dataclass
from datetime import date
from typing import Iterable, Sequence

import httpx

from fx_series.ingestion.client import RatesClient
from fx_series.settings import Settings
from fx_series.storage.line_sink import append_line, write_line
from fx_series.sync.fetcher import RatesFetcher
from fx_series.utils.currencies import QUOTES
from fx_series.utils.dates import parse_date, yesterday
from fx_series.utils.logger import get_logger

LOGGER = get_logger(__name__)

__all__ = ["SyncResult", "sync_rates", "sync_historical", "sync_latest", "parse_args", "main"]


@dataclass(slots=True)
class SyncResult:
    historical: int = 0
    latest: int = 0

    @property
    def total(self) -> int:
        return self.historical + self.latest


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description=__doc__,
        epilog="Configured through FX_API_BASE_URL, FX_API_ACCESS_KEY and FX_DATA_DIR.",
    )
    parser.add_argument(
        "--date",
        type=parse_date,
        default=None,
        help="Historical day to append (YYYY-MM-DD, default: yesterday in UTC)",
    )
    return parser.parse_args(argv)


def _fetcher(client: RatesClient, settings: Settings, quotes: Iterable[str]) -> RatesFetcher:
    return RatesFetcher(client, quotes, batch_size=settings.batch_size)


async def _sync_historical(
    fetcher: RatesFetcher, settings: Settings, day: str | date | None
) -> int:
    url = settings.historical_url(parse_date(day) if day else yesterday())
    results = await fetcher.run(url, settings.history_path, append_line)
    return len(results)


async def _sync_latest(fetcher: RatesFetcher, settings: Settings) -> int:
    results = await fetcher.run(settings.latest_url(), settings.latest_path, write_line)
    return len(results)


async def _sync_rates(
    settings: Settings,
    *,
    day: str | date | None,
    quotes: Iterable[str],
    transport: httpx.AsyncBaseTransport | None,
) -> SyncResult:
    result = SyncResult()
    async with RatesClient(settings.retry_policy(), transport=transport) as client:
        fetcher = _fetcher(client, settings, quotes)
        result.historical = await _sync_historical(fetcher, settings, day)
        result.latest = await _sync_latest(fetcher, settings)
    return result


def sync_historical(
    settings: Settings | None = None,
    *,
    day: str | date | None = None,
    quotes: Iterable[str] = QUOTES,
    transport: httpx.AsyncBaseTransport | None = None,
) -> int:
    """Append the rates for ``day`` (yesterday in UTC by default) to the history files."""

    resolved = settings or Settings.from_env()

    async def _run() -> int:
        async with RatesClient(resolved.retry_policy(), transport=transport) as client:
            return await _sync_historical(_fetcher(client, resolved, quotes), resolved, day)

    written = asyncio.run(_run())
    LOGGER.info("Appended %s historical rate lines under %s", written, resolved.data_dir)
    return written


def sync_latest(
    settings: Settings | None = None,
    *,
    quotes: Iterable[str] = QUOTES,
    transport: httpx.AsyncBaseTransport | None = None,
) -> int:
    """Overwrite the latest-rate files with the current snapshot."""

    resolved = settings or Settings.from_env()

    async def _run() -> int:
        async with RatesClient(resolved.retry_policy(), transport=transport) as client:
            return await _sync_latest(_fetcher(client, resolved, quotes), resolved)

    written = asyncio.run(_run())
    LOGGER.info("Wrote %s latest rate lines under %s", written, resolved.data_dir)
    return written


def sync_rates(
    settings: Settings | None = None,
    *,
    day: str | date | None = None,
    quotes: Iterable[str] = QUOTES,
    transport: httpx.AsyncBaseTransport | None = None,
) -> SyncResult:
    """Run the daily job: historical append first, then the latest overwrite.

    Settings are read from the environment when not supplied, so a missing
    variable fails before any request is made.
    """

    resolved = settings or Settings.from_env()
    result = asyncio.run(_sync_rates(resolved, day=day, quotes=quotes, transport=transport))
    LOGGER.info(
        "Synced rates under %s (historical=%s, latest=%s)",
        resolved.data_dir,
        result.historical,
        result.latest,
    )
    return result


def main(argv: Sequence[str] | None = None) -> int:
    args = parse_args(argv)
    try:
        sync_rates(day=args.date)
    except Exception:
        LOGGER.exception("Rate sync failed")
        return 1
    return 0


if __name__ == "__main__":  # pragma: no cover - CLI entry point
    raise SystemExit(main())
